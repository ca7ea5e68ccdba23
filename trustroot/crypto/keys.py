#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""Trustroot cryptographic key management.

RSA and ECC private keys of keyset roles are generated, stored as unencrypted
PKCS#8 PEM and read back through the :class:`PrivateKey` interface. Public
keys are only used to verify certificate signatures and key pairs.
"""

import abc
from enum import Enum
from typing import Any, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    load_der_private_key,
    load_pem_private_key,
)
from typing_extensions import Self

from trustroot.crypto.crypto_types import TrustEncoding
from trustroot.crypto.exceptions import InvalidKeyTypeError
from trustroot.exceptions import TrustError, TrustValueError
from trustroot.utils.misc import load_binary, write_file

# Private keys never leave the owner
PRIVATE_KEY_FILE_MODE = 0o600


class KeyType(str, Enum):
    """Key types of the certificate roles."""

    RSA2048 = "rsa2048"
    SECP384R1 = "secp384r1"


class PrivateKey(abc.ABC):
    """Private key abstract base class."""

    key: Any

    @classmethod
    @abc.abstractmethod
    def generate_key(cls) -> Self:
        """Generate a new private key."""

    @property
    @abc.abstractmethod
    def default_hash_algorithm(self) -> hashes.HashAlgorithm:
        """Hash algorithm used when the key signs a certificate."""

    @abc.abstractmethod
    def get_public_key(self) -> "PublicKey":
        """Get public key from the private key."""

    def verify_public_key(self, public_key: "PublicKey") -> bool:
        """Verify that the given public key forms a pair with this private key.

        :param public_key: Public key to verify against this private key.
        :return: True if the keys form a valid pair, False otherwise.
        """
        return self.get_public_key() == public_key

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, self.__class__) and self.get_public_key() == obj.get_public_key()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.key.key_size} bits)"

    def save(self, file_path: str) -> None:
        """Store the key as unencrypted PKCS#8 PEM, readable by the owner only.

        :param file_path: Path to the key file.
        """
        data = self.key.private_bytes(
            encoding=Encoding.PEM,
            format=PrivateFormat.PKCS8,
            encryption_algorithm=NoEncryption(),
        )
        write_file(data, file_path, mode="wb", file_mode=PRIVATE_KEY_FILE_MODE)

    @classmethod
    def load(cls, file_path: str) -> Self:
        """Load the private key from the given file.

        :param file_path: Path to the key file, PEM or DER.
        :return: Loaded private key instance.
        """
        return cls.parse(load_binary(file_path))

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Parse unencrypted private key.

        :param data: Raw key data, PEM or DER.
        :raises TrustError: Invalid key data.
        :raises InvalidKeyTypeError: The key is not of the requested class.
        :return: Private key object.
        """
        loader = {
            TrustEncoding.PEM: load_pem_private_key,
            TrustEncoding.DER: load_der_private_key,
        }[TrustEncoding.get_file_encodings(data)]
        try:
            key = PrivateKey.create(loader(data, None))
        except (ValueError, TypeError, UnsupportedAlgorithm, InvalidKeyTypeError) as exc:
            raise TrustError(f"Cannot load private key: ({str(exc)})") from exc
        if not isinstance(key, cls):
            raise InvalidKeyTypeError(f"Loaded key is not {cls.__name__}: {repr(key)}")
        return key

    @classmethod
    def create(cls, key: Any) -> "PrivateKey":
        """Wrap a cryptography private key.

        :param key: RSA or EC private key object.
        :raises InvalidKeyTypeError: Unsupported private key type provided.
        :return: Private key wrapper.
        """
        if isinstance(key, ec.EllipticCurvePrivateKey):
            return PrivateKeyEcc(key)
        if isinstance(key, rsa.RSAPrivateKey):
            return PrivateKeyRsa(key)
        raise InvalidKeyTypeError(f"Unsupported key type: {str(key)}")

    @staticmethod
    def generate(key_type: Union[KeyType, str]) -> "PrivateKey":
        """Generate a private key of the requested type.

        :param key_type: One of :class:`KeyType` values.
        :raises TrustValueError: Unknown key type.
        :return: Newly generated private key.
        """
        try:
            key_type = KeyType(key_type)
        except ValueError as exc:
            raise TrustValueError(f"Unsupported key type: {key_type}") from exc
        if key_type is KeyType.RSA2048:
            return PrivateKeyRsa.generate_key()
        return PrivateKeyEcc.generate_key()


class PublicKey(abc.ABC):
    """Public key abstract base class."""

    key: Any

    @property
    @abc.abstractmethod
    def public_numbers(self) -> Any:
        """Public numbers of the key."""

    @abc.abstractmethod
    def verify_signature(
        self, signature: bytes, data: bytes, algorithm: hashes.HashAlgorithm
    ) -> bool:
        """Verify signature against input data.

        :param signature: DER encoded signature.
        :param data: Signed data.
        :param algorithm: Hash algorithm used by the signer.
        :return: True if the signature is valid, False otherwise.
        """

    @classmethod
    def create(cls, key: Any) -> "PublicKey":
        """Wrap a cryptography public key.

        :param key: RSA or EC public key object.
        :raises InvalidKeyTypeError: Unsupported public key type provided.
        :return: Public key wrapper.
        """
        if isinstance(key, ec.EllipticCurvePublicKey):
            return PublicKeyEcc(key)
        if isinstance(key, rsa.RSAPublicKey):
            return PublicKeyRsa(key)
        raise InvalidKeyTypeError(f"Unsupported key type: {str(key)}")

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, self.__class__) and self.public_numbers == obj.public_numbers

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.key.key_size} bits)"


class PrivateKeyRsa(PrivateKey):
    """RSA private key, signs with PKCS#1 v1.5 and SHA-256."""

    key: rsa.RSAPrivateKey

    def __init__(self, key: rsa.RSAPrivateKey) -> None:
        self.key = key

    @classmethod
    def generate_key(cls, key_size: int = 2048) -> Self:
        return cls(rsa.generate_private_key(public_exponent=65537, key_size=key_size))

    @property
    def default_hash_algorithm(self) -> hashes.HashAlgorithm:
        return hashes.SHA256()

    def get_public_key(self) -> "PublicKeyRsa":
        return PublicKeyRsa(self.key.public_key())


class PublicKeyRsa(PublicKey):
    """RSA public key."""

    key: rsa.RSAPublicKey

    def __init__(self, key: rsa.RSAPublicKey) -> None:
        self.key = key

    @property
    def public_numbers(self) -> rsa.RSAPublicNumbers:
        return self.key.public_numbers()

    def verify_signature(
        self, signature: bytes, data: bytes, algorithm: hashes.HashAlgorithm
    ) -> bool:
        try:
            self.key.verify(signature, data, padding.PKCS1v15(), algorithm)
        except InvalidSignature:
            return False
        return True


class PrivateKeyEcc(PrivateKey):
    """ECC private key, signs with ECDSA."""

    key: ec.EllipticCurvePrivateKey

    def __init__(self, key: ec.EllipticCurvePrivateKey) -> None:
        self.key = key

    @classmethod
    def generate_key(cls, curve: ec.EllipticCurve = ec.SECP384R1()) -> Self:
        return cls(ec.generate_private_key(curve))

    @property
    def default_hash_algorithm(self) -> hashes.HashAlgorithm:
        return hashes.SHA384() if self.key.key_size >= 384 else hashes.SHA256()

    def get_public_key(self) -> "PublicKeyEcc":
        return PublicKeyEcc(self.key.public_key())


class PublicKeyEcc(PublicKey):
    """ECC public key."""

    key: ec.EllipticCurvePublicKey

    def __init__(self, key: ec.EllipticCurvePublicKey) -> None:
        self.key = key

    @property
    def public_numbers(self) -> ec.EllipticCurvePublicNumbers:
        return self.key.public_numbers()

    def verify_signature(
        self, signature: bytes, data: bytes, algorithm: hashes.HashAlgorithm
    ) -> bool:
        try:
            self.key.verify(signature, data, ec.ECDSA(algorithm))
        except InvalidSignature:
            return False
        return True
