#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot certificate management utilities.

This module provides the X.509 certificate wrapper used for keyset material:
certificate generation, loading and storing, and signature validation against
an issuer.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.x509.extensions import ExtensionNotFound
from typing_extensions import Self

from trustroot.crypto.crypto_types import (
    TrustEncoding,
    TrustExtensionOID,
    TrustExtensions,
    TrustName,
    TrustNameOID,
)
from trustroot.crypto.keys import PrivateKey, PublicKey
from trustroot.exceptions import TrustError, TrustValueError
from trustroot.utils.misc import load_binary, write_file

CERTIFICATE_FILE_MODE = 0o640

# Extensions that a relying party must understand to use the certificate
CRITICAL_EXTENSIONS = (x509.BasicConstraints, x509.KeyUsage)


class Certificate:
    """Wrapper for X.509 certificates."""

    def __init__(self, certificate: x509.Certificate) -> None:
        """Initialize Certificate wrapper.

        :param certificate: Cryptography Certificate representation to wrap.
        """
        assert isinstance(certificate, x509.Certificate)
        self.cert = certificate

    @staticmethod
    def generate_certificate(
        subject: x509.Name,
        issuer: x509.Name,
        subject_public_key: PublicKey,
        issuer_private_key: PrivateKey,
        not_valid_before: datetime,
        not_valid_after: datetime,
        extensions: Optional[list[x509.ExtensionType]] = None,
    ) -> "Certificate":
        """Generate X.509 certificate with specified parameters.

        Basic constraints and key usage extensions are marked critical, all
        other extensions are added as non-critical.

        :param subject: Subject name that the CA issues the certificate to.
        :param issuer: Issuer name that issued the certificate.
        :param subject_public_key: Public key of the certificate subject.
        :param issuer_private_key: Private key of the certificate issuer for signing.
        :param not_valid_before: Start of the validity window.
        :param not_valid_after: End of the validity window.
        :param extensions: List of X.509 extensions to include in the certificate.
        :return: Generated X.509 certificate instance.
        """
        crt = x509.CertificateBuilder(
            subject_name=subject,
            issuer_name=issuer,
            not_valid_before=not_valid_before,
            not_valid_after=not_valid_after,
            public_key=subject_public_key.key,
            # we don't pass extensions directly, need to handle the "critical" flag
            extensions=[],
            serial_number=x509.random_serial_number(),
        )

        for ext in extensions or []:
            crt = crt.add_extension(ext, critical=isinstance(ext, CRITICAL_EXTENSIONS))

        return Certificate(
            crt.sign(issuer_private_key.key, issuer_private_key.default_hash_algorithm)
        )

    def save(
        self,
        file_path: str,
        encoding_type: TrustEncoding = TrustEncoding.PEM,
    ) -> None:
        """Save the certificate into file.

        :param file_path: Path to the file where certificate will be stored.
        :param encoding_type: Encoding type for the output file (PEM or DER).
        """
        write_file(
            self.export(encoding_type), file_path, mode="wb", file_mode=CERTIFICATE_FILE_MODE
        )

    @classmethod
    def load(cls, file_path: str) -> Self:
        """Load the Certificate from the given file.

        :param file_path: Path to the file where the certificate is stored.
        :return: Certificate instance loaded from the file.
        """
        data = load_binary(file_path)
        return cls.parse(data=data)

    def export(self, encoding: TrustEncoding = TrustEncoding.PEM) -> bytes:
        """Export certificate to bytes.

        :param encoding: The encoding format to use for export.
        :return: Certificate data as bytes in the specified encoding format.
        """
        return self.cert.public_bytes(TrustEncoding.get_cryptography_encodings(encoding))

    def get_public_key(self) -> PublicKey:
        """Get public key from certificate.

        :return: Public key extracted from the certificate.
        """
        return PublicKey.create(self.cert.public_key())

    @property
    def signature(self) -> bytes:
        """Signature bytes of the certificate."""
        return self.cert.signature

    @property
    def tbs_certificate_bytes(self) -> bytes:
        """The tbsCertificate payload bytes as defined in RFC 5280."""
        return self.cert.tbs_certificate_bytes

    @property
    def signature_hash_algorithm(self) -> Optional[hashes.HashAlgorithm]:
        """Get signature hash algorithm from certificate.

        :return: Hash algorithm instance if supported, None if algorithm is unsupported.
        """
        try:
            return self.cert.signature_hash_algorithm
        except UnsupportedAlgorithm:
            return None

    @property
    def extensions(self) -> TrustExtensions:
        """Certificate extensions."""
        return self.cert.extensions

    @property
    def issuer(self) -> TrustName:
        """Certificate issuer name."""
        return self.cert.issuer

    @property
    def subject(self) -> TrustName:
        """Certificate subject name."""
        return self.cert.subject

    @property
    def common_name(self) -> str:
        """Common name of the subject, empty string when missing."""
        attributes = self.subject.get_attributes_for_oid(TrustNameOID.COMMON_NAME)
        return str(attributes[0].value) if attributes else ""

    @property
    def not_valid_before(self) -> datetime:
        """Certificate's not-valid-before time as UTC datetime."""
        return self.cert.not_valid_before_utc

    @property
    def not_valid_after(self) -> datetime:
        """Certificate's not-valid-after time as UTC datetime."""
        return self.cert.not_valid_after_utc

    def validate(self, issuer_certificate: "Certificate") -> bool:
        """Validate certificate signature against its issuer.

        :param issuer_certificate: Issuer's certificate used for validation.
        :raises TrustError: Signature hash algorithm is unknown.
        :return: True if certificate is valid, False otherwise.
        """
        if self.signature_hash_algorithm is None:
            raise TrustError("Signature hash algorithm is unknown")
        return issuer_certificate.get_public_key().verify_signature(
            self.signature,
            self.tbs_certificate_bytes,
            self.signature_hash_algorithm,
        )

    @property
    def ca(self) -> bool:
        """Check if CA flag is set in certificate.

        :return: True if CA flag is set, False otherwise.
        """
        try:
            extension = self.extensions.get_extension_for_oid(TrustExtensionOID.BASIC_CONSTRAINTS)
            return extension.value.ca  # type: ignore
        except ExtensionNotFound:
            return False

    @property
    def self_signed(self) -> bool:
        """Check if the certificate is self-signed.

        :return: True when issuer equals subject and the signature verifies with its own key.
        """
        return self.issuer == self.subject and self.validate(self)

    def matches_private_key(self, private_key: PrivateKey) -> bool:
        """Check that the private key belongs to this certificate.

        :param private_key: Private key to check.
        :return: True if the certificate carries the public part of the key.
        """
        return private_key.verify_public_key(self.get_public_key())

    def __repr__(self) -> str:
        return f"Certificate, SN:{hex(self.cert.serial_number)}"

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Parse X.509 certificate from bytes array.

        :param data: Certificate data in PEM or DER format.
        :return: Parsed certificate object.
        :raises TrustError: Cannot load certificate due to invalid format or data.
        """
        try:
            cert = {
                TrustEncoding.PEM: x509.load_pem_x509_certificate,
                TrustEncoding.DER: x509.load_der_x509_certificate,
            }[TrustEncoding.get_file_encodings(data)](data)
            return cls(cert)
        except ValueError as exc:
            raise TrustError(f"Cannot load certificate: ({str(exc)})") from exc


X509NameConfig = dict[str, Union[str, list[str]]]


def generate_name(config: X509NameConfig) -> x509.Name:
    """Generate X.509 Name object from configuration.

    Keys are attribute names of :class:`cryptography.x509.NameOID`, values are
    either a single string or a list of strings (multiple attributes of the
    same type, kept in the given order).

    :param config: Configuration for X.509 name attributes.
    :raises TrustValueError: Invalid certificate attribute name provided.
    :return: X.509 Name object with configured attributes.
    """
    attributes: list[x509.NameAttribute] = []
    for key, value in config.items():
        name_oid = getattr(TrustNameOID, key, None)
        if not isinstance(name_oid, x509.ObjectIdentifier):
            raise TrustValueError(f"Invalid value of certificate attribute: {key}")
        values = value if isinstance(value, list) else [value]
        for item in values:
            attributes.append(x509.NameAttribute(name_oid, str(item)))
    return x509.Name(attributes)


def utc_now() -> datetime:
    """Current time in UTC, without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)
