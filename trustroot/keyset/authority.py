#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Certificate authority service for keyset roles.

The service mints self-signed root certificates, self-signed leaf
certificates and certificates signed by a parent role. Each primitive
generates a fresh private key and stores ``cert.pem`` and ``privkey.pem``
in the given role directory.
"""

import logging
import os
from datetime import datetime
from typing import Iterable, Optional

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.types import CertificatePublicKeyTypes

from trustroot.crypto.certificate import Certificate, generate_name, utc_now
from trustroot.crypto.crypto_types import TrustObjectIdentifier
from trustroot.crypto.exceptions import SigningError
from trustroot.crypto.keys import KeyType, PrivateKey
from trustroot.exceptions import TrustError
from trustroot.keyset.catalog import CERT_FILE, PRIVATE_KEY_FILE, Role
from trustroot.keyset.identifier import assign_identifier
from trustroot.utils.misc import add_years

logger = logging.getLogger(__name__)

KEY_USAGE_BITS = (
    "digital_signature",
    "content_commitment",
    "key_encipherment",
    "data_encipherment",
    "key_agreement",
    "key_cert_sign",
    "crl_sign",
)


class CertificateTemplate:
    """Fields of a certificate that is about to be issued.

    Combines the keyset subject (organization, organizational unit) with the
    role specific subject, validity and usage.
    """

    def __init__(
        self,
        common_name: str,
        not_valid_before: datetime,
        not_valid_after: datetime,
        organization: Optional[list[str]] = None,
        organizational_unit: Optional[list[str]] = None,
        ca: bool = False,
        key_usage: Iterable[str] = ("digital_signature",),
        extended_key_usage: Iterable[TrustObjectIdentifier] = (),
        key_type: KeyType = KeyType.RSA2048,
    ) -> None:
        self.common_name = common_name
        self.not_valid_before = not_valid_before
        self.not_valid_after = not_valid_after
        self.organization = list(organization or [])
        self.organizational_unit = list(organizational_unit or [])
        self.ca = ca
        self.key_usage = frozenset(key_usage)
        self.extended_key_usage = tuple(extended_key_usage)
        self.key_type = key_type

    @classmethod
    def for_role(
        cls,
        role: Role,
        organization: Optional[list[str]],
        organizational_unit: Optional[list[str]],
        common_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "CertificateTemplate":
        """Build template for a catalog role.

        :param role: Role to issue the certificate for.
        :param organization: X.509 Organization values of the keyset.
        :param organizational_unit: X.509 Organizational Unit values of the keyset.
        :param common_name: Override of the role common name.
        :param now: Start of validity, defaults to current time.
        :return: Certificate template.
        """
        not_before = now or utc_now()
        if isinstance(role.validity, datetime):
            not_after = role.validity
        else:
            not_after = add_years(not_before, role.validity)
        return cls(
            common_name=role.common_name if common_name is None else common_name,
            not_valid_before=not_before,
            not_valid_after=not_after,
            organization=organization,
            organizational_unit=organizational_unit,
            ca=role.ca,
            key_usage=role.key_usage,
            extended_key_usage=role.extended_key_usage,
            key_type=role.key_type,
        )

    @property
    def subject(self) -> x509.Name:
        """X.509 subject name built from the template."""
        config: dict = {}
        if self.organization:
            config["ORGANIZATION_NAME"] = self.organization
        if self.organizational_unit:
            config["ORGANIZATIONAL_UNIT_NAME"] = self.organizational_unit
        config["COMMON_NAME"] = self.common_name
        return generate_name(config)

    def extensions(
        self, public_key: CertificatePublicKeyTypes, issuer_cert: Optional[Certificate] = None
    ) -> list[x509.ExtensionType]:
        """X.509 extensions of the certificate.

        :param public_key: Subject public key (cryptography object).
        :param issuer_cert: Issuer certificate for chained certificates.
        :return: List of extensions.
        """
        extensions: list[x509.ExtensionType] = []
        if self.ca:
            extensions.append(x509.BasicConstraints(ca=True, path_length=None))
        if self.key_usage:
            bits = {bit: bit in self.key_usage for bit in KEY_USAGE_BITS}
            extensions.append(x509.KeyUsage(encipher_only=False, decipher_only=False, **bits))
        if self.extended_key_usage:
            extensions.append(x509.ExtendedKeyUsage(list(self.extended_key_usage)))
        extensions.append(x509.SubjectKeyIdentifier.from_public_key(public_key))
        if issuer_cert is not None:
            extensions.append(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(
                    issuer_cert.get_public_key().key
                )
            )
        return extensions


class CertificateAuthority:
    """Certificate issuing primitives used to populate a keyset."""

    def create_root_ca(
        self, template: CertificateTemplate, out_dir: str, requires_id: bool = False
    ) -> Certificate:
        """Create a self-signed CA certificate with a new key.

        :param template: Certificate template, must have the CA flag set.
        :param out_dir: Role directory to store the certificate and key into.
        :param requires_id: Store a new identifier next to the key material.
        :raises SigningError: Template is not a CA template or signing failed.
        :return: Created certificate.
        """
        if not template.ca:
            raise SigningError(f"Root CA template '{template.common_name}' lacks the CA flag")
        return self._issue(template, out_dir, requires_id=requires_id)

    def create_cert(
        self, template: CertificateTemplate, requires_id: bool, out_dir: str
    ) -> Certificate:
        """Create a self-signed certificate with a new key.

        :param template: Certificate template.
        :param requires_id: Store a new identifier next to the key material.
        :param out_dir: Role directory to store the certificate and key into.
        :raises SigningError: Signing failed.
        :return: Created certificate.
        """
        return self._issue(template, out_dir, requires_id=requires_id)

    def sign_cert(
        self,
        template: CertificateTemplate,
        parent_cert: Certificate,
        parent_key: PrivateKey,
        out_dir: str,
        requires_id: bool = False,
    ) -> Certificate:
        """Create a certificate with a new key, signed by the parent key.

        :param template: Certificate template.
        :param parent_cert: Certificate of the signing authority.
        :param parent_key: Private key of the signing authority.
        :param out_dir: Role directory to store the certificate and key into.
        :param requires_id: Store a new identifier next to the key material.
        :raises SigningError: Parent key does not match its certificate or signing failed.
        :return: Created certificate.
        """
        if not parent_cert.matches_private_key(parent_key):
            raise SigningError(
                f"Private key of '{parent_cert.common_name}' does not match its certificate"
            )
        return self._issue(
            template, out_dir, parent=(parent_cert, parent_key), requires_id=requires_id
        )

    def load_ca(self, role_dir: str) -> tuple[Certificate, PrivateKey]:
        """Load certificate and private key of a role.

        :param role_dir: Role directory.
        :raises SigningError: The key material cannot be read.
        :return: Tuple of certificate and private key.
        """
        try:
            cert = Certificate.load(os.path.join(role_dir, CERT_FILE))
            key = PrivateKey.load(os.path.join(role_dir, PRIVATE_KEY_FILE))
        except TrustError as exc:
            raise SigningError(f"Cannot load CA from {role_dir}: {exc.description}") from exc
        return cert, key

    def _issue(
        self,
        template: CertificateTemplate,
        out_dir: str,
        parent: Optional[tuple[Certificate, PrivateKey]] = None,
        requires_id: bool = False,
    ) -> Certificate:
        try:
            key = PrivateKey.generate(template.key_type)
            public_key = key.get_public_key()
            issuer_cert, issuer_key = parent if parent else (None, key)
            cert = Certificate.generate_certificate(
                subject=template.subject,
                issuer=issuer_cert.subject if issuer_cert else template.subject,
                subject_public_key=public_key,
                issuer_private_key=issuer_key,
                not_valid_before=template.not_valid_before,
                not_valid_after=template.not_valid_after,
                extensions=template.extensions(public_key.key, issuer_cert),
            )
        except (ValueError, TypeError, TrustError) as exc:
            raise SigningError(f"Cannot issue '{template.common_name}': {exc}") from exc

        key.save(os.path.join(out_dir, PRIVATE_KEY_FILE))
        cert.save(os.path.join(out_dir, CERT_FILE))
        if requires_id:
            assign_identifier(out_dir)
        logger.debug(f"Issued '{template.common_name}' into {out_dir}")
        return cert
