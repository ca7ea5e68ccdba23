#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyset role catalog.

Every keyset contains the same set of certificate roles. The roles are
described here as data; the generator walks the catalog in order and
picks the certificate authority primitive from the role's CA flag and
signing parent. Adding a role means adding a :class:`Role` entry, the
generation sequence itself does not change.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from trustroot.crypto.crypto_types import TrustExtendedKeyUsageOID, TrustObjectIdentifier
from trustroot.crypto.keys import KeyType
from trustroot.exceptions import TrustValueError

# Files stored in each role directory
CERT_FILE = "cert.pem"
PRIVATE_KEY_FILE = "privkey.pem"
GUID_FILE = "guid"

# Directory holding signing projects; not a certificate role itself
MANIFEST_DIR = "manifest"

CA_KEY_USAGE = frozenset({"digital_signature", "key_cert_sign", "crl_sign"})
LEAF_KEY_USAGE = frozenset({"digital_signature"})
CODE_SIGNING = (TrustExtendedKeyUsageOID.CODE_SIGNING,)

# Fixed expiry of the SUDI root CA
SUDI_CA_NOT_AFTER = datetime(2099, 12, 31, 23, 0, 0, tzinfo=timezone.utc)


class Role:
    """One certificate role of a keyset.

    :param name: Directory name of the role inside the keyset.
    :param common_name: Subject common name of the role certificate.
    :param ca: Certificate is a certification authority.
    :param validity: Validity in years from now, or a fixed expiry datetime.
    :param key_type: Type of the generated private key.
    :param requires_id: Role carries a persisted unique identifier.
    :param parent: Name of the role whose key signs this role; None for self-signed.
    :param key_usage: Names of the key usage bits set in the certificate.
    :param extended_key_usage: Extended key usage OIDs, empty for none.
    """

    def __init__(
        self,
        name: str,
        common_name: str,
        ca: bool = False,
        validity: Union[int, datetime] = 25,
        key_type: KeyType = KeyType.RSA2048,
        requires_id: bool = False,
        parent: Optional[str] = None,
        key_usage: Optional[Iterable[str]] = None,
        extended_key_usage: Iterable[TrustObjectIdentifier] = (),
    ) -> None:
        self.name = name
        self.common_name = common_name
        self.ca = ca
        self.validity = validity
        self.key_type = key_type
        self.requires_id = requires_id
        self.parent = parent
        self.key_usage = frozenset(
            key_usage if key_usage is not None else (CA_KEY_USAGE if ca else LEAF_KEY_USAGE)
        )
        self.extended_key_usage = tuple(extended_key_usage)

    @property
    def self_signed(self) -> bool:
        """Role certificate is signed by its own key."""
        return self.parent is None

    def __repr__(self) -> str:
        return f"Role({self.name!r})"


def leaf_role(name: str, common_name: str, requires_id: bool) -> Role:
    """Create a code signing role using the shared leaf template."""
    return Role(
        name=name,
        common_name=common_name,
        requires_id=requires_id,
        extended_key_usage=CODE_SIGNING,
    )


# Order matters: a role must come after the role that signs it.
ROLE_CATALOG: tuple[Role, ...] = (
    Role("manifest-ca", "Manifest rootCA", ca=True, key_type=KeyType.SECP384R1),
    Role(
        "sudi-ca", "SUDI rootCA", ca=True, validity=SUDI_CA_NOT_AFTER, key_type=KeyType.SECP384R1
    ),
    Role("uefi-pk", "UEFI PK", ca=True, validity=50, requires_id=True),
    leaf_role("tpmpol-admin", "TPM EAPolicy Admin", requires_id=False),
    leaf_role("tpmpol-luks", "TPM EAPolicy LUKS", requires_id=False),
    leaf_role("uki-tpm", "UKI TPM", requires_id=True),
    leaf_role("uki-limited", "UKI Limited", requires_id=True),
    leaf_role("uki-production", "UKI Production", requires_id=True),
    leaf_role("uefi-db", "UEFI DB", requires_id=True),
    Role("uefi-kek", "UEFI KEK", validity=50, requires_id=True, parent="uefi-pk"),
)

# Role that signs the certificates of signing projects
PROJECT_SIGNING_ROLE = "manifest-ca"


def get_role(name: str, catalog: Iterable[Role] = ROLE_CATALOG) -> Role:
    """Find role by its directory name.

    :param name: Directory name of the role.
    :param catalog: Catalog to search, defaults to the keyset catalog.
    :raises KeyError: Unknown role.
    :return: The role.
    """
    for role in catalog:
        if role.name == name:
            return role
    raise KeyError(name)


def key_dirs(catalog: Iterable[Role] = ROLE_CATALOG) -> list[str]:
    """Directories that make up an empty keyset skeleton."""
    return [role.name for role in catalog] + [MANIFEST_DIR]


def validate_catalog(catalog: Iterable[Role]) -> None:
    """Check that every signing parent is listed before the roles it signs.

    :param catalog: Catalog to check.
    :raises TrustValueError: A parent is missing or listed after its child.
    """
    seen: set[str] = set()
    for role in catalog:
        if role.parent is not None and role.parent not in seen:
            raise TrustValueError(
                f"Role '{role.name}' must be listed after its signing parent '{role.parent}'"
            )
        seen.add(role.name)
