#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the keyset role catalog."""

from datetime import datetime, timezone

import pytest

from trustroot.crypto.crypto_types import TrustExtendedKeyUsageOID
from trustroot.crypto.keys import KeyType
from trustroot.exceptions import TrustValueError
from trustroot.keyset.catalog import (
    MANIFEST_DIR,
    ROLE_CATALOG,
    Role,
    get_role,
    key_dirs,
    leaf_role,
    validate_catalog,
)

ROLES_WITH_ID = {"uefi-pk", "uefi-kek", "uefi-db", "uki-tpm", "uki-limited", "uki-production"}


def test_role_names() -> None:
    assert [role.name for role in ROLE_CATALOG] == [
        "manifest-ca",
        "sudi-ca",
        "uefi-pk",
        "tpmpol-admin",
        "tpmpol-luks",
        "uki-tpm",
        "uki-limited",
        "uki-production",
        "uefi-db",
        "uefi-kek",
    ]


def test_identifier_flags() -> None:
    assert {role.name for role in ROLE_CATALOG if role.requires_id} == ROLES_WITH_ID


def test_root_cas() -> None:
    manifest = get_role("manifest-ca")
    sudi = get_role("sudi-ca")
    for role in (manifest, sudi):
        assert role.ca
        assert role.self_signed
        assert role.key_type == KeyType.SECP384R1
        assert "key_cert_sign" in role.key_usage
    assert manifest.validity == 25
    assert sudi.validity == datetime(2099, 12, 31, 23, tzinfo=timezone.utc)


def test_platform_key_and_kek() -> None:
    platform_key = get_role("uefi-pk")
    assert platform_key.ca and platform_key.self_signed
    assert platform_key.validity == 50
    kek = get_role("uefi-kek")
    assert kek.parent == "uefi-pk"
    assert not kek.ca
    assert kek.validity == 50
    assert kek.extended_key_usage == ()


@pytest.mark.parametrize(
    "name",
    ["tpmpol-admin", "tpmpol-luks", "uki-tpm", "uki-limited", "uki-production", "uefi-db"],
)
def test_leaf_roles(name: str) -> None:
    role = get_role(name)
    assert role.self_signed
    assert not role.ca
    assert role.validity == 25
    assert role.key_usage == frozenset({"digital_signature"})
    assert role.extended_key_usage == (TrustExtendedKeyUsageOID.CODE_SIGNING,)


def test_get_role_unknown() -> None:
    with pytest.raises(KeyError):
        get_role("uefi-dbx")


def test_key_dirs() -> None:
    dirs = key_dirs()
    assert dirs[-1] == MANIFEST_DIR
    assert len(dirs) == len(ROLE_CATALOG) + 1


def test_validate_catalog() -> None:
    validate_catalog(ROLE_CATALOG)
    child = Role("child", "Child", parent="parent")
    parent = Role("parent", "Parent", ca=True)
    validate_catalog([parent, child])
    with pytest.raises(TrustValueError):
        validate_catalog([child, parent])
    with pytest.raises(TrustValueError):
        validate_catalog([child])


def test_leaf_role_template() -> None:
    role = leaf_role("extra", "Extra", requires_id=True)
    assert role.requires_id
    assert role.extended_key_usage == (TrustExtendedKeyUsageOID.CODE_SIGNING,)
