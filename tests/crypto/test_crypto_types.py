#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the cryptography type aliases and encodings."""

import pytest
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509 import oid

from trustroot.crypto.crypto_types import (
    TrustEncoding,
    TrustExtendedKeyUsageOID,
    TrustExtensionOID,
    TrustNameOID,
)


def test_oid_aliases() -> None:
    assert TrustExtendedKeyUsageOID.CODE_SIGNING == oid.ExtendedKeyUsageOID.CODE_SIGNING
    assert TrustExtensionOID.BASIC_CONSTRAINTS == oid.ExtensionOID.BASIC_CONSTRAINTS
    assert TrustNameOID.COMMON_NAME == oid.NameOID.COMMON_NAME


@pytest.mark.parametrize(
    "data,encoding",
    [
        (b"-----BEGIN CERTIFICATE-----\n", TrustEncoding.PEM),
        (b"\x30\x82\x01\x0a\xff", TrustEncoding.DER),
        (b"plain text", TrustEncoding.DER),
    ],
)
def test_file_encodings(data: bytes, encoding: TrustEncoding) -> None:
    assert TrustEncoding.get_file_encodings(data) == encoding


def test_cryptography_encodings() -> None:
    assert TrustEncoding.get_cryptography_encodings(TrustEncoding.PEM) == Encoding.PEM
    assert TrustEncoding.get_cryptography_encodings(TrustEncoding.DER) == Encoding.DER
