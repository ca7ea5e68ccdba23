#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot cryptographic type definitions.

This module provides the encodings and aliases of cryptography types used by
the key and certificate wrappers.
"""

from cryptography import utils
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.extensions import Extensions
from cryptography.x509.name import Name
from cryptography.x509.oid import ExtendedKeyUsageOID, ExtensionOID, NameOID, ObjectIdentifier

from trustroot.exceptions import TrustError


class TrustEncoding(utils.Enum):
    """Encoding of stored keys and certificates."""

    PEM = "PEM"
    DER = "DER"

    @staticmethod
    def get_cryptography_encodings(encoding: "TrustEncoding") -> Encoding:
        """Get cryptography library encoding from trustroot encoding.

        :param encoding: Trustroot encoding type to convert.
        :raises TrustError: If the encoding format is not supported by cryptography.
        :return: Corresponding cryptography library encoding.
        """
        cryptography_encoding = {
            TrustEncoding.PEM: Encoding.PEM,
            TrustEncoding.DER: Encoding.DER,
        }.get(encoding)
        if cryptography_encoding is None:
            raise TrustError(f"{encoding} format is not supported by cryptography.")
        return cryptography_encoding

    @staticmethod
    def get_file_encodings(data: bytes) -> "TrustEncoding":
        """Determine encoding type of cryptographic data.

        Data that decodes as UTF-8 and contains a PEM armor marker is PEM,
        everything else is treated as DER.

        :param data: Raw bytes of the data file to analyze for encoding detection.
        :return: Detected encoding type.
        """
        encoding = TrustEncoding.PEM
        try:
            decoded = data.decode("utf-8")
        except UnicodeDecodeError:
            encoding = TrustEncoding.DER
        else:
            if decoded.find("----") == -1:
                encoding = TrustEncoding.DER
        return encoding


TrustExtensions = Extensions
TrustExtensionOID = ExtensionOID
TrustExtendedKeyUsageOID = ExtendedKeyUsageOID
TrustNameOID = NameOID
TrustName = Name
TrustObjectIdentifier = ObjectIdentifier
