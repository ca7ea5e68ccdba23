#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot cryptographic exceptions module."""

from trustroot.exceptions import TrustError


class TrustCryptoError(TrustError):
    """General Trustroot Crypto Error."""


class SigningError(TrustCryptoError):
    """Certificate could not be created or signed.

    Raised by the certificate authority service when a template is invalid,
    a parent key cannot be read or the signing operation itself fails.
    """


class KeysNotMatchingError(TrustCryptoError):
    """Private key does not belong to the given certificate."""


class InvalidKeyTypeError(TrustCryptoError):
    """Unsupported or invalid cryptographic key type."""
