#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot - keyset and trust-anchor management for secure-boot builds.

The package provisions keysets (self-contained PKI hierarchies with root CAs,
UEFI platform keys, policy certificates and per-project signing material) and
provides a thin command for provisioning a TPM with derived key material.
"""

import os
from typing import Optional, Union

from platformdirs import PlatformDirs


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = "0.1.0"


# Keysets live in the data directory of the "machine" application so that
# the layout is shared with the rest of the machine tooling.
TRUST_PLATFORM_DIRS = PlatformDirs(appname="machine", appauthor=False)

TRUST_DEFAULT_KEYSET_DIR = os.path.join(TRUST_PLATFORM_DIRS.user_data_dir, "trust", "keys")

TRUST_BOOTKIT_TOOL = os.environ.get("TRUST_BOOTKIT_TOOL", "keysetbootkit.sh")
TRUST_TPM_TOOL = os.environ.get("TRUST_TPM_TOOL", "trust-tpm")
TRUST_TPM_DEVICE = os.environ.get("TRUST_TPM_DEVICE", "/dev/tpm0")

TRUST_DEBUG = value_to_bool(os.environ.get("TRUST_DEBUG"))

TRUST_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("TRUST_DEBUG_LOGGING_DISABLED"))
TRUST_DEBUG_LOG_FILE = os.environ.get(
    "TRUST_DEBUG_LOG_FILE",
    os.path.join(PlatformDirs(appname="trust", appauthor=False).user_log_dir, "debug.log"),
)


def get_keyset_root() -> str:
    """Get the base directory that holds all keysets.

    ``TRUST_KEYSET_DIR`` is consulted on every call so the location can be
    redirected at runtime (tests, containers).

    :return: Absolute path to the keyset root directory.
    """
    return os.path.abspath(os.environ.get("TRUST_KEYSET_DIR") or TRUST_DEFAULT_KEYSET_DIR)
