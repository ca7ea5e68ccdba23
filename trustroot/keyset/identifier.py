#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Unique identifiers stored next to role key material.

UEFI variable tooling needs an owner GUID for each enrolled key; signing
projects are identified by a UUID as well.
"""

import logging
import os
import uuid

from trustroot.keyset.catalog import GUID_FILE
from trustroot.utils.misc import write_file

logger = logging.getLogger(__name__)

IDENTIFIER_FILE_MODE = 0o640


def assign_identifier(role_dir: str, file_name: str = GUID_FILE) -> str:
    """Generate a random UUID and store it in the role directory.

    Calling this twice on the same directory replaces the identifier, which
    invalidates anything already bound to the previous value.

    :param role_dir: Directory of the role or project.
    :param file_name: Name of the identifier file, defaults to ``guid``.
    :raises TrustIOError: The identifier cannot be written.
    :return: The generated identifier in canonical textual form.
    """
    identifier = str(uuid.uuid4())
    write_file(identifier, os.path.join(role_dir, file_name), file_mode=IDENTIFIER_FILE_MODE)
    logger.debug(f"Assigned identifier {identifier} to {role_dir}")
    return identifier


def read_identifier(role_dir: str, file_name: str = GUID_FILE) -> str:
    """Read identifier of the role.

    :param role_dir: Directory of the role or project.
    :param file_name: Name of the identifier file, defaults to ``guid``.
    :return: The stored identifier.
    """
    with open(os.path.join(role_dir, file_name), encoding="utf-8") as f:
        return f.read().strip()
