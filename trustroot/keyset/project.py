#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Signing projects of a keyset.

A project lives in ``manifest/<project>`` of a keyset. It holds its own UUID,
a certificate/key pair signed by the manifest root CA (the certificate common
name is the project UUID) and an empty ``sudi`` directory for device
identity certificates issued later.
"""

import logging
import os
from typing import Optional

from trustroot.crypto.crypto_types import TrustNameOID
from trustroot.keyset.authority import CertificateAuthority, CertificateTemplate
from trustroot.keyset.catalog import MANIFEST_DIR, PROJECT_SIGNING_ROLE, leaf_role
from trustroot.keyset.exceptions import KeysetExistsError, KeysetIOError, KeysetValidationError
from trustroot.keyset.identifier import assign_identifier
from trustroot.utils.misc import ensure_dir

logger = logging.getLogger(__name__)

DEFAULT_PROJECT = "default"
PROJECT_ID_FILE = "uuid"
SUDI_DIR = "sudi"
PROJECT_DIR_MODE = 0o700


def project_path(keyset_path: str, name: str) -> str:
    """Path of the project directory inside the keyset."""
    return os.path.join(keyset_path, MANIFEST_DIR, name)


def list_projects(keyset_path: str) -> list[str]:
    """List projects of the keyset.

    :param keyset_path: Path to the keyset.
    :raises KeysetIOError: The manifest directory cannot be read.
    :return: Project names in directory order.
    """
    manifest_dir = os.path.join(keyset_path, MANIFEST_DIR)
    try:
        return os.listdir(manifest_dir)
    except OSError as exc:
        raise KeysetIOError(f"Failed reading projects directory {manifest_dir!r}: {exc}") from exc


def create_project(
    keyset_path: str,
    name: str,
    authority: Optional[CertificateAuthority] = None,
) -> str:
    """Create a signing project in the keyset.

    The project certificate inherits organization and organizational unit
    from the manifest root CA. The function does not clean up after a
    failure; the caller owns the keyset directory.

    :param keyset_path: Path to the keyset.
    :param name: Name of the project.
    :param authority: Certificate authority service, defaults to the standard one.
    :raises KeysetValidationError: Invalid project name.
    :raises KeysetIOError: The keyset has no manifest directory.
    :raises KeysetExistsError: The project already exists.
    :return: Path to the created project.
    """
    if not name or "\x00" in name or os.sep in name or name in (os.curdir, os.pardir):
        raise KeysetValidationError(f"Invalid project name: '{name}'")
    manifest_dir = os.path.join(keyset_path, MANIFEST_DIR)
    if not os.path.isdir(manifest_dir):
        raise KeysetIOError(f"Keyset {keyset_path} has no {MANIFEST_DIR} directory")
    project_dir = project_path(keyset_path, name)
    if os.path.lexists(project_dir):
        raise KeysetExistsError(f"Project {name} already exists")

    ensure_dir(project_dir, dir_mode=PROJECT_DIR_MODE, exist_ok=False)
    ensure_dir(os.path.join(project_dir, SUDI_DIR), dir_mode=PROJECT_DIR_MODE, exist_ok=False)

    project_id = assign_identifier(project_dir, PROJECT_ID_FILE)

    authority = authority or CertificateAuthority()
    ca_cert, ca_key = authority.load_ca(os.path.join(keyset_path, PROJECT_SIGNING_ROLE))
    template = CertificateTemplate.for_role(
        leaf_role(name, project_id, requires_id=False),
        organization=[
            str(attr.value)
            for attr in ca_cert.subject.get_attributes_for_oid(TrustNameOID.ORGANIZATION_NAME)
        ],
        organizational_unit=[
            str(attr.value)
            for attr in ca_cert.subject.get_attributes_for_oid(
                TrustNameOID.ORGANIZATIONAL_UNIT_NAME
            )
        ],
    )
    authority.sign_cert(template, ca_cert, ca_key, project_dir)
    logger.info(f"Project {name} created with UUID {project_id}")
    return project_dir


def bootstrap_default_project(
    keyset_path: str, authority: Optional[CertificateAuthority] = None
) -> str:
    """Create the ``default`` project of a freshly generated keyset."""
    return create_project(keyset_path, DEFAULT_PROJECT, authority=authority)
