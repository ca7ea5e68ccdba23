#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyset generation.

The generator creates the keyset skeleton, walks the role catalog issuing
certificates, bootstraps the default project and builds the bootkit. The
whole keyset directory is removed again when any of these stages fails.
"""

import logging
import os
import shutil
from types import TracebackType
from typing import Any, Callable, Iterable, Optional, Type

from trustroot.crypto.certificate import utc_now
from trustroot.exceptions import TrustError
from trustroot.keyset.authority import CertificateAuthority, CertificateTemplate
from trustroot.keyset.bootkit import DEFAULT_PRODUCT, BootkitInvoker
from trustroot.keyset.catalog import ROLE_CATALOG, Role, key_dirs, validate_catalog
from trustroot.keyset.exceptions import (
    KeysetGenerationError,
    KeysetIOError,
    KeysetValidationError,
)
from trustroot.keyset.project import bootstrap_default_project
from trustroot.utils.misc import ensure_dir

logger = logging.getLogger(__name__)

KEYSET_DIR_MODE = 0o700
ORGANIZATIONAL_UNIT_PREFIX = "PuzzlesOS Machine Project "


def create_keyset_dir(keyset_path: str) -> None:
    """Create the keyset directory itself.

    :param keyset_path: Path to the keyset.
    :raises KeysetIOError: The path already exists or cannot be created.
    """
    try:
        ensure_dir(keyset_path, dir_mode=KEYSET_DIR_MODE, exist_ok=False)
    except TrustError as exc:
        raise KeysetIOError(exc.description) from exc


def make_key_dirs(keyset_path: str, catalog: Iterable[Role] = ROLE_CATALOG) -> None:
    """Create one directory per role plus the project directory.

    :param keyset_path: Path to an existing keyset directory.
    :param catalog: Role catalog.
    :raises KeysetIOError: Any of the directories cannot be created.
    """
    for dir_name in key_dirs(catalog):
        try:
            ensure_dir(os.path.join(keyset_path, dir_name), dir_mode=KEYSET_DIR_MODE)
        except TrustError as exc:
            raise KeysetIOError(exc.description) from exc


class KeysetRollback:
    """Scope guard removing a keyset directory unless disarmed.

    .. code-block:: python

        with KeysetRollback(path) as rollback:
            populate(path)
            rollback.disarm()
    """

    def __init__(self, keyset_path: str) -> None:
        self.keyset_path = keyset_path
        self.armed = True

    def disarm(self) -> None:
        """Keep the directory on exit."""
        self.armed = False

    def release(self) -> None:
        """Remove the keyset directory tree."""
        logger.warning(f"Removing incomplete keyset {self.keyset_path}")
        try:
            shutil.rmtree(self.keyset_path)
        except OSError as exc:
            logger.error(f"Failed to remove {self.keyset_path}: {exc}")

    def __enter__(self) -> "KeysetRollback":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if self.armed:
            self.release()


class KeysetGenerator:
    """Generates a complete keyset from the role catalog.

    :param authority: Certificate authority service.
    :param bootkit: Callable building bootkit artifacts, ``(name, path, product)``.
    :param catalog: Role catalog, parents listed before their children.
    """

    def __init__(
        self,
        authority: Optional[CertificateAuthority] = None,
        bootkit: Optional[Callable[[str, str, str], None]] = None,
        catalog: Iterable[Role] = ROLE_CATALOG,
    ) -> None:
        self.authority = authority or CertificateAuthority()
        self.bootkit = bootkit or BootkitInvoker()
        self.catalog = tuple(catalog)
        validate_catalog(self.catalog)

    def generate(
        self, name: str, keyset_path: str, organization: Optional[list[str]] = None
    ) -> None:
        """Generate keyset into a new directory.

        :param name: Name of the keyset.
        :param keyset_path: Path of the keyset directory, must not exist.
        :param organization: X.509 Organization values of the keyset certificates.
        :raises KeysetValidationError: Empty keyset name.
        :raises KeysetIOError: The keyset directory cannot be created.
        :raises KeysetGenerationError: A generation stage failed, the directory was removed.
        """
        if not name:
            raise KeysetValidationError("Please specify keyset name")
        create_keyset_dir(keyset_path)

        organizational_unit = [ORGANIZATIONAL_UNIT_PREFIX + name]
        now = utc_now()
        with KeysetRollback(keyset_path) as rollback:
            self._run_stage("Creating key directories", make_key_dirs, keyset_path, self.catalog)
            for role in self.catalog:
                template = CertificateTemplate.for_role(
                    role, organization, organizational_unit, now=now
                )
                self._run_stage(
                    f"Generating {role.name}", self._generate_role, role, template, keyset_path
                )
            self._run_stage(
                "Bootstrapping default project",
                bootstrap_default_project,
                keyset_path,
                self.authority,
            )
            self._run_stage(
                "Building bootkit", self.bootkit, name, keyset_path, DEFAULT_PRODUCT
            )
            rollback.disarm()
        logger.info(f"Keyset {name} created in {keyset_path}")

    def _generate_role(self, role: Role, template: CertificateTemplate, keyset_path: str) -> None:
        role_dir = os.path.join(keyset_path, role.name)
        if role.parent is not None:
            parent_cert, parent_key = self.authority.load_ca(
                os.path.join(keyset_path, role.parent)
            )
            self.authority.sign_cert(
                template, parent_cert, parent_key, role_dir, requires_id=role.requires_id
            )
        elif role.ca:
            self.authority.create_root_ca(template, role_dir, requires_id=role.requires_id)
        else:
            self.authority.create_cert(template, role.requires_id, role_dir)

    @staticmethod
    def _run_stage(stage: str, func: Callable[..., Any], *args: Any) -> Any:
        logger.info(stage)
        try:
            return func(*args)
        except KeysetGenerationError:
            raise
        except (TrustError, OSError) as exc:
            raise KeysetGenerationError(stage, exc) from exc
