#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Registry of keysets stored under the keyset root directory."""

import logging
import os
from typing import Optional

from trustroot import get_keyset_root
from trustroot.keyset.exceptions import KeysetExistsError, KeysetIOError, KeysetValidationError
from trustroot.keyset.strategy import CreationStrategy, select_strategy

logger = logging.getLogger(__name__)


def validate_keyset_name(name: Optional[str]) -> str:
    """Check that the name can be used as a keyset directory name.

    :param name: Keyset name.
    :raises KeysetValidationError: Empty name, NUL or path separator in the name, or a relative
        directory name.
    :return: The validated name.
    """
    if not name:
        raise KeysetValidationError("Please specify keyset name")
    separators = [sep for sep in (os.sep, os.altsep, "\x00") if sep]
    if any(sep in name for sep in separators) or name in (os.curdir, os.pardir):
        raise KeysetValidationError(f"Invalid keyset name: {name!r}")
    return name


class KeysetRegistry:
    """Keysets found in the keyset root directory.

    :param root: Keyset root directory, defaults to the configured one.
    """

    def __init__(self, root: Optional[str] = None) -> None:
        self.root = root or get_keyset_root()

    def path(self, name: str) -> str:
        """Path of the keyset directory."""
        return os.path.join(self.root, name)

    def exists(self, name: str) -> bool:
        """Check whether the keyset exists."""
        return os.path.isdir(self.path(name))

    def list_keysets(self) -> list[str]:
        """List keyset names in directory order.

        :raises KeysetIOError: The keyset root cannot be read.
        :return: Keyset names.
        """
        try:
            return os.listdir(self.root)
        except OSError as exc:
            raise KeysetIOError(f"Failed reading keys directory {self.root!r}: {exc}") from exc

    def add(
        self,
        name: str,
        organization: Optional[list[str]] = None,
        strategy: Optional[CreationStrategy] = None,
    ) -> str:
        """Create a new keyset.

        :param name: Keyset name.
        :param organization: X.509 Organization values of the keyset certificates.
        :param strategy: Creation strategy, selected from the name when not given.
        :raises KeysetValidationError: Invalid name.
        :raises KeysetExistsError: Something already exists under the name.
        :return: Path of the created keyset.
        """
        validate_keyset_name(name)
        keyset_path = self.path(name)
        if os.path.lexists(keyset_path):
            raise KeysetExistsError(f"Keyset {name} already exists")
        strategy = strategy or select_strategy(name)
        logger.debug(f"Creating keyset {name} using {type(strategy).__name__}")
        strategy.create(name, keyset_path, organization)
        return keyset_path
