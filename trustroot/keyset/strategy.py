#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyset creation strategies.

Keysets are normally generated locally. The reserved ``snakeoil`` keyset is a
well known reference hierarchy which is cloned from a git repository instead.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

from trustroot.keyset.exceptions import FetchError
from trustroot.keyset.generator import KeysetGenerator
from trustroot.utils.process import run_command

logger = logging.getLogger(__name__)

SNAKEOIL_KEYSET = "snakeoil"
SNAKEOIL_URL = "https://github.com/project-machine/keys.git"
GIT_TOOL = "git"


class CreationStrategy(ABC):
    """Way of populating a new keyset directory."""

    #: The keyset directory is removed completely when creation fails
    guaranteed_rollback = False

    @abstractmethod
    def create(self, name: str, keyset_path: str, organization: Optional[list[str]] = None) -> None:
        """Populate the keyset.

        :param name: Name of the keyset.
        :param keyset_path: Path of the keyset directory, must not exist.
        :param organization: X.509 Organization values, ignored by strategies that do not
            issue certificates.
        """


class GenerateStrategy(CreationStrategy):
    """Generate a fresh keyset locally."""

    guaranteed_rollback = True

    def __init__(self, generator: Optional[KeysetGenerator] = None) -> None:
        self.generator = generator or KeysetGenerator()

    def create(self, name: str, keyset_path: str, organization: Optional[list[str]] = None) -> None:
        self.generator.generate(name, keyset_path, organization)


class CloneStrategy(CreationStrategy):
    """Clone a ready made keyset from a git repository.

    A failed clone is cleaned up by a single non-recursive removal of the
    target path, a partially populated directory is left behind.
    """

    def __init__(self, url: str = SNAKEOIL_URL, git: Optional[str] = None) -> None:
        self.url = url
        self.git = git or GIT_TOOL

    def create(self, name: str, keyset_path: str, organization: Optional[list[str]] = None) -> None:
        logger.info(f"Cloning keyset {name} from {self.url}")
        stdout, stderr, return_code = run_command([self.git, "clone", self.url, keyset_path])
        if return_code == 0:
            return
        self._remove(keyset_path)
        raise FetchError(
            f"Failed to clone {self.url} into {keyset_path}:\nstderr: {stderr}\nstdout: {stdout}"
        )

    @staticmethod
    def _remove(path: str) -> None:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            elif os.path.lexists(path):
                os.remove(path)
        except OSError as exc:
            logger.warning(f"Could not remove {path}: {exc}")


def select_strategy(name: str, generator: Optional[KeysetGenerator] = None) -> CreationStrategy:
    """Pick the creation strategy for a keyset name.

    :param name: Name of the keyset.
    :param generator: Generator used by the generate strategy.
    :return: Clone strategy for the reserved snakeoil keyset, generate strategy otherwise.
    """
    if name == SNAKEOIL_KEYSET:
        return CloneStrategy()
    return GenerateStrategy(generator)
