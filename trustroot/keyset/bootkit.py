#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Bootkit artifacts built from a keyset by an external tool."""

import logging
from typing import Optional

from trustroot import TRUST_BOOTKIT_TOOL
from trustroot.keyset.exceptions import ExternalToolError
from trustroot.utils.process import run_command

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT = "default"


class BootkitInvoker:
    """Runs the bootkit build tool as ``<tool> <keyset name> <keyset path> <product>``."""

    def __init__(self, tool: Optional[str] = None) -> None:
        self.tool = tool or TRUST_BOOTKIT_TOOL

    def __call__(self, keyset_name: str, keyset_path: str, product_name: str) -> None:
        """Build bootkit artifacts.

        :param keyset_name: Name of the keyset.
        :param keyset_path: Path to the keyset.
        :param product_name: Name of the product the bootkit is built for.
        :raises ExternalToolError: The tool finished with non-zero return code.
        """
        logger.info(f"Building bootkit for keyset {keyset_name}, product {product_name}")
        stdout, stderr, return_code = run_command(
            [self.tool, keyset_name, keyset_path, product_name]
        )
        if return_code != 0:
            raise ExternalToolError(
                f"Failed running {self.tool}:\nstderr: {stderr}\nstdout: {stdout}\n",
                stdout=stdout,
                stderr=stderr,
                return_code=return_code,
            )
