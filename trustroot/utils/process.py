#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Helpers for running external tools."""

import logging
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


def run_command(cmd: list[str], cwd: Optional[str] = None) -> tuple[str, str, int]:
    """Run external command and capture its output.

    A command that cannot be started at all (missing executable, no permission)
    is reported the same way as a failing one: return code 127 with the OS
    error text as standard error.

    :param cmd: Command and its arguments.
    :param cwd: Working directory of the command, defaults to current one.
    :return: Tuple of standard output, standard error and return code.
    """
    logger.debug(f"Executing: {' '.join(cmd)}")
    try:
        proc = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, check=False)
    except OSError as exc:
        logger.debug(f"Cannot execute {cmd[0]}: {exc}")
        return "", str(exc), 127
    logger.debug(f"{cmd[0]} finished with return code {proc.returncode}")
    return proc.stdout, proc.stderr, proc.returncode
