#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot pytest configuration and shared fixtures."""

import os
import stat
from typing import Optional

import pytest
from cryptography.hazmat.backends.openssl import backend

from tests.cli_runner import CliRunner

# Disable RSA key blinding to speed up unit tests in cryptography 37+
# https://github.com/pyca/cryptography/issues/7236
setattr(backend, "_rsa_skip_check_key", True)

os.environ["TRUST_DEBUG_LOGGING_DISABLED"] = "True"


class BootkitRecorder:
    """Stand-in for the bootkit build tool recording its calls."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self.error = error

    def __call__(self, keyset_name: str, keyset_path: str, product_name: str) -> None:
        self.calls.append((keyset_name, keyset_path, product_name))
        if self.error:
            raise self.error


def write_script(path: str, body: str) -> str:
    """Write an executable shell script."""
    with open(path, "w", encoding="utf-8") as f:
        f.write("#!/bin/sh\n" + body + "\n")
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR)
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing."""
    return CliRunner()


@pytest.fixture
def keyset_root(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Empty keyset root directory configured through ``TRUST_KEYSET_DIR``."""
    root = tmp_path / "keys"
    root.mkdir()
    monkeypatch.setenv("TRUST_KEYSET_DIR", str(root))
    return str(root)


@pytest.fixture
def bootkit() -> BootkitRecorder:
    """Bootkit recorder that always succeeds."""
    return BootkitRecorder()


@pytest.fixture
def bootkit_tool(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Fake bootkit script storing its arguments into ``bootkit.args``.

    :return: Path to the file with recorded arguments.
    """
    args_file = str(tmp_path / "bootkit.args")
    script = write_script(str(tmp_path / "keysetbootkit.sh"), f'echo "$@" >> "{args_file}"')
    monkeypatch.setattr("trustroot.keyset.bootkit.TRUST_BOOTKIT_TOOL", script)
    return args_file
