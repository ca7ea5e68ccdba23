#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the trust command-line interface."""

import os
from typing import Any

import pytest

from tests.cli_runner import CliRunner
from tests.conftest import write_script
from trustroot import __version__
from trustroot.apps import trust
from trustroot.apps.utils.utils import TrustAppError
from trustroot.crypto.certificate import Certificate
from trustroot.crypto.crypto_types import TrustNameOID
from trustroot.keyset.authority import CertificateAuthority, CertificateTemplate
from trustroot.keyset.catalog import get_role
from trustroot.keyset.exceptions import KeysetExistsError, KeysetIOError, KeysetValidationError


def test_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(trust.main, ["--help"])
    for command in ("keyset", "project", "provision", "tpm-read"):
        assert command in result.output
    assert "├── add" in result.output
    assert "└── tpm-read" in result.output
    cli_runner.invoke(trust.main, [], expected_code=cli_runner.get_help_error_code(False))


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(trust.main, ["--version"])
    assert __version__ in result.output


def test_keyset_list_empty(cli_runner: CliRunner, keyset_root: str) -> None:
    result = cli_runner.invoke(trust.main, ["keyset", "list"])
    assert result.output == ""


def test_keyset_list(cli_runner: CliRunner, keyset_root: str) -> None:
    for name in ("one", "two"):
        os.mkdir(os.path.join(keyset_root, name))
    result = cli_runner.invoke(trust.main, ["keyset", "list"])
    assert sorted(result.output.splitlines()) == ["one", "two"]


def test_keyset_list_missing_root(
    cli_runner: CliRunner, tmp_path: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TRUST_KEYSET_DIR", str(tmp_path / "missing"))
    result = cli_runner.invoke(trust.main, ["keyset", "list"], expected_code=1)
    assert isinstance(result.exception, KeysetIOError)


def test_keyset_add(cli_runner: CliRunner, keyset_root: str, bootkit_tool: str) -> None:
    result = cli_runner.invoke(
        trust.main, ["-v", "keyset", "add", "prod", "--org", "Example Corp", "--org", "Lab"]
    )
    keyset_path = os.path.join(keyset_root, "prod")
    assert keyset_path in result.output
    with open(bootkit_tool, encoding="utf-8") as f:
        assert f.read().split() == ["prod", keyset_path, "default"]
    cert = Certificate.load(os.path.join(keyset_path, "uefi-db", "cert.pem"))
    organizations = cert.subject.get_attributes_for_oid(TrustNameOID.ORGANIZATION_NAME)
    assert [attr.value for attr in organizations] == ["Example Corp", "Lab"]

    result = cli_runner.invoke(trust.main, ["keyset", "list"])
    assert result.output.splitlines() == ["prod"]

    result = cli_runner.invoke(trust.main, ["keyset", "add", "prod"], expected_code=1)
    assert isinstance(result.exception, KeysetExistsError)


def test_keyset_add_invalid_name(cli_runner: CliRunner, keyset_root: str) -> None:
    result = cli_runner.invoke(trust.main, ["keyset", "add", ".."], expected_code=1)
    assert isinstance(result.exception, KeysetValidationError)
    assert os.listdir(keyset_root) == []


def test_keyset_add_nul_in_name(cli_runner: CliRunner, keyset_root: str) -> None:
    result = cli_runner.invoke(trust.main, ["keyset", "add", "bad\x00name"], expected_code=1)
    assert isinstance(result.exception, KeysetValidationError)
    assert os.listdir(keyset_root) == []


def test_keyset_add_long_organization_option(
    cli_runner: CliRunner, keyset_root: str, bootkit_tool: str
) -> None:
    cli_runner.invoke(
        trust.main, ["keyset", "add", "prod", "--organization", "Example Corp", "-o", "Lab"]
    )
    cert = Certificate.load(os.path.join(keyset_root, "prod", "manifest-ca", "cert.pem"))
    organizations = cert.subject.get_attributes_for_oid(TrustNameOID.ORGANIZATION_NAME)
    assert [attr.value for attr in organizations] == ["Example Corp", "Lab"]


def test_keyset_add_bootkit_failure(
    cli_runner: CliRunner, keyset_root: str, tmp_path: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    tool = write_script(str(tmp_path / "keysetbootkit.sh"), "echo no mkosi >&2\nexit 1")
    monkeypatch.setattr("trustroot.keyset.bootkit.TRUST_BOOTKIT_TOOL", tool)
    result = cli_runner.invoke(trust.main, ["keyset", "add", "broken"], expected_code=1)
    assert "no mkosi" in str(result.exception)
    assert os.listdir(keyset_root) == []


@pytest.fixture
def keyset(keyset_root: str) -> str:
    """Keyset containing the manifest root CA only."""
    path = os.path.join(keyset_root, "dev")
    os.makedirs(os.path.join(path, "manifest"))
    template = CertificateTemplate.for_role(get_role("manifest-ca"), ["Example"], None)
    CertificateAuthority().create_root_ca(template, os.path.join(path, "manifest-ca"))
    return path


def test_project_add_list(cli_runner: CliRunner, keyset: str) -> None:
    result = cli_runner.invoke(trust.main, ["project", "list", "dev"])
    assert result.output == ""
    result = cli_runner.invoke(trust.main, ["project", "add", "dev", "snap"])
    assert os.path.join(keyset, "manifest", "snap") in result.output
    result = cli_runner.invoke(trust.main, ["project", "list", "dev"])
    assert result.output.splitlines() == ["snap"]
    result = cli_runner.invoke(trust.main, ["project", "add", "dev", "snap"], expected_code=1)
    assert isinstance(result.exception, KeysetExistsError)


def test_project_unknown_keyset(cli_runner: CliRunner, keyset_root: str) -> None:
    result = cli_runner.invoke(trust.main, ["project", "list", "nope"], expected_code=1)
    assert isinstance(result.exception, TrustAppError)
    result = cli_runner.invoke(trust.main, ["project", "add", "nope", "snap"], expected_code=1)
    assert isinstance(result.exception, TrustAppError)


@pytest.fixture
def tpm_helper(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> str:
    args_file = tmp_path / "tpm.args"
    helper = write_script(
        str(tmp_path / "trust-tpm"),
        f'case "$1" in\n  layout-version) echo 3 ;;\n  ea-version) echo 7 ;;\n'
        f'  provision) echo "$@" > "{args_file}" ;;\nesac',
    )
    monkeypatch.setattr("trustroot.tpm.TRUST_TPM_TOOL", helper)
    return str(args_file)


def test_tpm_read(cli_runner: CliRunner, tpm_helper: str) -> None:
    result = cli_runner.invoke(trust.main, ["tpm-read"])
    assert result.output.splitlines() == ["TPM layout version: 3.", "EA Policy version: 7."]


def test_provision(
    cli_runner: CliRunner,
    keyset: str,
    tpm_helper: str,
    tmp_path: Any,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    cert = os.path.join(keyset, "manifest-ca", "cert.pem")
    key = os.path.join(keyset, "manifest-ca", "privkey.pem")

    monkeypatch.setattr("trustroot.tpm.TRUST_TPM_DEVICE", str(tmp_path / "no-tpm"))
    result = cli_runner.invoke(trust.main, ["provision", cert, key], expected_code=1)
    assert "No TPM.  No other subsystems have been implemented" in str(result.exception)

    device = tmp_path / "tpm0"
    device.write_text("")
    monkeypatch.setattr("trustroot.tpm.TRUST_TPM_DEVICE", str(device))
    cli_runner.invoke(trust.main, ["provision", cert, key])
    with open(tpm_helper, encoding="utf-8") as f:
        assert f.read().split() == ["provision", cert, key]


def test_provision_missing_file(cli_runner: CliRunner, tmp_path: Any) -> None:
    cli_runner.invoke(
        trust.main,
        ["provision", str(tmp_path / "cert.pem"), str(tmp_path / "key.pem")],
        expected_code=2,
    )
