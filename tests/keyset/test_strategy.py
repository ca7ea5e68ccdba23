#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of keyset creation strategies."""

import os
from typing import Any

import pytest

from tests.conftest import BootkitRecorder, write_script
from trustroot.keyset.exceptions import FetchError
from trustroot.keyset.generator import KeysetGenerator
from trustroot.keyset.registry import KeysetRegistry
from trustroot.keyset.strategy import (
    SNAKEOIL_URL,
    CloneStrategy,
    GenerateStrategy,
    select_strategy,
)


def test_select_strategy() -> None:
    snakeoil = select_strategy("snakeoil")
    assert isinstance(snakeoil, CloneStrategy)
    assert snakeoil.url == SNAKEOIL_URL == "https://github.com/project-machine/keys.git"
    assert not snakeoil.guaranteed_rollback
    generate = select_strategy("mykeys")
    assert isinstance(generate, GenerateStrategy)
    assert generate.guaranteed_rollback


def test_select_strategy_keeps_generator(bootkit: BootkitRecorder) -> None:
    generator = KeysetGenerator(bootkit=bootkit)
    strategy = select_strategy("mykeys", generator)
    assert isinstance(strategy, GenerateStrategy)
    assert strategy.generator is generator


def test_clone(tmp_path: Any) -> None:
    args_file = tmp_path / "git.args"
    git = write_script(
        str(tmp_path / "git"), f'echo "$@" > "{args_file}"\nmkdir -p "$3/uefi-pk"'
    )
    target = str(tmp_path / "keys" / "snakeoil")
    CloneStrategy(git=git).create("snakeoil", target)
    assert args_file.read_text().split() == ["clone", SNAKEOIL_URL, target]
    assert os.path.isdir(os.path.join(target, "uefi-pk"))


def test_clone_failure_removes_empty_target(tmp_path: Any) -> None:
    git = write_script(str(tmp_path / "git"), 'mkdir "$3"\necho "fatal: no network" >&2\nexit 128')
    target = str(tmp_path / "snakeoil")
    with pytest.raises(FetchError) as exc_info:
        CloneStrategy(git=git).create("snakeoil", target)
    assert "fatal: no network" in exc_info.value.description
    assert not os.path.exists(target)


def test_clone_failure_leaves_partial_tree(tmp_path: Any) -> None:
    """Only a single non-recursive removal is attempted after a failed clone."""
    git = write_script(str(tmp_path / "git"), 'mkdir -p "$3/partial"\nexit 1')
    target = str(tmp_path / "snakeoil")
    with pytest.raises(FetchError):
        CloneStrategy(git=git).create("snakeoil", target)
    assert os.path.isdir(os.path.join(target, "partial"))


def test_clone_missing_git(tmp_path: Any) -> None:
    with pytest.raises(FetchError):
        CloneStrategy(git=str(tmp_path / "no-git")).create("snakeoil", str(tmp_path / "x"))


def test_snakeoil_never_generates(
    keyset_root: str, tmp_path: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The reserved keyset is cloned, neither catalog generation nor the bootkit runs."""
    git = write_script(str(tmp_path / "git"), 'mkdir -p "$3/manifest-ca"')
    monkeypatch.setattr("trustroot.keyset.strategy.GIT_TOOL", git)
    bootkit = BootkitRecorder()

    def fail_generate(*args: Any, **kwargs: Any) -> None:
        raise AssertionError("generator must not run for snakeoil")

    monkeypatch.setattr(KeysetGenerator, "generate", fail_generate)
    monkeypatch.setattr("trustroot.keyset.generator.BootkitInvoker", lambda: bootkit)

    path = KeysetRegistry().add("snakeoil")
    assert path == os.path.join(keyset_root, "snakeoil")
    assert os.listdir(path) == ["manifest-ca"]
    assert bootkit.calls == []
