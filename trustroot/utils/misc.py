#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot miscellaneous utilities.

This module provides file system helpers (loading and storing files with
restrictive permissions, searching for files, creating directories) and small
date helpers used throughout the trustroot package.
"""

import json
import logging
import os
from datetime import datetime
from typing import Callable, Optional, Union

import yaml

from trustroot.exceptions import TrustError, TrustIOError

logger = logging.getLogger(__name__)


def load_binary(path: str, search_paths: Optional[list[str]] = None) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the file, relative paths are looked up in the search paths.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :raises TrustIOError: The file cannot be read.
    :return: Content of the file.
    """
    path = find_file(path, search_paths=search_paths)
    logger.debug(f"Loading binary file from {path}")
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise TrustIOError(f"Cannot read file {path}: {exc}") from exc


def write_file(
    data: Union[str, bytes],
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
    file_mode: Optional[int] = None,
) -> int:
    """Write data to a file, creating missing parent directories.

    When ``file_mode`` is given the file permissions are forced to that value
    regardless of the process umask, which is what key material needs.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding, defaults to 'utf-8'.
    :param file_mode: Permission bits of the written file, defaults to None (umask).
    :raises TrustIOError: The file cannot be written.
    :return: Number of characters or bytes written to the file.
    """
    folder = os.path.dirname(path)
    try:
        if folder and not os.path.exists(folder):
            os.makedirs(folder, exist_ok=True)

        logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
        if file_mode is None:
            with open(path, mode, encoding=None if "b" in mode else encoding) as f:
                return f.write(data)

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, file_mode)
        with open(fd, mode, encoding=None if "b" in mode else encoding) as f:
            written = f.write(data)
        os.chmod(path, file_mode)
        return written
    except OSError as exc:
        raise TrustIOError(f"Cannot write file {path}: {exc}") from exc


def ensure_dir(path: str, dir_mode: int = 0o700, exist_ok: bool = True) -> None:
    """Create a directory with exact permission bits.

    Missing parents are created as well, with default permissions.

    :param path: Directory to create.
    :param dir_mode: Permission bits of the directory.
    :param exist_ok: Accept an already existing directory.
    :raises TrustIOError: The directory cannot be created.
    """
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        if exist_ok and os.path.isdir(path):
            return
        os.mkdir(path, dir_mode)
        os.chmod(path, dir_mode)
    except OSError as exc:
        raise TrustIOError(f"Cannot create directory {path}: {exc}") from exc


def get_abs_path(file_path: str, base_dir: Optional[str] = None) -> str:
    """Convert relative or absolute file path to normalized absolute path.

    :param file_path: File path to be converted to absolute path.
    :param base_dir: Base directory to create absolute path, if not specified the system CWD is used.
    :return: Absolute file path.
    """
    if os.path.isabs(file_path):
        return file_path

    return os.path.abspath(os.path.join(base_dir or os.getcwd(), file_path))


def _find_path(
    path: str,
    check_func: Callable[[str], bool],
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find and return the full path to a file or directory.

    Search paths take precedence over current working directory when both are specified.

    :param path: File name, part of file path or full path to search for.
    :param check_func: Function to validate if the found path exists and meets criteria.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path or empty string if not found and raise_exc is False.
    :raises TrustError: Path not found in any of the searched locations.
    """
    if os.path.isabs(path):
        if not check_func(path):
            if raise_exc:
                raise TrustError(f"Path '{path}' not found")
            return ""
        return path
    if search_paths:
        for dir_candidate in search_paths:
            if not dir_candidate:
                continue
            path_candidate = get_abs_path(path, base_dir=dir_candidate)
            if check_func(path_candidate):
                return path_candidate
    if use_cwd and check_func(path):
        return get_abs_path(path)
    searched_in: list[str] = []
    if use_cwd:
        searched_in.append(os.path.abspath(os.curdir))
    if search_paths:
        searched_in.extend(filter(None, search_paths))
    err_str = f"Path '{path}' not found, Searched in: {', '.join(searched_in)}"
    if not raise_exc:
        logger.debug(err_str)
        return ""
    raise TrustError(err_str)


def find_file(
    file_path: str,
    use_cwd: bool = True,
    search_paths: Optional[list[str]] = None,
    raise_exc: bool = True,
) -> str:
    """Find file in filesystem.

    :param file_path: File name, part of file path or full path to search for.
    :param use_cwd: Try current working directory to find the file, defaults to True.
    :param search_paths: List of paths where to search for the file, defaults to None.
    :param raise_exc: Raise exception if file is not found, defaults to True.
    :return: Full absolute path to the found file.
    :raises TrustError: File not found in any of the search locations.
    """
    return _find_path(
        path=file_path,
        check_func=os.path.isfile,
        use_cwd=use_cwd,
        search_paths=search_paths,
        raise_exc=raise_exc,
    )


def load_configuration(path: str, search_paths: Optional[list[str]] = None) -> dict:
    """Load configuration from YAML or JSON file.

    :param path: Path to configuration file (relative or absolute).
    :param search_paths: List of paths where to search for the file, defaults to None.
    :raises TrustError: When file cannot be loaded, parsed, or contains invalid format.
    :return: Content of configuration as dictionary.
    """
    try:
        config = load_binary(path, search_paths=search_paths).decode("utf-8")
    except (TrustError, UnicodeDecodeError) as exc:
        raise TrustError(f"Can't load configuration file: {str(exc)}") from exc

    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except yaml.YAMLError as exc:
            raise TrustError(f"Can't parse configuration file: {path}") from exc

    if not config_data:
        raise TrustError(f"Can't parse configuration file: {path}")
    if not isinstance(config_data, dict):
        raise TrustError(f"Invalid configuration file: {path}")

    return config_data


def add_years(moment: datetime, years: int) -> datetime:
    """Move a datetime by whole calendar years.

    February 29th is normalized to March 1st when the target year is not a leap year.

    :param moment: Starting point.
    :param years: Number of years to add.
    :return: Shifted datetime.
    """
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, month=3, day=1)
