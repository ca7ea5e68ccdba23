#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot exception classes.

This module defines the base of the exception hierarchy used throughout the
trustroot package for consistent error handling and reporting.
"""

from typing import Optional

#######################################################################
# # Trustroot Exceptions
#######################################################################


class TrustError(Exception):
    """Trustroot Base Exception.

    Base exception class for all trustroot related errors. All package specific
    exceptions inherit from this class so that the command line front-end can
    report them uniformly.

    :cvar fmt: Default error message format template.
    """

    fmt = "TRUST: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base Trustroot Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class TrustValueError(TrustError, ValueError):
    """Trustroot standard value error."""


class TrustIOError(TrustError, IOError):
    """Trustroot standard IO error.

    Raised when reading or writing files and directories fails.
    """
