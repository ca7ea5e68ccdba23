#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Keyset exception classes.

Every failure of keyset creation is reported through one of these exceptions.
Certificate authority failures use :class:`trustroot.crypto.exceptions.SigningError`.
"""

from typing import Optional

from trustroot.exceptions import TrustError, TrustIOError, TrustValueError


class KeysetValidationError(TrustValueError):
    """Missing or invalid keyset name."""


class KeysetExistsError(TrustError):
    """Keyset of the requested name already exists."""


class KeysetIOError(TrustIOError):
    """Keyset directory or file could not be created, written or listed."""


class ExternalToolError(TrustError):
    """External tool finished with a non-zero return code.

    :ivar stdout: Captured standard output of the tool.
    :ivar stderr: Captured standard error of the tool.
    :ivar return_code: Return code of the tool.
    """

    def __init__(
        self,
        desc: Optional[str] = None,
        stdout: str = "",
        stderr: str = "",
        return_code: int = 0,
    ) -> None:
        super().__init__(desc)
        self.stdout = stdout
        self.stderr = stderr
        self.return_code = return_code


class FetchError(TrustError):
    """Reference keyset could not be fetched."""


class KeysetGenerationError(TrustError):
    """A stage of keyset generation failed.

    The original failure is chained as ``__cause__`` and available as ``error``.

    :ivar stage: Human readable name of the failing stage.
    """

    def __init__(self, stage: str, error: Exception) -> None:
        detail = error.description if isinstance(error, TrustError) else str(error)
        super().__init__(f"{stage}: {detail}")
        self.stage = stage
        self.error = error
