#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trust anchor access through the TPM helper tool.

No TPM 2.0 session code lives here. The helper is an assumed interface, not an
existing tool: any program installed as ``trust-tpm`` (or set through
``TRUST_TPM_TOOL``) that answers ``<tool> layout-version``,
``<tool> ea-version`` and ``<tool> provision <cert> <key>`` on standard
output, exiting non-zero on failure, can be plugged in.
"""

import logging
import os
from typing import Optional

from trustroot import TRUST_TPM_DEVICE, TRUST_TPM_TOOL
from trustroot.crypto.certificate import Certificate
from trustroot.crypto.exceptions import KeysNotMatchingError
from trustroot.crypto.keys import PrivateKey
from trustroot.exceptions import TrustError
from trustroot.keyset.exceptions import ExternalToolError
from trustroot.utils.process import run_command

logger = logging.getLogger(__name__)


class Tpm2:
    """TPM 2.0 trust anchor.

    :param tool: Helper program, defaults to ``TRUST_TPM_TOOL``.
    :param device: TPM character device, defaults to ``TRUST_TPM_DEVICE``.
    """

    def __init__(self, tool: Optional[str] = None, device: Optional[str] = None) -> None:
        self.tool = tool or TRUST_TPM_TOOL
        self.device = device or TRUST_TPM_DEVICE

    @property
    def present(self) -> bool:
        """TPM device is available."""
        return os.path.exists(self.device)

    def layout_version(self) -> str:
        """Version of the TPM NV layout."""
        return self._run("layout-version")

    def ea_version(self) -> str:
        """Version of the enhanced authorization policy."""
        return self._run("ea-version")

    def provision(self, cert_path: str, key_path: str) -> None:
        """Provision the TPM with a certificate and its private key.

        :param cert_path: Path to the PEM/DER certificate.
        :param key_path: Path to the private key.
        :raises TrustError: No TPM device found.
        :raises KeysNotMatchingError: The key does not belong to the certificate.
        :raises ExternalToolError: The helper failed.
        """
        if not self.present:
            raise TrustError("No TPM.  No other subsystems have been implemented")
        cert = Certificate.load(cert_path)
        key = PrivateKey.load(key_path)
        if not cert.matches_private_key(key):
            raise KeysNotMatchingError(f"Key {key_path} does not match certificate {cert_path}")
        self._run("provision", cert_path, key_path)
        logger.info(f"TPM provisioned with {cert.common_name}")

    def _run(self, *args: str) -> str:
        stdout, stderr, return_code = run_command([self.tool, *args])
        if return_code != 0:
            raise ExternalToolError(
                f"Failed running {self.tool} {' '.join(args)}:\nstderr: {stderr}\nstdout: {stdout}",
                stdout=stdout,
                stderr=stderr,
                return_code=return_code,
            )
        return stdout.strip()
