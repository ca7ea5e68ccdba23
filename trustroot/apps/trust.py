#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trust command-line interface.

Manages keysets and their signing projects and talks to the TPM trust anchor.
"""

import logging
import sys

import click

from trustroot import TRUST_DEBUG
from trustroot.apps.utils import trust_logger
from trustroot.apps.utils.common_cli_options import CommandsTreeGroup, trust_apps_common_options
from trustroot.apps.utils.utils import TrustAppError, catch_trust_error
from trustroot.keyset.project import create_project, list_projects
from trustroot.keyset.registry import KeysetRegistry
from trustroot.tpm import Tpm2

logger = logging.getLogger(__name__)


@click.group(name="trust", no_args_is_help=True, cls=CommandsTreeGroup)
@trust_apps_common_options
def main(log_level: int) -> int:
    """Manage keysets and trust anchors for secure boot builds."""
    if TRUST_DEBUG:
        log_level = logging.DEBUG
    log_level = log_level or logging.WARNING
    trust_logger.install(level=log_level)
    return 0


@main.group(name="keyset", no_args_is_help=True)
def keyset_group() -> None:
    """Keyset management."""


@keyset_group.command(name="list")
def keyset_list() -> None:
    """List keysets."""
    for name in KeysetRegistry().list_keysets():
        click.echo(name)


@keyset_group.command(name="add", no_args_is_help=True)
@click.argument("name", required=True)
@click.option(
    "-o",
    "--org",
    "--organization",
    "organization",
    multiple=True,
    help="X.509 Organization of the keyset certificates. Can be used multiple times.",
)
def keyset_add(name: str, organization: tuple[str, ...]) -> None:
    """Create a new keyset.

    \b
    NAME    - name of the keyset
    """
    if not organization:
        logger.info("No organization specified, certificates will have no Organization")
    keyset_path = KeysetRegistry().add(name, list(organization) or None)
    click.echo(f"New keyset {name} created in {keyset_path}")


@main.group(name="project", no_args_is_help=True)
def project_group() -> None:
    """Project management within a keyset."""


@project_group.command(name="list", no_args_is_help=True)
@click.argument("keyset", required=True)
def project_list(keyset: str) -> None:
    """List projects of a keyset.

    \b
    KEYSET  - name of the keyset
    """
    registry = KeysetRegistry()
    if not registry.exists(keyset):
        raise TrustAppError(f"Keyset {keyset} does not exist")
    for name in list_projects(registry.path(keyset)):
        click.echo(name)


@project_group.command(name="add", no_args_is_help=True)
@click.argument("keyset", required=True)
@click.argument("name", required=True)
def project_add(keyset: str, name: str) -> None:
    """Create a new project in a keyset.

    \b
    KEYSET  - name of the keyset
    NAME    - name of the project
    """
    registry = KeysetRegistry()
    if not registry.exists(keyset):
        raise TrustAppError(f"Keyset {keyset} does not exist")
    project_path = create_project(registry.path(keyset), name)
    click.echo(f"New project {name} created in {project_path}")


@main.command(name="provision", no_args_is_help=True)
@click.argument("cert", type=click.Path(exists=True, dir_okay=False))
@click.argument("key", type=click.Path(exists=True, dir_okay=False))
def provision(cert: str, key: str) -> None:
    """Provision the TPM with a certificate and its private key.

    \b
    CERT    - path to the certificate
    KEY     - path to the private key
    """
    Tpm2().provision(cert, key)
    click.echo("TPM provisioned")


@main.command(name="tpm-read")
def tpm_read() -> None:
    """Print versions stored in the TPM."""
    tpm = Tpm2()
    click.echo(f"TPM layout version: {tpm.layout_version()}.")
    click.echo(f"EA Policy version: {tpm.ea_version()}.")


@catch_trust_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()  # pragma: no cover
