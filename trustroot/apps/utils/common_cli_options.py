#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Shared click options and help formatting of the trust applications."""

import logging
from gettext import gettext
from typing import Any, Callable, Iterator, TypeVar, Union

import click
from click_command_tree import _build_command_tree, _CommandWrapper

from trustroot import __version__ as trust_version

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)

SUMMARY_WIDTH = 78
BRANCH, LAST_BRANCH = "├── ", "└── "
PIPE, SPACE = "│   ", "    "


def trust_apps_common_options(options: FC) -> FC:
    """Add ``--help``, ``--version`` and verbosity switches to a command.

    The verbosity switches store the level into the ``log_level`` parameter.

    :return: click decorator
    """
    decorators = (
        click.option(
            "-v",
            "--verbose",
            "log_level",
            flag_value=logging.INFO,
            help="Print more detailed information",
        ),
        click.option(
            "-vv",
            "--debug",
            "log_level",
            flag_value=logging.DEBUG,
            help="Display more debugging information.",
        ),
        click.version_option(trust_version, "--version"),
        click.help_option("--help"),
    )
    for decorator in reversed(decorators):
        options = decorator(options)
    return options


class CommandsTreeGroup(click.Group):
    """Click group listing all nested commands as a tree in its help."""

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Write the command tree of the root command.

        :param ctx: click Context
        :param formatter: click HelpFormatter
        """
        root = _build_command_tree(ctx.find_root().command)
        with formatter.section(gettext("Commands")):
            formatter.width = 160
            formatter.write_dl(list(_tree_rows(root)), col_max=80)


def _summary(command: click.Command) -> str:
    """First line of the command help, shortened to the summary width."""
    text = getattr(command, "help", None) or command.__doc__ or ""
    line = text.strip().partition("\n")[0]
    if len(line) > SUMMARY_WIDTH:
        line = line[:SUMMARY_WIDTH] + ".."
    return line


def _tree_rows(
    node: _CommandWrapper, indent: str = "", branch: str = ""
) -> Iterator[tuple[str, str]]:
    """Yield ``(tree label, summary)`` rows of the command and its subcommands.

    :param node: command wrapper built by click_command_tree
    :param indent: prefix inherited from the ancestors
    :param branch: connector drawn in front of this node
    """
    yield indent + branch + node.name, _summary(node.command)
    if branch:
        indent += SPACE if branch == LAST_BRANCH else PIPE
    children = sorted(node.children, key=lambda child: child.name)
    for index, child in enumerate(children):
        last = index == len(children) - 1
        yield from _tree_rows(child, indent, LAST_BRANCH if last else BRANCH)
