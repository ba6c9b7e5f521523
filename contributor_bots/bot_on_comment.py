#!/usr/bin/env python3
# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Issue comment bot.

Reads the comment body, parses commands and dispatches to their handlers.
Implemented commands:

  /assign
    - Assign yourself to the issue. The whole comment must be the command.
    - Requires "status: ready for dev" and a skill-level label, enforces the
      open-assignment limit and skill prerequisites
      (see contributor_bots/commands/assign.py).

Usage (from a workflow step on issue_comment):
    python -m contributor_bots.bot_on_comment
"""

import re

from .commands.assign import handle_assign
from .common.config import load_config
from .common.context import (
    BotContext,
    EventContext,
    build_bot_context,
    load_event_context,
    payload_value,
)
from .common.github_api import GitHubClient
from .common.logs import configure_logging, create_logger

BOT_NAME = "on-comment"

ASSIGN_COMMAND = re.compile(r"^\s*/assign\s*$", re.IGNORECASE)

COMMAND_HANDLERS = {
    "assign": handle_assign,
}


def parse_comment(body: str, logger) -> list[str]:
    """Return the commands found in a comment body (exact match only)."""
    if not isinstance(body, str):
        return []
    if ASSIGN_COMMAND.match(body):
        logger.info("parse_comment: detected /assign")
        return ["assign"]
    logger.info(f"parse_comment: no known command {body[:80]!r}")
    return []


def dispatch(ctx: BotContext) -> list:
    """Run every command in the comment; returns the handlers' results."""
    user = (ctx.comment or {}).get("user") or {}
    if not user.get("login"):
        ctx.logger.info("Exit: missing comment user login")
        return []

    if user.get("type") == "Bot":
        ctx.logger.info("Exit: comment authored by bot")
        return []

    commands = parse_comment(ctx.comment.get("body"), ctx.logger)
    if not commands:
        ctx.logger.info("Exit: no known command")
        return []

    results = []
    for command in commands:
        handler = COMMAND_HANDLERS.get(command)
        if handler is None:
            ctx.logger.info(f"Unknown command: {command}")
            continue
        results.append(handler(ctx))
    return results


def run(client, event: EventContext, config=None) -> list:
    logger = create_logger(BOT_NAME)
    try:
        ctx = build_bot_context(client, event, logger=logger, config=config or load_config())
        return dispatch(ctx)
    except Exception as e:
        logger.error(
            f"Error: {e} (status={getattr(e, 'status', None)}, "
            f"number={payload_value(event, 'issue', 'number')}, "
            f"commenter={payload_value(event, 'comment', 'user', 'login')})"
        )
        raise


def main():
    """Main entry point for the comment bot."""
    configure_logging()
    run(GitHubClient.from_env(), load_event_context())


if __name__ == "__main__":
    main()
