#!/usr/bin/env python3
# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
PR bot: runs after bot_on_commit in the PR automation workflow
(opened, reopened, ready_for_review).

Reads DCO_PASSED, GPG_PASSED and MERGE_CONFLICT (the previous step's
outputs) from the environment, then:

  1. Assigns the PR author (unless already assigned).
  2. Adds "status: needs review" when all three are ``success``,
     otherwise "status: needs revision".

Usage:
    DCO_PASSED=... GPG_PASSED=... MERGE_CONFLICT=... \
        python -m contributor_bots.bot_on_pr
"""

import os

from .common.api import add_assignees
from .common.config import DEFAULT_CONFIG, BotConfig, load_config
from .common.constants import NEEDS_REVIEW, NEEDS_REVISION
from .common.context import (
    BotContext,
    EventContext,
    build_bot_context,
    load_event_context,
    payload_value,
)
from .common.github_api import GitHubClient
from .common.labels import transition_labels
from .common.logs import configure_logging, create_logger
from .common.validation import BotContextError, require_safe_username

BOT_NAME = "on-pr"


def build_label_failure_comment(label: str, error: str,
                                config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        "⚠️ **PR Automation Bot Error**",
        "",
        f"{config.maintainer_team} — I was unable to add the `{label}` label to this PR.",
        "",
        f"**Error:** {error}",
        "",
        "Please add the label manually or check that it exists in the repository.",
    ])


def auto_assign_author(ctx: BotContext) -> bool:
    """Assign the PR author to the PR. Returns True if an assignment was made."""
    author = ((ctx.pr or {}).get("user") or {}).get("login")
    if not author:
        ctx.logger.info("Exit: missing pull request author")
        return False
    try:
        require_safe_username(author, "pr.author")
    except BotContextError as e:
        ctx.logger.info(f"Exit: invalid pr.author {e}")
        return False

    ctx.logger.info(f"Processing PR #{ctx.number} by {author}")

    assignees = ctx.pr.get("assignees") or []
    if any(((a or {}).get("login") or "").lower() == author.lower() for a in assignees):
        ctx.logger.info(f"Author {author} is already assigned")
        return False

    return add_assignees(ctx, [author]).success


def select_status_label(dco: str | None, gpg: str | None, merge_conflict: str | None) -> str:
    """needs review only when every check reported ``success``."""
    if dco == "success" and gpg == "success" and merge_conflict == "success":
        return NEEDS_REVIEW
    return NEEDS_REVISION


def run(client, event: EventContext, config=None, env=None) -> str:
    env = os.environ if env is None else env
    logger = create_logger(BOT_NAME)
    try:
        ctx = build_bot_context(client, event, logger=logger, config=config or load_config())

        auto_assign_author(ctx)

        dco = env.get("DCO_PASSED")
        gpg = env.get("GPG_PASSED")
        merge_conflict = env.get("MERGE_CONFLICT")
        logger.info(f"DCO_PASSED={dco} GPG_PASSED={gpg} MERGE_CONFLICT={merge_conflict}")

        label = select_status_label(dco, gpg, merge_conflict)
        transition_labels(
            ctx,
            lambda error: build_label_failure_comment(label, error, ctx.config),
            add=(label,),
        )
        logger.info("On-PR bot completed")
        return label
    except Exception as e:
        logger.error(f"Error: {e} (number={payload_value(event, 'pull_request', 'number')})")
        raise


def main():
    configure_logging()
    run(GitHubClient.from_env(), load_event_context())


if __name__ == "__main__":
    main()
