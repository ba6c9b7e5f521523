#!/usr/bin/env python3
# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Commit bot: runs on every push to a PR (synchronize) and as the first step
of PR automation (opened, reopened, ready_for_review).

Performs three independent checks (DCO sign-off, GPG signatures, merge
conflicts). Each check logs its result and posts its own PR comment on
failure. The results are written once to GITHUB_OUTPUT as ``dco``, ``gpg``
and ``merge_conflict`` (``success`` / ``failure``) for bot_on_pr.

Usage:
    python -m contributor_bots.bot_on_commit
"""

import time

from .common.api import post_comment, write_github_output
from .common.commit_checks import (
    build_dco_comment,
    build_gpg_comment,
    build_merge_conflict_comment,
    check_merge_conflict,
    dco_failures,
    gpg_failures,
)
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
from .common.queries import fetch_all_commits

BOT_NAME = "on-commit"

# Written when the bot crashes: block on signing, don't claim a conflict
FAILURE_OUTPUTS = {"dco": "failure", "gpg": "failure", "merge_conflict": "success"}


def to_output_value(passed: bool) -> str:
    return "success" if passed else "failure"


def run_dco_check(ctx: BotContext, commits: list[dict]) -> str:
    failures = dco_failures(commits)
    ctx.logger.info(f"DCO check: {len(commits) - len(failures)}/{len(commits)} passed")
    if failures:
        post_comment(ctx, build_dco_comment(failures, ctx.config))
    return to_output_value(not failures)


def run_gpg_check(ctx: BotContext, commits: list[dict]) -> str:
    failures = gpg_failures(commits)
    ctx.logger.info(f"GPG check: {len(commits) - len(failures)}/{len(commits)} passed")
    if failures:
        post_comment(ctx, build_gpg_comment(failures, ctx.config))
    return to_output_value(not failures)


def run_merge_conflict_check(ctx: BotContext, sleep=time.sleep) -> str:
    conflicts = check_merge_conflict(ctx.client, ctx.owner, ctx.repo, ctx.number,
                                     logger=ctx.logger, sleep=sleep)
    ctx.logger.info(f"Merge conflict check: {'has conflicts' if conflicts else 'no conflicts'}")
    if conflicts:
        post_comment(ctx, build_merge_conflict_comment(ctx.config))
    return to_output_value(not conflicts)


def run(client, event: EventContext, config=None, sleep=time.sleep) -> dict:
    logger = create_logger(BOT_NAME)
    try:
        ctx = build_bot_context(client, event, logger=logger, config=config or load_config())
        commits = fetch_all_commits(ctx.client, ctx.owner, ctx.repo, ctx.number, logger=logger)

        outputs = {
            "dco": run_dco_check(ctx, commits),
            "gpg": run_gpg_check(ctx, commits),
            "merge_conflict": run_merge_conflict_check(ctx, sleep=sleep),
        }
        write_github_output(outputs, logger)
        logger.info("On-commit bot completed")
        return outputs
    except Exception as e:
        number = payload_value(event, "pull_request", "number")
        logger.error(f"Error: {e} (number={number})")
        write_github_output(FAILURE_OUTPUTS, logger)
        raise


def main():
    configure_logging()
    run(GitHubClient.from_env(), load_event_context())


if __name__ == "__main__":
    main()
