#!/usr/bin/env python3
# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
DCO & GPG verification bot, reported as a single GitHub check run.

Runs on pull_request (opened, synchronize). Fetches every commit, checks
for a DCO sign-off and a verified GPG signature, creates a completed
"DCO & GPG" check run and, on failure, posts one aggregated PR comment.
The overall result is written to GITHUB_OUTPUT as ``dco_gpg_passed``.

Usage:
    python -m contributor_bots.bot_dco_gpg
"""

from datetime import datetime, timezone

from .common.api import post_comment, write_github_output
from .common.commit_checks import (
    build_check_run_output,
    build_signing_failure_comment,
    dco_failures,
    gpg_failures,
)
from .common.config import load_config
from .common.constants import CHECK_RUN_NAME
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

BOT_NAME = "dco-gpg-bot"


def write_result(passed: bool, logger) -> None:
    write_github_output({"dco_gpg_passed": "success" if passed else "failure"}, logger)


def create_check_run(ctx: BotContext, head_sha: str, output) -> None:
    """Create the completed check run. API errors propagate."""
    check_output = {"title": output.title, "summary": output.summary}
    if output.text:
        check_output["text"] = output.text

    ctx.client.create_check_run(
        ctx.owner, ctx.repo,
        name=CHECK_RUN_NAME,
        head_sha=head_sha,
        status="completed",
        conclusion=output.conclusion,
        completed_at=datetime.now(timezone.utc).isoformat(),
        output=check_output,
    )
    ctx.logger.info(f"Check run created: {output.conclusion}")


def verify_pull_request(ctx: BotContext) -> bool:
    """Run both checks for the PR in ``ctx``; returns False for an empty PR."""
    head_sha = ((ctx.pr or {}).get("head") or {}).get("sha")
    if not head_sha:
        ctx.logger.info("Exit: missing head SHA")
        return False

    commits = fetch_all_commits(ctx.client, ctx.owner, ctx.repo, ctx.number, logger=ctx.logger)
    if not commits:
        ctx.logger.info("Exit: no commits on PR")
        return False

    dco = dco_failures(commits)
    gpg = gpg_failures(commits)
    ctx.logger.info(f"DCO check: {len(commits) - len(dco)}/{len(commits)} passed")
    ctx.logger.info(f"GPG check: {len(commits) - len(gpg)}/{len(commits)} passed")
    passed = not dco and not gpg
    ctx.logger.info(f"Results: dco_pass={not dco} gpg_pass={not gpg} passed={passed}")

    create_check_run(ctx, head_sha, build_check_run_output(len(commits), dco, gpg, ctx.config))

    if not passed:
        post_comment(ctx, build_signing_failure_comment(dco, gpg, ctx.config))

    return passed


def run(client, event: EventContext, config=None) -> bool:
    logger = create_logger(BOT_NAME)
    logger.info(f"Payload snapshot: pull={payload_value(event, 'pull_request', 'number')} "
                f"action={payload_value(event, 'action')} "
                f"head={payload_value(event, 'pull_request', 'head', 'sha')}")
    try:
        ctx = build_bot_context(client, event, logger=logger, config=config or load_config())
        passed = verify_pull_request(ctx)
        write_result(passed, logger)
        logger.info("DCO/GPG bot completed")
        return passed
    except Exception as e:
        logger.error(f"Error: {e} (pull={payload_value(event, 'pull_request', 'number')})")
        write_result(False, logger)
        raise


def main():
    configure_logging()
    run(GitHubClient.from_env(), load_event_context())


if __name__ == "__main__":
    main()
