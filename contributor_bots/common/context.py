# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Bot context: a validated, typed view of one webhook delivery.

``load_event_context`` reads the raw event the way a workflow step sees it
(``GITHUB_EVENT_NAME``, ``GITHUB_REPOSITORY``, ``GITHUB_EVENT_PATH``).
``build_bot_context`` validates it once per invocation and returns an
immutable :class:`BotContext`; any malformed field raises
:class:`~contributor_bots.common.validation.BotContextError`.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any

from .config import DEFAULT_CONFIG, BotConfig
from .logs import BotLogger, create_logger
from .validation import (
    BotContextError,
    is_safe_search_token,
    require_mapping,
    require_non_empty_string,
    require_positive_int,
)

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")
ISSUE_EVENTS = ("issues", "issue_comment")


@dataclass(frozen=True)
class EventContext:
    """The raw event: name, repository coordinates and webhook payload."""
    event_name: str
    repo: dict
    payload: dict


@dataclass(frozen=True)
class BotContext:
    client: Any
    owner: str
    repo: str
    event_type: str
    number: int
    issue: dict | None = None
    pr: dict | None = None
    comment: dict | None = None
    logger: BotLogger = field(default_factory=lambda: create_logger("bot-helpers"))
    config: BotConfig = DEFAULT_CONFIG

    @property
    def entity(self) -> dict:
        """The issue or pull request this event is about."""
        return self.pr if self.pr is not None else self.issue


def load_event_context() -> EventContext:
    """Read the triggering event from the GitHub Actions environment."""
    event_name = os.environ.get("GITHUB_EVENT_NAME", "")
    repository = os.environ.get("GITHUB_REPOSITORY", "")
    event_path = os.environ.get("GITHUB_EVENT_PATH")

    if not event_path:
        print("ERROR: GITHUB_EVENT_PATH not set", file=sys.stderr)
        sys.exit(1)

    with open(event_path, encoding="utf-8") as f:
        payload = json.load(f)

    owner, _, repo = repository.partition("/")
    return EventContext(event_name=event_name, repo={"owner": owner, "repo": repo},
                        payload=payload)


def build_bot_context(client: Any, event: EventContext | None,
                      logger: BotLogger | None = None,
                      config: BotConfig = DEFAULT_CONFIG) -> BotContext:
    """
    Validate ``client`` and ``event`` and build the bot context.

    Supported events:
      - pull_request / pull_request_target: sets ``number`` and ``pr``
      - issues: sets ``number`` and ``issue``
      - issue_comment: sets ``number``, ``issue`` and ``comment``

    Raises BotContextError for a missing or invalid field, or an unsupported
    event type.
    """
    if client is None:
        raise BotContextError("Bot context invalid: missing or invalid client")
    if not isinstance(event, EventContext):
        raise BotContextError("Bot context invalid: missing or invalid context")
    require_mapping(event.repo, "context.repo")
    require_mapping(event.payload, "context.payload")

    owner = event.repo.get("owner")
    repo = event.repo.get("repo")
    require_non_empty_string(owner, "context.repo.owner")
    require_non_empty_string(repo, "context.repo.repo")
    if not is_safe_search_token(owner) or not is_safe_search_token(repo):
        raise BotContextError("Bot context invalid: owner or repo contains invalid characters")

    require_non_empty_string(event.event_name, "context.eventName")
    event_type = event.event_name
    payload = event.payload

    base = {
        "client": client,
        "owner": owner,
        "repo": repo,
        "event_type": event_type,
        "logger": logger or create_logger("bot-helpers"),
        "config": config,
    }

    if event_type in PULL_REQUEST_EVENTS:
        pr = payload.get("pull_request")
        require_mapping(pr, "context.payload.pull_request")
        require_positive_int(pr.get("number"), "pull_request.number")

        user = pr.get("user")
        if user:
            require_mapping(user, "pull_request.user")
            require_non_empty_string(user.get("login"), "pull_request.user.login")
            if not is_safe_search_token(user["login"]):
                raise BotContextError(
                    "Bot context invalid: pull_request.user.login contains invalid characters"
                )

        return BotContext(number=pr["number"], pr=pr, **base)

    if event_type in ISSUE_EVENTS:
        issue = payload.get("issue")
        require_mapping(issue, "context.payload.issue")
        require_positive_int(issue.get("number"), "issue.number")

        comment = None
        if event_type == "issue_comment":
            comment = payload.get("comment")
            require_mapping(comment, "context.payload.comment")
            require_mapping(comment.get("user"), "context.payload.comment.user")
            login = comment["user"].get("login")
            require_non_empty_string(login, "context.payload.comment.user.login")
            if not is_safe_search_token(login):
                raise BotContextError(
                    "Bot context invalid: comment.user.login contains invalid characters"
                )
            if not isinstance(comment.get("body"), str):
                raise BotContextError("Bot context invalid: comment.body must be a string")

        return BotContext(number=issue["number"], issue=issue, comment=comment, **base)

    raise BotContextError(f'Bot context invalid: unsupported event type "{event_type}"')


def payload_value(event: EventContext | None, *path: str):
    """Best-effort lookup of a nested payload field for error reports."""
    value = getattr(event, "payload", None)
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value
