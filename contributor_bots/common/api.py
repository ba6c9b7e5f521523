# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Context-bound GitHub mutations that never raise.

Each wrapper catches any failure of the call, logs it and returns an
:class:`ApiResult`, so callers can decide between a dedicated failure
comment and a best-effort partial-failure report.
"""

import os
from dataclasses import dataclass
from typing import Mapping

from .context import BotContext
from .logs import BotLogger
from .validation import require_non_empty_string, require_safe_username


@dataclass(frozen=True)
class ApiResult:
    success: bool
    error: str | None = None


OK = ApiResult(success=True)


def add_labels(ctx: BotContext, labels: list[str]) -> ApiResult:
    """Add labels to the issue or PR in ``ctx``."""
    if not isinstance(labels, list):
        return ApiResult(False, "labels must be a list")

    try:
        for i, label in enumerate(labels):
            require_non_empty_string(label, f"labels[{i}]")
        ctx.client.add_labels(ctx.owner, ctx.repo, ctx.number, labels)
    except Exception as e:
        ctx.logger.error(f'Could not add labels "{", ".join(map(str, labels))}": {e}')
        return ApiResult(False, str(e))

    ctx.logger.info(f"Added labels: {', '.join(labels)}")
    return OK


def remove_label(ctx: BotContext, label: str) -> ApiResult:
    """Remove a single label from the issue or PR in ``ctx``."""
    try:
        require_non_empty_string(label, "label")
        ctx.client.remove_label(ctx.owner, ctx.repo, ctx.number, label)
    except Exception as e:
        ctx.logger.error(f'Could not remove label "{label}": {e}')
        return ApiResult(False, str(e))

    ctx.logger.info(f"Removed label: {label}")
    return OK


def add_assignees(ctx: BotContext, assignees: list[str]) -> ApiResult:
    """Assign users to the issue or PR in ``ctx``."""
    if not isinstance(assignees, list):
        return ApiResult(False, "assignees must be a list")

    try:
        for i, login in enumerate(assignees):
            require_safe_username(login, f"assignees[{i}]")
        ctx.client.add_assignees(ctx.owner, ctx.repo, ctx.number, assignees)
    except Exception as e:
        ctx.logger.error(f'Could not add assignees "{", ".join(map(str, assignees))}": {e}')
        return ApiResult(False, str(e))

    ctx.logger.info(f"Added assignees: {', '.join(assignees)}")
    return OK


def post_comment(ctx: BotContext, body: str) -> ApiResult:
    """Post a comment on the issue or PR in ``ctx``."""
    try:
        require_non_empty_string(body, "comment body")
        ctx.client.create_comment(ctx.owner, ctx.repo, ctx.number, body)
    except Exception as e:
        ctx.logger.error(f"Could not post comment: {e}")
        return ApiResult(False, str(e))

    ctx.logger.info("Posted comment")
    return OK


def add_reaction(ctx: BotContext, comment_id: int, content: str = "+1") -> ApiResult:
    """React to a comment; callers treat failure as non-fatal."""
    try:
        ctx.client.create_comment_reaction(ctx.owner, ctx.repo, comment_id, content)
    except Exception as e:
        ctx.logger.info(f"Could not add reaction: {e}")
        return ApiResult(False, str(e))

    ctx.logger.info(f"Added {content} reaction to comment")
    return OK


def label_names(entity: Mapping | None) -> list[str]:
    """Label names of an issue or PR; labels may be strings or ``{"name": ...}``."""
    names = []
    for label in (entity or {}).get("labels") or []:
        name = label if isinstance(label, str) else None
        if isinstance(label, dict):
            name = label.get("name")
        if isinstance(name, str):
            names.append(name)
    return names


def has_label(entity: Mapping | None, name: str) -> bool:
    """Case-insensitive label membership test."""
    wanted = name.lower()
    return any(label.lower() == wanted for label in label_names(entity))


def write_github_output(values: Mapping[str, object], logger: BotLogger) -> None:
    """
    Append ``key=value`` lines to the file named by ``GITHUB_OUTPUT``.

    Later workflow steps read them as ``steps.<id>.outputs.<key>``. Outside
    of Actions (no ``GITHUB_OUTPUT``) this is a no-op.
    """
    path = os.environ.get("GITHUB_OUTPUT")
    if not path or not values:
        return

    lines = "".join(f"{key}={_output_value(value)}\n" for key, value in values.items())
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(lines)
    except OSError as e:
        logger.error(f"Failed to write GITHUB_OUTPUT: {e}")
        return

    logger.info(f"Wrote to GITHUB_OUTPUT: {', '.join(values)}")


def _output_value(value: object) -> str:
    """Render an output value; booleans become lowercase."""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
