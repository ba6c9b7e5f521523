# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Label transitions with partial-failure tracking.

A transition removes some labels and adds others. Each operation is
attempted independently; failures are collected rather than rolled back,
and the caller decides when to post the maintainer-tagged report.
"""

from dataclasses import dataclass, field
from typing import Callable

from .api import add_labels, post_comment, remove_label
from .context import BotContext


@dataclass
class TransitionResult:
    failures: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def error(self) -> str:
        """All failures joined into a single line for a comment."""
        return "; ".join(self.failures)


def apply_label_transition(ctx: BotContext, add: tuple[str, ...] = (),
                           remove: tuple[str, ...] = ()) -> TransitionResult:
    """Remove then add labels on ``ctx``'s issue or PR, recording every failure."""
    result = TransitionResult()

    for label in remove:
        outcome = remove_label(ctx, label)
        if not outcome.success:
            result.failures.append(f'Failed to remove "{label}" label: {outcome.error}')

    for label in add:
        outcome = add_labels(ctx, [label])
        if not outcome.success:
            result.failures.append(f'Failed to add "{label}" label: {outcome.error}')

    return result


def report_label_failure(ctx: BotContext, result: TransitionResult,
                         build_comment: Callable[[str], str]) -> bool:
    """
    Post ``build_comment(error)`` if the transition had any failure.

    Returns True when a report was posted.
    """
    if result.success:
        return False

    post_comment(ctx, build_comment(result.error))
    ctx.logger.info("Posted label update failure comment, tagged maintainers")
    return True


def transition_labels(ctx: BotContext, build_comment: Callable[[str], str],
                      add: tuple[str, ...] = (),
                      remove: tuple[str, ...] = ()) -> TransitionResult:
    """Apply a transition and immediately report any failure."""
    result = apply_label_transition(ctx, add=add, remove=remove)
    report_label_failure(ctx, result, build_comment)
    return result
