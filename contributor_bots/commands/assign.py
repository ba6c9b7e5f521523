# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
The /assign command: assign the commenter to the issue.

Gates run in order and the first failing gate posts exactly one comment
and stops the pipeline:

  1. Acknowledge the comment with a +1 reaction (best effort).
  2. Issue already assigned?            -> already-assigned comment
  3. Missing "status: ready for dev"?   -> not-ready comment
  4. No skill-level label?              -> no-skill-level comment (tags maintainers)
  5. Open assignments unverifiable?     -> API-error comment (tags maintainers)
     At or above MAX_OPEN_ASSIGNMENTS?  -> limit-exceeded comment
  6. Prerequisites unverifiable?        -> API-error comment (tags maintainers)
     Prerequisites not met?             -> prerequisite-not-met comment
  7. Assignment API failure?            -> assignment-failure comment (tags maintainers)

On success the user is assigned, "status: ready for dev" is swapped for
"status: in progress" and a welcome comment is posted. Label failures do
not undo the assignment; they are reported to maintainers after the
welcome comment.
"""

from enum import Enum

from ..common.api import add_assignees, add_reaction, has_label, post_comment
from ..common.constants import (
    BLOCKED,
    IN_PROGRESS,
    ISSUE_STATE_CLOSED,
    ISSUE_STATE_OPEN,
    READY_FOR_DEV,
)
from ..common.context import BotContext
from ..common.labels import apply_label_transition, report_label_failure
from ..common.queries import count_issues_by_query
from .assign_comments import (
    MAX_OPEN_ASSIGNMENTS,
    SkillLevel,
    build_already_assigned_comment,
    build_api_error_comment,
    build_assignment_failure_comment,
    build_assignment_limit_exceeded_comment,
    build_label_update_failure_comment,
    build_no_skill_level_comment,
    build_not_ready_comment,
    build_prerequisite_not_met_comment,
    build_welcome_comment,
)


class AssignmentDecision(Enum):
    ASSIGNED = "assigned"
    ALREADY_ASSIGNED = "already_assigned"
    NOT_READY = "not_ready"
    NO_SKILL_LABEL = "no_skill_label"
    LIMIT_EXCEEDED = "limit_exceeded"
    PREREQUISITES_NOT_MET = "prerequisites_not_met"
    API_ERROR = "api_error"
    ASSIGNMENT_FAILED = "assignment_failed"


def get_issue_skill_level(issue: dict) -> SkillLevel | None:
    """
    Return the issue's skill level, checking labels from easiest to hardest.

    If several skill labels are present the easiest one wins.
    """
    for level in SkillLevel:
        if has_label(issue, level.label):
            return level
    return None


def _count(ctx: BotContext, username: str, state: str, label: str | None = None):
    return count_issues_by_query(ctx.client, ctx.owner, ctx.repo, username, state, label,
                                 logger=ctx.logger)


def get_blocked_count(ctx: BotContext, username: str) -> int:
    """Open blocked issues assigned to ``username``; 0 if the lookup fails."""
    result = _count(ctx, username, ISSUE_STATE_OPEN, BLOCKED)
    return result.count if result.verified else 0


def check_issue_state(ctx: BotContext, requester: str) -> SkillLevel | AssignmentDecision:
    """Gates 2-4: unassigned, ready for dev, and carrying a skill label."""
    issue = ctx.issue
    assignees = issue.get("assignees") or []
    if assignees:
        ctx.logger.info(f"Exit: issue already assigned to {[a.get('login') for a in assignees]}")
        post_comment(ctx, build_already_assigned_comment(requester, issue, ctx.owner, ctx.repo))
        return AssignmentDecision.ALREADY_ASSIGNED

    if not has_label(issue, READY_FOR_DEV):
        ctx.logger.info("Exit: issue missing ready for dev label")
        post_comment(ctx, build_not_ready_comment(requester, ctx.owner, ctx.repo))
        return AssignmentDecision.NOT_READY

    skill_level = get_issue_skill_level(issue)
    if skill_level is None:
        ctx.logger.info("Exit: issue has no skill level label")
        post_comment(ctx, build_no_skill_level_comment(requester, ctx.config))
        return AssignmentDecision.NO_SKILL_LABEL

    ctx.logger.info(f"Issue skill level: {skill_level.label}")
    return skill_level


def enforce_assignment_limit(ctx: BotContext, requester: str) -> AssignmentDecision | None:
    """Gate 5. Returns a terminal decision, or None when within the limit."""
    open_count = _count(ctx, requester, ISSUE_STATE_OPEN)
    if not open_count.verified:
        ctx.logger.info("Exit: could not verify open assignments due to API error")
        post_comment(ctx, build_api_error_comment(requester, ctx.config))
        return AssignmentDecision.API_ERROR

    if open_count.count >= MAX_OPEN_ASSIGNMENTS:
        ctx.logger.info(f"Exit: contributor has too many open assignments "
                        f"(max {MAX_OPEN_ASSIGNMENTS}, current {open_count.count})")
        blocked = get_blocked_count(ctx, requester)
        post_comment(ctx, build_assignment_limit_exceeded_comment(
            requester, open_count.count, ctx.owner, ctx.repo, blocked))
        return AssignmentDecision.LIMIT_EXCEEDED

    ctx.logger.info(f"Open assignment count OK (max {MAX_OPEN_ASSIGNMENTS}, "
                    f"current {open_count.count})")
    return None


def check_prerequisites(ctx: BotContext, skill_level: SkillLevel,
                        requester: str) -> AssignmentDecision | None:
    """Gate 6. Returns a terminal decision, or None when prerequisites are met."""
    prereq = skill_level.prerequisite
    if not prereq.required:
        return None

    completed = _count(ctx, requester, ISSUE_STATE_CLOSED, prereq.required_level.label)
    if not completed.verified:
        ctx.logger.info("Exit: could not verify prerequisites due to API error")
        post_comment(ctx, build_api_error_comment(requester, ctx.config))
        return AssignmentDecision.API_ERROR

    if completed.count < prereq.required_count:
        ctx.logger.info(f"Exit: prerequisites not met (required {prereq.required_count}, "
                        f"completed {completed.count})")
        post_comment(ctx, build_prerequisite_not_met_comment(
            requester, skill_level, completed.count, ctx.owner, ctx.repo))
        return AssignmentDecision.PREREQUISITES_NOT_MET

    ctx.logger.info(f"Prerequisites met (required {prereq.required_count}, "
                    f"completed {completed.count})")
    return None


def assign_and_finalize(ctx: BotContext, requester: str,
                        skill_level: SkillLevel) -> AssignmentDecision:
    """Gate 7: assign, move the status labels, welcome the contributor."""
    ctx.logger.info(f"Assigning issue to {requester}")
    result = add_assignees(ctx, [requester])
    if not result.success:
        post_comment(ctx, build_assignment_failure_comment(requester, result.error, ctx.config))
        ctx.logger.info("Posted assignment failure comment, tagged maintainers")
        return AssignmentDecision.ASSIGNMENT_FAILED

    transition = apply_label_transition(ctx, add=(IN_PROGRESS,), remove=(READY_FOR_DEV,))

    post_comment(ctx, build_welcome_comment(requester, skill_level, ctx.config))
    ctx.logger.info("Posted welcome comment")

    report_label_failure(
        ctx, transition,
        lambda error: build_label_update_failure_comment(requester, error, ctx.config),
    )
    ctx.logger.info("Assignment flow completed successfully")
    return AssignmentDecision.ASSIGNED


def handle_assign(ctx: BotContext) -> AssignmentDecision:
    """Run the /assign gates for the commenter of ``ctx`` (an issue_comment context)."""
    requester = ctx.comment["user"]["login"]

    add_reaction(ctx, ctx.comment.get("id"), "+1")

    state = check_issue_state(ctx, requester)
    if isinstance(state, AssignmentDecision):
        return state
    skill_level = state

    decision = enforce_assignment_limit(ctx, requester)
    if decision is not None:
        return decision

    decision = check_prerequisites(ctx, skill_level, requester)
    if decision is not None:
        return decision

    return assign_and_finalize(ctx, requester, skill_level)
