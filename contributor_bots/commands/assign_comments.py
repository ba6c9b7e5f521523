# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Skill levels, prerequisites and comment bodies for the /assign command.

Progression is linear: Good First Issue (no prerequisites) -> Beginner
(2 closed Good First Issues) -> Intermediate (3 closed Beginner issues)
-> Advanced (3 closed Intermediate issues).
"""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from ..common.config import DEFAULT_CONFIG, BotConfig
from ..common.constants import (
    ADVANCED,
    BEGINNER,
    BLOCKED,
    GOOD_FIRST_ISSUE,
    IN_PROGRESS,
    INTERMEDIATE,
    ISSUE_STATE_OPEN,
    READY_FOR_DEV,
)

# Open (non-blocked) issues a contributor may hold at the same time
MAX_OPEN_ASSIGNMENTS = 2


class SkillLevel(Enum):
    # Definition order is the lookup order when an issue has several labels
    GOOD_FIRST_ISSUE = GOOD_FIRST_ISSUE
    BEGINNER = BEGINNER
    INTERMEDIATE = INTERMEDIATE
    ADVANCED = ADVANCED

    @property
    def label(self) -> str:
        return self.value

    @property
    def prerequisite(self) -> "Prerequisite":
        return SKILL_PREREQUISITES[self]


@dataclass(frozen=True)
class Prerequisite:
    required_level: SkillLevel | None
    required_count: int
    display_name: str
    plural_display_name: str | None = None

    @property
    def required(self) -> bool:
        return self.required_level is not None and self.required_count > 0


SKILL_PREREQUISITES = {
    SkillLevel.GOOD_FIRST_ISSUE: Prerequisite(None, 0, "Good First Issue"),
    SkillLevel.BEGINNER: Prerequisite(
        SkillLevel.GOOD_FIRST_ISSUE, 2, "Beginner", "Good First Issues"),
    SkillLevel.INTERMEDIATE: Prerequisite(
        SkillLevel.BEGINNER, 3, "Intermediate", "Beginner Issues"),
    SkillLevel.ADVANCED: Prerequisite(
        SkillLevel.INTERMEDIATE, 3, "Advanced", "Intermediate Issues"),
}

READY_ISSUES_QUERY = "is%3Aissue+is%3Aopen+no%3Aassignee+label%3A%22status%3A+ready+for+dev%22"


def build_issues_search_url(owner: str, repo: str, search_query: str) -> str:
    encoded = quote(search_query, safe="!*'()")
    return f"https://github.com/{owner}/{repo}/issues?q={encoded}"


def _ready_issues_url(owner: str, repo: str) -> str:
    return f"https://github.com/{owner}/{repo}/issues?q={READY_ISSUES_QUERY}"


def build_welcome_comment(username: str, skill_level: SkillLevel,
                          config: BotConfig = DEFAULT_CONFIG) -> str:
    """Welcome message after a successful assignment; warmer for first-timers."""
    if skill_level is SkillLevel.GOOD_FIRST_ISSUE:
        return "\n".join([
            f"👋 Hi @{username}, welcome to the {config.project_name} community! Thank you "
            "for choosing to contribute — we're thrilled to have you here! 🎉",
            "",
            "You've been assigned this **Good First Issue**, and the **Good First Issue "
            f"Support Team** ({config.good_first_issue_support_team}) is ready to help "
            "you succeed.",
            "",
            "The issue description above has everything you need: implementation steps, "
            "contribution workflow, and links to guides. If anything is unclear, just ask "
            "— we're happy to help.",
            "",
            "Good luck, and welcome aboard! 🚀",
        ])

    return "\n".join([
        f"👋 Hi @{username}, thanks for continuing to contribute to the "
        f"{config.project_name}! You've been assigned this "
        f"**{skill_level.prerequisite.display_name}** issue. 🙌",
        "",
        "If this task involves any design decisions or you'd like early feedback, feel "
        "free to share your plan here before diving into the code.",
        "",
        "Good luck! 🚀",
    ])


def build_already_assigned_comment(requester: str, issue: dict, owner: str, repo: str) -> str:
    assignees = [a.get("login") or "" for a in issue.get("assignees") or []]
    if requester.lower() in (login.lower() for login in assignees):
        return "\n".join([
            f"👋 Hi @{requester}! You're already assigned to this issue. You're all set "
            "to start working on it!",
            "",
            "If you have any questions, feel free to ask here or reach out to the team.",
        ])

    current = assignees[0] if assignees and assignees[0] else "someone"
    return "\n".join([
        f"👋 Hi @{requester}! This issue is already assigned to @{current}.",
        "",
        "👉 **Find another issue to work on:**",
        f"[Browse unassigned issues]({_ready_issues_url(owner, repo)})",
        "",
        "Once you find one you like, comment `/assign` to get started!",
    ])


def build_not_ready_comment(requester: str, owner: str, repo: str) -> str:
    return "\n".join([
        f"👋 Hi @{requester}! This issue is not ready for development yet.",
        "",
        f"Issues must have the `{READY_FOR_DEV}` label before they can be assigned.",
        "",
        "👉 **Find an issue that's ready:**",
        f"[Browse ready issues]({_ready_issues_url(owner, repo)})",
        "",
        "Once you find one you like, comment `/assign` to get started!",
    ])


def build_no_skill_level_comment(requester: str, config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        f"👋 Hi @{requester}! This issue doesn't have a skill level label yet.",
        "",
        f"{config.maintainer_team} — could you please add one of the following labels?",
        *(f"- `{level.label}`" for level in SkillLevel),
        "",
        f"@{requester}, once a maintainer adds the label, comment `/assign` again to "
        "request assignment.",
    ])


def build_prerequisite_not_met_comment(requester: str, skill_level: SkillLevel,
                                       completed: int, owner: str, repo: str) -> str:
    prereq = skill_level.prerequisite
    plural = prereq.plural_display_name
    search_url = build_issues_search_url(
        owner, repo,
        f'is:issue is:open no:assignee label:"{prereq.required_level.label}" '
        f'label:"{READY_FOR_DEV}"',
    )
    return "\n".join([
        f"👋 Hi @{requester}! Thanks for your interest in contributing!",
        "",
        f"This is a **{prereq.display_name}** issue. Before taking it on, you need to "
        f"complete at least **{prereq.required_count} {plural}** to build familiarity "
        "with the codebase.",
        "",
        f"📊 **Your Progress:** You've completed **{completed}** so far.",
        "",
        f"👉 **Find {plural} to work on:**",
        f"[Browse available {plural}]({search_url})",
        "",
        f"Once you've completed {prereq.required_count}, come back and we'll be happy to "
        "assign this to you! 🎯",
    ])


def build_assignment_limit_exceeded_comment(requester: str, open_count: int, owner: str,
                                            repo: str, blocked_count: int = 0) -> str:
    """Limit message; links blocked issues only when the user has some."""
    assigned_url = build_issues_search_url(
        owner, repo,
        f'is:issue is:{ISSUE_STATE_OPEN} assignee:{requester} -label:"{BLOCKED}"',
    )
    lines = [
        f"👋 Hi @{requester}! Thanks for your enthusiasm to contribute!",
        "",
        "To help contributors stay focused and ensure issues remain available for others, "
        f"we limit assignments to **{MAX_OPEN_ASSIGNMENTS} open issues** at a time. "
        f"Issues labeled `{BLOCKED}` are not counted toward this limit.",
        "",
        f"📊 **Your Current Assignments:** You're currently assigned to **{open_count}** "
        "open issues.",
        "",
        "👉 **View your assigned issues:**",
        f"[Your open assignments]({assigned_url})",
    ]
    if blocked_count > 0:
        blocked_url = build_issues_search_url(
            owner, repo,
            f'is:issue is:{ISSUE_STATE_OPEN} assignee:{requester} label:"{BLOCKED}"',
        )
        lines += ["", "👉 **View your blocked issues:**", f"[Your blocked issues]({blocked_url})"]
    lines += [
        "",
        "Once you complete or unassign from one of your current issues, come back and "
        "we'll be happy to assign this to you! 🎯",
    ]
    return "\n".join(lines)


def build_api_error_comment(requester: str, config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        f"👋 Hi @{requester}! I encountered an error while trying to verify your "
        "eligibility for this issue.",
        "",
        f"{config.maintainer_team} — could you please help with this assignment request?",
        "",
        f"@{requester}, a maintainer will review your request and assign you manually if "
        "appropriate. Sorry for the inconvenience!",
    ])


def build_label_update_failure_comment(username: str, error: str,
                                       config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        f"⚠️ @{username} has been successfully assigned to this issue, but I encountered "
        "an error updating the labels.",
        "",
        f"{config.maintainer_team} — please manually:",
        f"- Remove the `{READY_FOR_DEV}` label",
        f"- Add the `{IN_PROGRESS}` label",
        "",
        f"Error details: {error}",
    ])


def build_assignment_failure_comment(requester: str, error: str,
                                     config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        f"⚠️ Hi @{requester}! I tried to assign you to this issue, but encountered an error.",
        "",
        f"{config.maintainer_team} — could you please manually assign @{requester} to "
        "this issue?",
        "",
        f"Error details: {error}",
    ])
