# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""Shared constants for the bots: labels, issue states, limits."""

# ==============================================================================
# Labels
# ==============================================================================

# Status labels
READY_FOR_DEV = "status: ready for dev"
IN_PROGRESS = "status: in progress"
BLOCKED = "status: blocked"
NEEDS_REVIEW = "status: needs review"
NEEDS_REVISION = "status: needs revision"

# Skill level labels, in ascending order of difficulty
GOOD_FIRST_ISSUE = "skill: good first issue"
BEGINNER = "skill: beginner"
INTERMEDIATE = "skill: intermediate"
ADVANCED = "skill: advanced"

# ==============================================================================
# Search
# ==============================================================================

ISSUE_STATE_OPEN = "open"
ISSUE_STATE_CLOSED = "closed"
ISSUE_STATES = (ISSUE_STATE_OPEN, ISSUE_STATE_CLOSED)

# ==============================================================================
# Limits
# ==============================================================================

MAINTAINER_TEAM = "@hiero-ledger/hiero-sdk-cpp-maintainers"

COMMITS_PER_PAGE = 100

# GitHub may need time to compute the mergeable state (5 attempts x 2s)
MERGE_CHECK_ATTEMPTS = 5
MERGE_CHECK_DELAY_SECONDS = 2.0

CHECK_RUN_NAME = "DCO & GPG"
