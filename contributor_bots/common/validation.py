# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Validation helpers for webhook payloads.

Only checks that need two or more conditions (present and typed, or typed
and well-formed) live here. Every ``require_*`` helper raises
:class:`BotContextError` naming the offending field path.
"""

import re
from typing import Any

SAFE_SEARCH_TOKEN = re.compile(r"^[A-Za-z0-9._/-]+$")


class BotContextError(ValueError):
    """Raised when a webhook payload cannot be turned into a bot context."""


def is_safe_search_token(value: Any) -> bool:
    """True if value is a string safe to interpolate into a search query."""
    return isinstance(value, str) and SAFE_SEARCH_TOKEN.fullmatch(value) is not None


def is_int(value: Any) -> bool:
    """True for an int; bool is an int subclass but never a valid id or count."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_non_negative_int(value: Any) -> bool:
    """True for an int that is zero or greater."""
    return is_int(value) and value >= 0


def require_mapping(value: Any, label: str) -> None:
    """Require a dict."""
    if not isinstance(value, dict):
        raise BotContextError(f"Bot context invalid: missing or invalid {label}")


def require_non_empty_string(value: Any, label: str) -> None:
    """Require a string that is not blank."""
    if not isinstance(value, str) or not value.strip():
        raise BotContextError(f"Bot context invalid: missing or invalid {label}")


def require_positive_int(value: Any, label: str) -> None:
    """Require an int of at least 1."""
    if not is_int(value) or value < 1:
        raise BotContextError(f"Bot context invalid: missing or invalid {label}")


def require_safe_username(value: Any, label: str) -> None:
    """Require a non-empty login that is also a safe search token."""
    require_non_empty_string(value, label)
    if not is_safe_search_token(value):
        raise BotContextError(f"Bot context invalid: {label} contains invalid characters")
