# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Presentation settings for bot comments.

Defaults match the hiero-sdk-cpp repository. A YAML file can override them:

    maintainer_team: "@my-org/maintainers"
    good_first_issue_support_team: "@my-org/gfi-support"
    project_name: "My SDK"
    signing_guide_url: "https://..."
    merge_conflicts_guide_url: "https://..."

The file is read from ``BOT_CONFIG_PATH`` or, failing that,
``.github/bot-config.yml`` when it exists.
"""

import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from .constants import MAINTAINER_TEAM

DEFAULT_CONFIG_PATH = Path(".github/bot-config.yml")


@dataclass(frozen=True)
class BotConfig:
    maintainer_team: str = MAINTAINER_TEAM
    good_first_issue_support_team: str = "@hiero-ledger/hiero-sdk-good-first-issue-support"
    project_name: str = "Hiero C++ SDK"
    signing_guide_url: str = (
        "https://github.com/hiero-ledger/hiero-sdk-cpp/blob/main/docs/training/signing.md"
    )
    merge_conflicts_guide_url: str = (
        "https://github.com/hiero-ledger/hiero-sdk-cpp/blob/main/docs/training/merge-conflicts.md"
    )


DEFAULT_CONFIG = BotConfig()


def parse_config(text: str) -> BotConfig:
    """Parse YAML config text, keeping defaults for anything missing or invalid."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        print(f"WARNING: Failed to parse bot config YAML: {e}", file=sys.stderr)
        return DEFAULT_CONFIG

    if not isinstance(data, dict):
        print("WARNING: Bot config must be a mapping, using defaults", file=sys.stderr)
        return DEFAULT_CONFIG

    known = {f.name for f in fields(BotConfig)}
    overrides = {
        key: value
        for key, value in data.items()
        if key in known and isinstance(value, str) and value.strip()
    }
    return replace(DEFAULT_CONFIG, **overrides)


def load_config(path: str | os.PathLike | None = None) -> BotConfig:
    """Load the bot config from ``path``, ``BOT_CONFIG_PATH`` or the default file."""
    if path is None:
        env_path = os.environ.get("BOT_CONFIG_PATH")
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    path = Path(path)

    if not path.is_file():
        return DEFAULT_CONFIG

    return parse_config(path.read_text(encoding="utf-8"))
