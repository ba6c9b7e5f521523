# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

import logging
import sys

BotLogger = logging.LoggerAdapter


class _PrefixAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        return f"[{self.extra['bot']}] {msg}", kwargs


def create_logger(bot_name: str) -> BotLogger:
    """
    Create a logger whose messages carry a ``[bot_name]`` prefix.

    The returned adapter is handed to every helper that logs; nothing is
    stored at module level, so two bots in one process never share a prefix.
    """
    logger = logging.getLogger(f"contributor_bots.{bot_name}")
    return _PrefixAdapter(logger, {"bot": bot_name})


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stdout so they show up in the Actions job log."""
    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(levelname)s %(message)s",
    )
