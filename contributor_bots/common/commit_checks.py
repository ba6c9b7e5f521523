# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""
Commit hygiene checks: DCO sign-off, verified GPG signatures, merge conflicts.

The predicates are pure; the report builders render the same failure list
either as check-run output or as PR comment bodies.
"""

import re
import time
from dataclasses import dataclass
from typing import Callable, Iterable

from .config import DEFAULT_CONFIG, BotConfig
from .constants import MERGE_CHECK_ATTEMPTS, MERGE_CHECK_DELAY_SECONDS
from .logs import BotLogger

# "Signed-off-by: Name <email>" on any line of the message
DCO_SIGNOFF = re.compile(r"^Signed-off-by:\s+.+\s+<.+>", re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class CommitFailure:
    sha: str
    message: str

    def to_markdown(self) -> str:
        return f"- `{self.sha}` {self.message}"


@dataclass(frozen=True)
class CheckRunOutput:
    conclusion: str
    title: str
    summary: str
    text: str | None


# ==============================================================================
# Predicates
# ==============================================================================


def commit_message(commit: dict) -> str:
    return ((commit or {}).get("commit") or {}).get("message") or ""


def has_dco_signoff(message: str | None) -> bool:
    if not message:
        return False
    return DCO_SIGNOFF.search(message) is not None


def has_verified_gpg_signature(commit: dict) -> bool:
    """Only a literal ``True`` verification flag counts as verified."""
    verification = ((commit or {}).get("commit") or {}).get("verification") or {}
    return verification.get("verified") is True


def describe_commit(commit: dict) -> CommitFailure:
    sha = ((commit or {}).get("sha") or "")[:7]
    first_line = commit_message(commit).split("\n")[0] or "(no message)"
    return CommitFailure(sha=sha, message=first_line)


def dco_failures(commits: Iterable[dict]) -> list[CommitFailure]:
    return [describe_commit(c) for c in commits if not has_dco_signoff(commit_message(c))]


def gpg_failures(commits: Iterable[dict]) -> list[CommitFailure]:
    return [describe_commit(c) for c in commits if not has_verified_gpg_signature(c)]


# ==============================================================================
# Reports
# ==============================================================================


def _failure_section(heading: str, failures: list[CommitFailure]) -> list[str]:
    return [heading, *(f.to_markdown() for f in failures)]


def build_check_run_output(total: int, dco: list[CommitFailure], gpg: list[CommitFailure],
                           config: BotConfig = DEFAULT_CONFIG) -> CheckRunOutput:
    """Render the ``DCO & GPG`` check run title, summary and details text."""
    passed = not dco and not gpg
    if passed:
        return CheckRunOutput(
            conclusion="success",
            title=f"All {total} commit(s) have DCO sign-off and verified GPG signatures",
            summary=(f"Checked {total} commit(s). All have required DCO sign-off "
                     "and verified GPG signatures."),
            text=None,
        )

    summary = f"Checked {total} commit(s). "
    if dco:
        summary += f"**DCO:** {len(dco)} commit(s) missing `Signed-off-by`. "
    if gpg:
        summary += f"**GPG:** {len(gpg)} commit(s) without verified GPG signature."

    sections = []
    if dco:
        sections.append("\n".join(_failure_section("### Commits missing DCO sign-off", dco)))
    if gpg:
        sections.append("\n".join(
            _failure_section("### Commits without verified GPG signature", gpg)
        ))
    text = "\n\n".join(sections)
    text += (f"\n\nSee the [Signing Guide]({config.signing_guide_url}) "
             "for how to sign commits.")

    return CheckRunOutput(
        conclusion="failure",
        title="Some commits are missing DCO sign-off or GPG verification",
        summary=summary.rstrip(),
        text=text,
    )


def build_signing_failure_comment(dco: list[CommitFailure], gpg: list[CommitFailure],
                                  config: BotConfig = DEFAULT_CONFIG) -> str | None:
    """Aggregated PR comment for DCO and GPG failures, or None if nothing failed."""
    if not dco and not gpg:
        return None

    lines = [
        "## DCO & GPG check - action needed",
        "",
        "Some commits on this PR are missing required sign-off or GPG verification.",
        "",
    ]
    if dco:
        lines += [*_failure_section("### Commits missing DCO sign-off", dco), ""]
    if gpg:
        lines += [*_failure_section("### Commits without verified GPG signature", gpg), ""]
    lines += [
        "Please ensure every commit has a line `Signed-off-by: Your Name "
        "<your.email@example.com>` and is signed with GPG (`git commit -s -S`).",
        "",
        f"See the [Signing Guide]({config.signing_guide_url}) for details.",
    ]
    return "\n".join(lines)


def build_dco_comment(failures: list[CommitFailure], config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        "Hi, this is **DCO Bot**! 👋",
        "",
        "I noticed some commits on this PR are missing the required DCO sign-off. "
        "Here are the ones that need attention:",
        "",
        *(f.to_markdown() for f in failures),
        "",
        "Please add a line `Signed-off-by: Your Name <your.email@example.com>` to each "
        "commit (e.g. `git commit -s`). For more info, see the "
        f"[Signing Guide]({config.signing_guide_url}).",
    ])


def build_gpg_comment(failures: list[CommitFailure], config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        "Hi, this is **GPG Bot**! 👋",
        "",
        "I noticed some commits on this PR don't have a verified GPG signature. "
        "Here are the ones that need attention:",
        "",
        *(f.to_markdown() for f in failures),
        "",
        "Please sign your commits with GPG (e.g. `git commit -S`). For more info, see the "
        f"[Signing Guide]({config.signing_guide_url}).",
    ])


def build_merge_conflict_comment(config: BotConfig = DEFAULT_CONFIG) -> str:
    return "\n".join([
        "Hi, this is **Merge Conflict Bot**! 👋",
        "",
        "I noticed this PR has merge conflicts with the base branch. Please update your "
        "branch (e.g. rebase or merge from base) and push. See the "
        f"[Merge conflicts guide]({config.merge_conflicts_guide_url}) for help.",
    ])


# ==============================================================================
# Merge conflicts
# ==============================================================================


def check_merge_conflict(client, owner: str, repo: str, pr_number: int, *,
                         logger: BotLogger,
                         attempts: int = MERGE_CHECK_ATTEMPTS,
                         delay: float = MERGE_CHECK_DELAY_SECONDS,
                         sleep: Callable[[float], None] = time.sleep) -> bool:
    """
    Return True if the PR has merge conflicts with its base branch.

    ``mergeable`` is null while GitHub is still computing it, so poll up to
    ``attempts`` times with a fixed ``delay``. If it never resolves, assume
    there is no conflict rather than block the PR.
    """
    for attempt in range(1, attempts + 1):
        pr = client.get_pull(owner, repo, pr_number)
        mergeable = pr.get("mergeable")

        if mergeable is not None:
            logger.info(f"Merge conflict check: mergeable={mergeable}, "
                        f"state={pr.get('mergeable_state')}")
            return mergeable is not True

        if attempt < attempts:
            logger.info(f"Mergeable state not ready, waiting {delay}s "
                        f"(attempt {attempt}/{attempts})")
            sleep(delay)

    logger.info("Merge conflict check: mergeable never resolved after retries, "
                "assuming no conflicts")
    return False
