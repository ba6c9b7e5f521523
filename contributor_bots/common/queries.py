# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors

"""Read-side queries: issue counts via search and paginated PR commits."""

from dataclasses import dataclass

from .constants import BLOCKED, COMMITS_PER_PAGE, ISSUE_STATE_OPEN, ISSUE_STATES
from .logs import BotLogger
from .validation import is_non_negative_int, is_safe_search_token

ISSUE_COUNT_QUERY = """
query ($searchQuery: String!) {
  search(type: ISSUE, query: $searchQuery) { issueCount }
}
"""


@dataclass(frozen=True)
class CountResult:
    """
    Outcome of an issue-count query.

    An unverified result is never a count of zero: callers must route it to
    a manual-intervention path instead of granting anything.
    """
    count: int | None
    reason: str | None = None

    @classmethod
    def of(cls, count: int) -> "CountResult":
        return cls(count=count)

    @classmethod
    def unverified(cls, reason: str) -> "CountResult":
        return cls(count=None, reason=reason)

    @property
    def verified(self) -> bool:
        return self.count is not None


def build_issue_search_query(owner: str, repo: str, username: str, state: str,
                             label: str | None = None) -> str:
    """
    Build the search query for issues assigned to ``username``.

    Open-issue counts without a label filter exclude ``status: blocked`` so
    blocked work does not count against the assignment limit.
    """
    parts = [
        f"repo:{owner}/{repo}",
        "is:issue",
        f"is:{state}",
        f"assignee:{username}",
    ]
    if label:
        parts.append(f'label:"{label}"')
    if state == ISSUE_STATE_OPEN and not label:
        parts.append(f'-label:"{BLOCKED}"')
    return " ".join(parts)


def count_issues_by_query(client, owner: str, repo: str, username: str, state: str,
                          label: str | None = None, *, logger: BotLogger) -> CountResult:
    """
    Count issues assigned to ``username`` in ``state``, optionally with ``label``.

    Fails closed: invalid inputs or any API failure give an unverified result.
    """
    if not all(is_safe_search_token(v) for v in (owner, repo, username)):
        logger.info(f"[assign] Invalid search inputs: owner={owner!r} repo={repo!r} "
                    f"username={username!r} label={label!r}")
        return CountResult.unverified("invalid search inputs")
    if state not in ISSUE_STATES:
        logger.info(f"[assign] Invalid state: {state!r}")
        return CountResult.unverified("invalid state")
    if label and (not isinstance(label, str) or not label.strip() or '"' in label):
        logger.info(f"[assign] Invalid label parameter: {label!r}")
        return CountResult.unverified("invalid label")

    search_query = build_issue_search_query(owner, repo, username, state, label)
    if label:
        query_type = f'{"completed" if state != ISSUE_STATE_OPEN else "open"} "{label}"'
    else:
        query_type = f"{state} assigned"
    logger.info(f"[assign] GraphQL search ({query_type}): {search_query}")

    try:
        data = client.graphql(ISSUE_COUNT_QUERY, {"searchQuery": search_query})
    except Exception as e:
        logger.info(f"[assign] Failed to count {state} issues for {username}: {e}")
        return CountResult.unverified(str(e))

    count = ((data or {}).get("search") or {}).get("issueCount")
    if not is_non_negative_int(count):
        logger.info(f"[assign] Unexpected issueCount for {username}: {count!r}")
        return CountResult.unverified("unexpected search response")

    logger.info(f"[assign] {query_type} issues for {username}: {count}")
    return CountResult.of(count)


def fetch_all_commits(client, owner: str, repo: str, pr_number: int, *,
                      logger: BotLogger, per_page: int = COMMITS_PER_PAGE) -> list[dict]:
    """
    Fetch every commit of a pull request, in order.

    Pages are requested until one comes back shorter than ``per_page``.
    API errors propagate.
    """
    commits = []
    page = 1
    while True:
        batch = client.list_pull_commits(owner, repo, pr_number, per_page=per_page, page=page)
        commits.extend(batch)
        if len(batch) < per_page:
            break
        page += 1

    logger.info(f"Fetched {len(commits)} commits for PR #{pr_number}")
    return commits
