import pytest

from contributor_bots.common.github_api import GitHubAPIError
from contributor_bots.common.logs import create_logger
from contributor_bots.common.queries import (
    CountResult,
    build_issue_search_query,
    count_issues_by_query,
    fetch_all_commits,
)

logger = create_logger("test")


class SearchClient:
    def __init__(self, result=None, error=None):
        self.result = result if result is not None else {"search": {"issueCount": 4}}
        self.error = error
        self.queries = []

    def graphql(self, query, variables=None):
        self.queries.append(variables["searchQuery"])
        if self.error:
            raise self.error
        return self.result


def count(client, *args, **kwargs):
    return count_issues_by_query(client, *args, logger=logger, **kwargs)


def test_open_query_excludes_blocked():
    assert build_issue_search_query("o", "r", "u", "open") == (
        'repo:o/r is:issue is:open assignee:u -label:"status: blocked"'
    )


def test_labelled_queries_do_not_exclude_blocked():
    assert build_issue_search_query("o", "r", "u", "closed", "skill: beginner") == (
        'repo:o/r is:issue is:closed assignee:u label:"skill: beginner"'
    )
    assert build_issue_search_query("o", "r", "u", "open", "status: blocked") == (
        'repo:o/r is:issue is:open assignee:u label:"status: blocked"'
    )
    assert build_issue_search_query("o", "r", "u", "closed") == (
        "repo:o/r is:issue is:closed assignee:u"
    )


def test_count_success():
    client = SearchClient()
    result = count(client, "o", "r", "user", "open")
    assert result == CountResult.of(4)
    assert result.verified
    assert client.queries == ['repo:o/r is:issue is:open assignee:user -label:"status: blocked"']


def test_zero_is_a_verified_count():
    result = count(SearchClient({"search": {"issueCount": 0}}), "o", "r", "user", "open")
    assert result.verified
    assert result.count == 0


def test_api_failure_is_unverified_not_zero():
    result = count(SearchClient(error=GitHubAPIError(502, "bad gateway")), "o", "r", "u", "open")
    assert not result.verified
    assert result.count is None
    assert "bad gateway" in result.reason


@pytest.mark.parametrize(
    ["args", "kwargs"],
    [
        (("o o", "r", "u", "open"), {}),
        (("o", "r", "u:x", "open"), {}),
        (("o", "r", "u", "all"), {}),
        (("o", "r", "u", "closed"), {"label": 'skill" OR x'}),
        (("o", "r", "u", "closed"), {"label": "   "}),
    ],
)
def test_invalid_inputs_never_reach_the_api(args, kwargs):
    client = SearchClient()
    result = count(client, *args, **kwargs)
    assert not result.verified
    assert client.queries == []


def test_unexpected_response_is_unverified():
    result = count(SearchClient({"search": {}}), "o", "r", "u", "open")
    assert not result.verified


class CommitsClient:
    def __init__(self, total):
        self.commits = [{"sha": f"{i:040d}"} for i in range(total)]
        self.pages = []

    def list_pull_commits(self, owner, repo, number, per_page=100, page=1):
        self.pages.append(page)
        start = (page - 1) * per_page
        return self.commits[start:start + per_page]


@pytest.mark.parametrize(["total", "pages"], [(0, [1]), (99, [1]), (100, [1, 2]), (250, [1, 2, 3])])
def test_fetch_all_commits_pages_until_short_page(total, pages):
    client = CommitsClient(total)
    commits = fetch_all_commits(client, "o", "r", 1, logger=logger)
    assert commits == client.commits
    assert client.pages == pages


def test_fetch_all_commits_propagates_errors():
    class Broken:
        def list_pull_commits(self, *args, **kwargs):
            raise GitHubAPIError(500, "boom")

    with pytest.raises(GitHubAPIError):
        fetch_all_commits(Broken(), "o", "r", 1, logger=logger)


def test_any_search_exception_is_unverified():
    result = count(SearchClient(error=TimeoutError("socket timed out")), "o", "r", "u", "open")
    assert not result.verified
    assert result.reason == "socket timed out"
