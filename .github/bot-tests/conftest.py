from dataclasses import dataclass, field

import pytest

from contributor_bots.common.context import EventContext, build_bot_context
from contributor_bots.common.github_api import GitHubAPIError


@dataclass
class FakeGitHub:
    """In-memory GitHub client recording every call the bots make."""

    open_count: int = 0
    blocked_count: int = 0
    completed_count: int = 0
    commits: list = field(default_factory=list)
    mergeable: list = field(default_factory=lambda: [True])
    graphql_should_fail: bool = False
    assign_should_fail: bool = False
    remove_label_should_fail: bool = False
    add_label_should_fail: bool = False
    reaction_should_fail: bool = False
    check_run_should_fail: bool = False

    def __post_init__(self):
        self.comments = []
        self.assignees = []
        self.labels_added = []
        self.labels_removed = []
        self.graphql_queries = []
        self.reactions = []
        self.check_runs = []
        self.commit_pages = []
        self.pull_gets = 0

    def create_comment(self, owner, repo, number, body):
        self.comments.append(body)
        return {"id": len(self.comments)}

    def create_comment_reaction(self, owner, repo, comment_id, content):
        if self.reaction_should_fail:
            raise GitHubAPIError(403, "Simulated reaction failure")
        self.reactions.append((comment_id, content))
        return {}

    def add_assignees(self, owner, repo, number, assignees):
        if self.assign_should_fail:
            raise GitHubAPIError(422, "Simulated assignment failure")
        self.assignees.extend(assignees)
        return {}

    def add_labels(self, owner, repo, number, labels):
        if self.add_label_should_fail:
            raise GitHubAPIError(422, "Simulated add label failure")
        self.labels_added.extend(labels)
        return []

    def remove_label(self, owner, repo, number, name):
        if self.remove_label_should_fail:
            raise GitHubAPIError(404, "Simulated remove label failure")
        self.labels_removed.append(name)
        return []

    def graphql(self, query, variables=None):
        search_query = variables["searchQuery"]
        self.graphql_queries.append(search_query)
        if self.graphql_should_fail:
            raise GitHubAPIError(502, "Simulated GraphQL failure")
        if "is:closed" in search_query:
            count = self.completed_count
        elif ' label:"status: blocked"' in search_query:
            count = self.blocked_count
        else:
            count = self.open_count
        return {"search": {"issueCount": count}}

    def list_pull_commits(self, owner, repo, number, per_page=100, page=1):
        self.commit_pages.append(page)
        start = (page - 1) * per_page
        return self.commits[start:start + per_page]

    def get_pull(self, owner, repo, number):
        index = min(self.pull_gets, len(self.mergeable) - 1)
        self.pull_gets += 1
        return {"number": number, "mergeable": self.mergeable[index], "mergeable_state": "unknown"}

    def create_check_run(self, owner, repo, **check_run):
        if self.check_run_should_fail:
            raise GitHubAPIError(403, "Simulated check run failure")
        self.check_runs.append(check_run)
        return {"id": 1}


def make_commit(sha="abcdef1234567", message="Fix bug\n\nSigned-off-by: Jane Doe <jane@example.com>",
                verified=True):
    commit = {"message": message}
    if verified is not None:
        commit["verification"] = {"verified": verified}
    return {"sha": sha, "commit": commit}


def make_comment_event(body="/assign", login="new-contributor", labels=None, assignees=None,
                       user_type="User", issue_number=42):
    if labels is None:
        labels = ["status: ready for dev", "skill: good first issue"]
    return EventContext(
        event_name="issue_comment",
        repo={"owner": "hiero-ledger", "repo": "hiero-sdk-cpp"},
        payload={
            "action": "created",
            "issue": {
                "number": issue_number,
                "labels": [{"name": name} for name in labels],
                "assignees": [{"login": a} for a in (assignees or [])],
            },
            "comment": {"id": 1001, "body": body, "user": {"login": login, "type": user_type}},
        },
    )


def make_pr_event(number=7, author="pr-author", assignees=None, head_sha="feedface",
                  event_name="pull_request"):
    pr = {
        "number": number,
        "user": {"login": author},
        "assignees": [{"login": a} for a in (assignees or [])],
    }
    if head_sha:
        pr["head"] = {"sha": head_sha}
    return EventContext(
        event_name=event_name,
        repo={"owner": "hiero-ledger", "repo": "hiero-sdk-cpp"},
        payload={"action": "opened", "pull_request": pr},
    )


@pytest.fixture
def fake_github():
    return FakeGitHub


@pytest.fixture
def commit():
    return make_commit


@pytest.fixture
def comment_event():
    return make_comment_event


@pytest.fixture
def pr_event():
    return make_pr_event


@pytest.fixture
def comment_context():
    def build(github, **event_kwargs):
        return build_bot_context(github, make_comment_event(**event_kwargs))
    return build


@pytest.fixture
def pr_context():
    def build(github, **event_kwargs):
        return build_bot_context(github, make_pr_event(**event_kwargs))
    return build


@pytest.fixture
def github_output(tmp_path, monkeypatch):
    path = tmp_path / "github_output"
    path.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("GITHUB_OUTPUT", "DCO_PASSED", "GPG_PASSED", "MERGE_CONFLICT",
                 "BOT_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)
