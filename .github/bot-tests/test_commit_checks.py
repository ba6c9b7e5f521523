import pytest

from contributor_bots.common import commit_checks
from contributor_bots.common.commit_checks import (
    CommitFailure,
    build_check_run_output,
    build_signing_failure_comment,
    check_merge_conflict,
    has_dco_signoff,
    has_verified_gpg_signature,
)
from contributor_bots.common.logs import create_logger

logger = create_logger("test")


@pytest.mark.parametrize(
    ["message", "expected"],
    [
        ("Signed-off-by: A B <a@b.com>", True),
        ("Signed-off-by: A B", False),
        ("Fix thing\n\nsigned-off-by: A B <a@b.com>", True),
        ("Fix thing\n\nSIGNED-OFF-BY: Jane <jane@example.com>\n", True),
        ("Fix thing Signed-off-by: A B <a@b.com>", False),
        ("", False),
        (None, False),
    ],
)
def test_has_dco_signoff(message, expected):
    assert has_dco_signoff(message) is expected


@pytest.mark.parametrize(
    ["commit", "expected"],
    [
        ({"commit": {"verification": {"verified": True}}}, True),
        ({"commit": {"verification": {"verified": False}}}, False),
        ({"commit": {"verification": {"verified": "true"}}}, False),
        ({"commit": {"verification": {}}}, False),
        ({"commit": {}}, False),
        ({}, False),
    ],
)
def test_has_verified_gpg_signature(commit, expected):
    assert has_verified_gpg_signature(commit) is expected


def test_failures_use_short_sha_and_first_line(commit):
    commits = [
        commit(sha="1111111aaaa", message="Good\n\nSigned-off-by: A <a@b.c>"),
        commit(sha="2222222bbbb", message="Unsigned change\nbody", verified=False),
        commit(sha="3333333cccc", message="", verified=None),
    ]
    assert commit_checks.dco_failures(commits) == [
        CommitFailure("2222222", "Unsigned change"),
        CommitFailure("3333333", "(no message)"),
    ]
    assert commit_checks.gpg_failures(commits) == [
        CommitFailure("2222222", "Unsigned change"),
        CommitFailure("3333333", "(no message)"),
    ]
    assert commit_checks.dco_failures(commits[:1]) == []


def test_check_run_output_success():
    output = build_check_run_output(3, [], [])
    assert output.conclusion == "success"
    assert output.title == "All 3 commit(s) have DCO sign-off and verified GPG signatures"
    assert output.text is None


def test_check_run_output_failure_lists_commits():
    output = build_check_run_output(2, [CommitFailure("abc1234", "No sign-off")], [])
    assert output.conclusion == "failure"
    assert "**DCO:** 1 commit(s) missing `Signed-off-by`." in output.summary
    assert "**GPG:**" not in output.summary
    assert "### Commits missing DCO sign-off\n- `abc1234` No sign-off" in output.text
    assert "Signing Guide" in output.text


def test_signing_failure_comment():
    assert build_signing_failure_comment([], []) is None
    body = build_signing_failure_comment([], [CommitFailure("abc1234", "Unsigned")])
    assert "### Commits without verified GPG signature\n- `abc1234` Unsigned" in body
    assert "DCO sign-off\n" not in body


class PullClient:
    def __init__(self, sequence):
        self.sequence = list(sequence)
        self.calls = 0

    def get_pull(self, owner, repo, number):
        value = self.sequence[self.calls]
        self.calls += 1
        return {"mergeable": value, "mergeable_state": "dirty"}


def test_merge_conflict_resolves_after_polling():
    sleeps = []
    client = PullClient([None, None, False])
    assert check_merge_conflict(client, "o", "r", 1, logger=logger, sleep=sleeps.append) is True
    assert client.calls == 3
    assert sleeps == [2.0, 2.0]


def test_merge_conflict_never_resolved_assumes_clean():
    sleeps = []
    client = PullClient([None] * 5)
    assert check_merge_conflict(client, "o", "r", 1, logger=logger, sleep=sleeps.append) is False
    assert client.calls == 5
    assert len(sleeps) == 4


def test_mergeable_true_is_clean():
    client = PullClient([True])
    assert check_merge_conflict(client, "o", "r", 1, logger=logger, sleep=lambda s: None) is False
    assert client.calls == 1
