import pytest

from contributor_bots import bot_on_commit
from contributor_bots.common.config import DEFAULT_CONFIG
from contributor_bots.common.github_api import GitHubAPIError


def run(github, event):
    return bot_on_commit.run(github, event, config=DEFAULT_CONFIG, sleep=lambda s: None)


def test_clean_pr_writes_success_outputs(fake_github, pr_event, commit, github_output):
    github = fake_github(commits=[commit()])
    outputs = run(github, pr_event())
    assert outputs == {"dco": "success", "gpg": "success", "merge_conflict": "success"}
    assert github.comments == []
    assert github_output.read_text() == "dco=success\ngpg=success\nmerge_conflict=success\n"


def test_each_failing_check_posts_its_own_comment(fake_github, pr_event, commit, github_output):
    github = fake_github(
        commits=[commit(message="No sign-off", verified=False)],
        mergeable=[None, False],
    )
    outputs = run(github, pr_event())
    assert outputs == {"dco": "failure", "gpg": "failure", "merge_conflict": "failure"}
    assert len(github.comments) == 3
    assert "**DCO Bot**" in github.comments[0]
    assert "`abcdef1` No sign-off" in github.comments[0]
    assert "**GPG Bot**" in github.comments[1]
    assert "**Merge Conflict Bot**" in github.comments[2]
    assert github.pull_gets == 2


def test_empty_commit_list_passes(fake_github, pr_event):
    outputs = run(fake_github(), pr_event())
    assert outputs["dco"] == "success"
    assert outputs["gpg"] == "success"


def test_comment_failure_does_not_change_outputs(fake_github, pr_event, commit, monkeypatch):
    github = fake_github(commits=[commit(verified=False)])

    def fail(*args, **kwargs):
        raise GitHubAPIError(403, "Resource not accessible by integration")

    monkeypatch.setattr(github, "create_comment", fail)
    assert run(github, pr_event())["gpg"] == "failure"


def test_crash_writes_failure_defaults(fake_github, pr_event, github_output, monkeypatch):
    github = fake_github()

    def fail(*args, **kwargs):
        raise GitHubAPIError(500, "Server Error")

    monkeypatch.setattr(github, "list_pull_commits", fail)
    with pytest.raises(GitHubAPIError):
        run(github, pr_event())
    assert github_output.read_text() == "dco=failure\ngpg=failure\nmerge_conflict=success\n"


def test_no_output_file_outside_actions(fake_github, pr_event, commit):
    assert run(fake_github(commits=[commit()]), pr_event())["dco"] == "success"
