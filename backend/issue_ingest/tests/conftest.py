from typing import Any

import pytest

USER = {
    "login": "octocat",
    "id": 1,
    "avatar_url": "https://avatars.example.com/u/1",
    "html_url": "https://github.com/octocat",
    "type": "User",
    "site_admin": False,
}

ASSIGNEE = {"login": "hubot", "id": 2, "type": "Bot"}

MILESTONE = {
    "url": "https://api.github.com/repos/o/r/milestones/3",
    "id": 1002604,
    "number": 3,
    "state": "open",
    "title": "v1.0",
    "description": "Tracking milestone for version 1.0",
    "creator": USER,
    "open_issues": 4,
    "closed_issues": 8,
    "created_at": "2011-04-10T20:09:31Z",
    "updated_at": "2014-03-03T18:58:10Z",
    "closed_at": None,
    "due_on": "2012-10-09T23:39:01Z",
}

ISSUE = {
    "id": 1,
    "url": "https://api.github.com/repos/o/r/issues/1347",
    "number": 1347,
    "state": "open",
    "title": "Found a bug",
    "body": "I'm having a problem with this.",
    "user": USER,
    "labels": [
        {"id": 208045946, "name": "bug", "color": "f29513", "default": True},
        {"id": 208045947, "name": "needs triage", "color": "ededed", "default": False},
    ],
    "assignee": ASSIGNEE,
    "milestone": MILESTONE,
    "locked": False,
    "comments": 2,
    "closed_at": None,
    "created_at": "2011-04-22T13:33:48Z",
    "updated_at": "2011-04-22T13:33:48Z",
    "comments_url": "https://api.github.com/repos/o/r/issues/1347/comments",
}

COMMENT = {
    "id": 1,
    "html_url": "https://github.com/o/r/issues/1347#issuecomment-1",
    "body": "Me too",
    "user": USER,
    "created_at": "2011-04-14T16:00:49Z",
    "updated_at": "2011-04-14T16:00:49Z",
}


@pytest.fixture
def make_milestone_payload():
    """Build a milestone payload, overriding any top-level keys."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        return {**MILESTONE, **overrides}

    return _factory


@pytest.fixture
def make_issue_payload():
    """Build an issue payload, overriding any top-level keys."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        return {**ISSUE, **overrides}

    return _factory


@pytest.fixture
def make_comment_payload():
    """Build a comment payload, overriding any top-level keys."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        return {**COMMENT, **overrides}

    return _factory
