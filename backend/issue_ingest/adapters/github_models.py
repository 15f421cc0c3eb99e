"""Pydantic models for GitHub REST API payloads, as they arrive on the wire."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from issue_ingest.schemas.github import GitHubUser


class _Base(BaseModel):
    """Shared config: silently ignore unknown fields from the GitHub API."""

    model_config = ConfigDict(extra="ignore")


class MilestoneFromJson(_Base):
    id: int
    number: int
    state: str
    title: str
    description: str | None = None
    creator: GitHubUser
    open_issues: int
    closed_issues: int
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None = None
    due_on: datetime | None = None


class LabelFromJson(_Base):
    name: str
    color: str


# Opaque bundle of pull-request URLs; only its presence matters.
PullRequestUrls = dict[str, Any]


class IssueFromJson(_Base):
    number: int
    user: GitHubUser
    assignee: GitHubUser | None = None
    state: str
    title: str
    body: str | None = None
    labels: list[LabelFromJson] | None = None
    milestone: MilestoneFromJson | None = None
    locked: bool
    comments: int
    pull_request: PullRequestUrls | None = None
    closed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    comments_url: str


class CommentFromJson(_Base):
    id: int
    html_url: str
    body: str
    user: GitHubUser
    created_at: datetime
    updated_at: datetime


class PullRequestFromJson(_Base):
    """Pull-request specific fields.

    Nothing normalizes this yet: pull requests reach the domain model only as
    issues with ``is_pull_request`` set, and the fields below are dropped.
    """

    number: int
    review_comments_url: str
    state: str
    title: str
    body: str | None = None
    assignee: GitHubUser | None = None
    milestone: MilestoneFromJson | None = None
    locked: bool
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None = None
    merged_at: datetime | None = None
    commits: int
    additions: int
    deletions: int
    changed_files: int
