"""Domain entities produced by the GitHub normalizers.

These are frozen: once a normalizer builds one, nothing mutates it. Equality is
structural, so normalizing the same wire record twice yields equal entities.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class _DomainBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class GitHubUser(_DomainBase):
    """A user as the API reports it. Resolved and stored elsewhere; normalizers only read ``id``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    login: str
    avatar_url: str | None = None
    html_url: str | None = None
    type: str | None = None
    site_admin: bool = False


class Milestone(_DomainBase):
    id: int
    # Issues reference milestones by number, not by id.
    number: int
    open: bool
    title: str
    description: str | None = None
    fk_creator: int
    open_issues: int
    closed_issues: int
    created_at: datetime
    updated_at: datetime
    closed_at: datetime | None = None
    due_on: datetime | None = None


class Issue(_DomainBase):
    number: int
    fk_milestone: int | None = None
    fk_user: int
    fk_assignee: int | None = None
    open: bool
    is_pull_request: bool
    title: str
    body: str
    locked: bool
    comment_count: int
    closed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class IssueLabel(_DomainBase):
    fk_issue: int
    label: str
    color: str


class IssueComment(_DomainBase):
    id: int
    fk_issue: int
    fk_user: int
    body: str
    created_at: datetime
    updated_at: datetime
