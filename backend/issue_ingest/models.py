from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from issue_ingest.schemas.github import GitHubUser, Issue, IssueComment, IssueLabel, Milestone


class Base(DeclarativeBase):
    pass


class GitHubUserRow(Base):
    __tablename__ = "github_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    login: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    html_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    site_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @classmethod
    def from_domain(cls, user: GitHubUser) -> "GitHubUserRow":
        return cls(**user.model_dump())


class MilestoneRow(Base):
    __tablename__ = "milestones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    open: Mapped[bool] = mapped_column(Boolean, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    fk_creator: Mapped[int] = mapped_column(Integer, ForeignKey("github_users.id"), nullable=False)
    open_issues: Mapped[int] = mapped_column(Integer, nullable=False)
    closed_issues: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    due_on: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    issues: Mapped[list["IssueRow"]] = relationship("IssueRow", back_populates="milestone")

    @classmethod
    def from_domain(cls, milestone: Milestone) -> "MilestoneRow":
        return cls(**milestone.model_dump())


class IssueRow(Base):
    __tablename__ = "issues"

    number: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    fk_milestone: Mapped[int | None] = mapped_column(Integer, ForeignKey("milestones.number"), nullable=True)
    fk_user: Mapped[int] = mapped_column(Integer, ForeignKey("github_users.id"), nullable=False)
    fk_assignee: Mapped[int | None] = mapped_column(Integer, ForeignKey("github_users.id"), nullable=True)
    open: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_pull_request: Mapped[bool] = mapped_column(Boolean, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    milestone: Mapped["MilestoneRow | None"] = relationship("MilestoneRow", back_populates="issues")
    labels: Mapped[list["IssueLabelRow"]] = relationship(
        "IssueLabelRow", back_populates="issue", cascade="all, delete-orphan", order_by="IssueLabelRow.id"
    )
    comments: Mapped[list["IssueCommentRow"]] = relationship(
        "IssueCommentRow", back_populates="issue", cascade="all, delete-orphan"
    )

    @classmethod
    def from_domain(cls, issue: Issue) -> "IssueRow":
        return cls(**issue.model_dump())


class IssueLabelRow(Base):
    __tablename__ = "issue_labels"

    # Surrogate key: the API may repeat a label on one issue and labels are not deduplicated.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fk_issue: Mapped[int] = mapped_column(Integer, ForeignKey("issues.number"), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(32), nullable=False)

    issue: Mapped["IssueRow"] = relationship("IssueRow", back_populates="labels")

    @classmethod
    def from_domain(cls, label: IssueLabel) -> "IssueLabelRow":
        return cls(**label.model_dump())


class IssueCommentRow(Base):
    __tablename__ = "issue_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    fk_issue: Mapped[int] = mapped_column(Integer, ForeignKey("issues.number"), nullable=False)
    fk_user: Mapped[int] = mapped_column(Integer, ForeignKey("github_users.id"), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    issue: Mapped["IssueRow"] = relationship("IssueRow", back_populates="comments")

    @classmethod
    def from_domain(cls, comment: IssueComment) -> "IssueCommentRow":
        return cls(**comment.model_dump())
