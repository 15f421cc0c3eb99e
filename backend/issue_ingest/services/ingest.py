"""Batch ingestion: raw JSON dicts in, normalized domain entities out.

Structural validation happens here, via the wire models. A record that fails
validation becomes an ``IngestFailure`` and the rest of the batch carries on.
A batch may be fed several pages; entities are keyed by their join keys, so a
record seen twice is kept once and the most recently updated copy wins.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

import structlog
from pydantic import BaseModel, Field, ValidationError

from issue_ingest.adapters.github_models import CommentFromJson, IssueFromJson
from issue_ingest.schemas.github import GitHubUser, Issue, IssueComment, IssueLabel, Milestone
from issue_ingest.services.normalizers import NormalizedIssue, normalize_comment, normalize_issue

logger = structlog.get_logger(__name__)

RecordKind = Literal["issue", "comment"]


class IngestFailure(BaseModel):
    """A payload that could not be turned into a wire model.

    ``index`` counts every payload of the same kind this batch has received,
    across calls, starting at 0.
    """

    index: int
    kind: RecordKind
    error: str


class IngestBatch(BaseModel):
    issues: dict[int, Issue] = Field(default_factory=dict)
    milestones: dict[int, Milestone] = Field(default_factory=dict)
    # Keyed by issue number; each list keeps wire order.
    labels: dict[int, list[IssueLabel]] = Field(default_factory=dict)
    comments: dict[int, IssueComment] = Field(default_factory=dict)
    users: dict[int, GitHubUser] = Field(default_factory=dict)
    failures: list[IngestFailure] = Field(default_factory=list)
    received: dict[RecordKind, int] = Field(default_factory=lambda: {"issue": 0, "comment": 0})

    def add_issue(self, normalized: NormalizedIssue) -> None:
        """Keep one issue per number; the most recently updated copy wins, labels included."""
        if normalized.milestone is not None:
            self.add_milestone(normalized.milestone)
        issue = normalized.issue
        current = self.issues.get(issue.number)
        if current is not None and issue.updated_at < current.updated_at:
            return
        self.issues[issue.number] = issue
        self.labels[issue.number] = list(normalized.labels)

    def add_milestone(self, milestone: Milestone) -> None:
        """Keep one milestone per number; the most recently updated copy wins."""
        current = self.milestones.get(milestone.number)
        if current is None or milestone.updated_at >= current.updated_at:
            self.milestones[milestone.number] = milestone

    def add_comment(self, comment: IssueComment) -> None:
        current = self.comments.get(comment.id)
        if current is None or comment.updated_at >= current.updated_at:
            self.comments[comment.id] = comment

    def add_user(self, user: GitHubUser) -> None:
        self.users[user.id] = user

    def all_labels(self) -> list[IssueLabel]:
        return [label for labels in self.labels.values() for label in labels]


def _record_failure(batch: IngestBatch, index: int, kind: RecordKind, exc: ValidationError) -> None:
    logger.warning("ingest_record_invalid", kind=kind, index=index, errors=exc.error_count())
    batch.failures.append(IngestFailure(index=index, kind=kind, error=str(exc)))


def ingest_issues(payloads: Iterable[Mapping[str, Any]], batch: IngestBatch | None = None) -> IngestBatch:
    """Validate and normalize issue payloads (pull requests included) in order.

    Pass an existing ``batch`` to accumulate into it, e.g. one page at a time or
    before adding comments.
    """
    batch = batch if batch is not None else IngestBatch()
    payloads = list(payloads)
    offset = batch.received["issue"]
    batch.received["issue"] += len(payloads)
    ingested = failed = 0

    for index, payload in enumerate(payloads, start=offset):
        try:
            wire = IssueFromJson.model_validate(payload)
        except ValidationError as exc:
            _record_failure(batch, index, "issue", exc)
            failed += 1
            continue

        ingested += 1
        batch.add_issue(normalize_issue(wire))
        if wire.milestone is not None:
            batch.add_user(wire.milestone.creator)
        batch.add_user(wire.user)
        if wire.assignee is not None:
            batch.add_user(wire.assignee)

    logger.info("ingest_batch_complete", kind="issue", received=len(payloads), issues=ingested, failures=failed)
    return batch


def ingest_comments(payloads: Iterable[Mapping[str, Any]], batch: IngestBatch | None = None) -> IngestBatch:
    batch = batch if batch is not None else IngestBatch()
    payloads = list(payloads)
    offset = batch.received["comment"]
    batch.received["comment"] += len(payloads)
    ingested = failed = 0

    for index, payload in enumerate(payloads, start=offset):
        try:
            wire = CommentFromJson.model_validate(payload)
        except ValidationError as exc:
            _record_failure(batch, index, "comment", exc)
            failed += 1
            continue

        ingested += 1
        batch.add_comment(normalize_comment(wire))
        batch.add_user(wire.user)

    logger.info("ingest_batch_complete", kind="comment", received=len(payloads), comments=ingested, failures=failed)
    return batch
