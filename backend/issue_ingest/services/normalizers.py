"""Normalizers: map GitHub wire payloads onto the domain entities.

Every function here is total over structurally valid input. Unrecognized state
strings and unparseable comment URLs degrade to documented defaults instead of
raising.
"""

import re
from datetime import UTC, datetime
from typing import NamedTuple

import structlog

from issue_ingest.adapters.github_models import CommentFromJson, IssueFromJson, LabelFromJson, MilestoneFromJson
from issue_ingest.schemas.github import Issue, IssueComment, IssueLabel, Milestone

logger = structlog.get_logger(__name__)

OPEN_STATE = "open"

# Largest signed 32-bit integer. Out of range for any real issue number, so a
# comment carrying it can be found by a foreign-key check or an audit query.
ISSUE_NUMBER_SENTINEL = 2**31 - 1
_INT32_MIN = -(2**31)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class NormalizedIssue(NamedTuple):
    issue: Issue
    milestone: Milestone | None
    labels: list[IssueLabel]


def to_naive_utc(value: datetime) -> datetime:
    """Drop the offset after shifting to UTC. Naive values are assumed to be UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _optional_naive_utc(value: datetime | None) -> datetime | None:
    return to_naive_utc(value) if value is not None else None


def is_open_state(state: str) -> bool:
    return state == OPEN_STATE


def normalize_milestone(wire: MilestoneFromJson) -> Milestone:
    return Milestone(
        id=wire.id,
        number=wire.number,
        open=is_open_state(wire.state),
        title=wire.title,
        description=wire.description,
        fk_creator=wire.creator.id,
        open_issues=wire.open_issues,
        closed_issues=wire.closed_issues,
        created_at=to_naive_utc(wire.created_at),
        updated_at=to_naive_utc(wire.updated_at),
        closed_at=_optional_naive_utc(wire.closed_at),
        due_on=_optional_naive_utc(wire.due_on),
    )


def normalize_label(wire: LabelFromJson, issue_number: int) -> IssueLabel:
    return IssueLabel(fk_issue=issue_number, label=wire.name, color=wire.color)


def normalize_issue(wire: IssueFromJson) -> NormalizedIssue:
    """Build the issue plus the milestone and labels embedded in it.

    Labels keep wire order and all point at ``wire.number``. The issue's milestone
    key is the milestone's ``number``, matching the returned Milestone.
    """
    labels = [normalize_label(label, wire.number) for label in wire.labels or []]

    fk_milestone = wire.milestone.number if wire.milestone is not None else None
    milestone = normalize_milestone(wire.milestone) if wire.milestone is not None else None

    issue = Issue(
        number=wire.number,
        fk_milestone=fk_milestone,
        fk_user=wire.user.id,
        fk_assignee=wire.assignee.id if wire.assignee is not None else None,
        open=is_open_state(wire.state),
        is_pull_request=wire.pull_request is not None,
        title=wire.title,
        body=wire.body if wire.body is not None else "",
        locked=wire.locked,
        comment_count=wire.comments,
        closed_at=_optional_naive_utc(wire.closed_at),
        created_at=to_naive_utc(wire.created_at),
        updated_at=to_naive_utc(wire.updated_at),
    )
    return NormalizedIssue(issue=issue, milestone=milestone, labels=labels)


def parse_issue_number(html_url: str) -> int | None:
    """Recover the issue number from a comment URL such as ``.../issues/42#issuecomment-1``.

    Returns None when the last path segment before the first ``#`` is not a
    signed 32-bit integer.
    """
    issue_path = html_url.split("#", 1)[0]
    last_segment = issue_path.split("/")[-1]
    if not _INTEGER_RE.fullmatch(last_segment):
        return None
    number = int(last_segment)
    if not _INT32_MIN <= number <= ISSUE_NUMBER_SENTINEL:
        return None
    return number


def normalize_comment(wire: CommentFromJson) -> IssueComment:
    fk_issue = parse_issue_number(wire.html_url)
    if fk_issue is None:
        logger.warning(
            "comment_issue_number_unparseable",
            comment_id=wire.id,
            html_url=wire.html_url,
            fallback=ISSUE_NUMBER_SENTINEL,
        )
        fk_issue = ISSUE_NUMBER_SENTINEL

    return IssueComment(
        id=wire.id,
        fk_issue=fk_issue,
        fk_user=wire.user.id,
        body=wire.body,
        created_at=to_naive_utc(wire.created_at),
        updated_at=to_naive_utc(wire.updated_at),
    )
