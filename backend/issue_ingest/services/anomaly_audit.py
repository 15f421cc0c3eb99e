"""Opt-in strictness layer over the wire models.

The normalizers resolve bad state strings and unparseable comment URLs to
defaults without complaint. This module reports those cases so they can be
reviewed, and never changes what the normalizers produce.
"""

from typing import Literal

from pydantic import BaseModel

from issue_ingest.adapters.github_models import CommentFromJson, IssueFromJson, MilestoneFromJson
from issue_ingest.services.normalizers import parse_issue_number

KNOWN_STATES = frozenset({"open", "closed"})


class Anomaly(BaseModel):
    entity: Literal["milestone", "issue", "comment"]
    key: int
    field: str
    value: str
    reason: Literal["unrecognized_state", "issue_number_sentinel"]


def audit_milestone(wire: MilestoneFromJson) -> list[Anomaly]:
    if wire.state in KNOWN_STATES:
        return []
    return [Anomaly(entity="milestone", key=wire.number, field="state", value=wire.state, reason="unrecognized_state")]


def audit_issue(wire: IssueFromJson) -> list[Anomaly]:
    """Audit an issue and the milestone embedded in it."""
    anomalies: list[Anomaly] = []
    if wire.state not in KNOWN_STATES:
        anomalies.append(
            Anomaly(entity="issue", key=wire.number, field="state", value=wire.state, reason="unrecognized_state")
        )
    if wire.milestone is not None:
        anomalies.extend(audit_milestone(wire.milestone))
    return anomalies


def audit_comment(wire: CommentFromJson) -> list[Anomaly]:
    if parse_issue_number(wire.html_url) is not None:
        return []
    return [
        Anomaly(entity="comment", key=wire.id, field="html_url", value=wire.html_url, reason="issue_number_sentinel")
    ]
