"""Tests for the relational table mapping of the domain entities."""

import pytest
from sqlalchemy import create_engine, event, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from issue_ingest.models import (
    Base,
    GitHubUserRow,
    IssueCommentRow,
    IssueLabelRow,
    IssueRow,
    MilestoneRow,
)
from issue_ingest.services.ingest import IngestBatch, ingest_comments, ingest_issues
from issue_ingest.services.normalizers import ISSUE_NUMBER_SENTINEL

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


def _rows(batch: IngestBatch) -> list:
    return [
        *(GitHubUserRow.from_domain(user) for user in batch.users.values()),
        *(MilestoneRow.from_domain(milestone) for milestone in batch.milestones.values()),
        *(IssueRow.from_domain(issue) for issue in batch.issues.values()),
        *(IssueLabelRow.from_domain(label) for label in batch.all_labels()),
        *(IssueCommentRow.from_domain(comment) for comment in batch.comments.values()),
    ]


def _store(engine, batch: IngestBatch) -> None:
    with Session(engine) as session:
        # Flush parents before children so the foreign keys resolve.
        for row in _rows(batch):
            session.add(row)
            session.flush()
        session.commit()


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFromDomain:
    def test_issue_row_copies_fields(self, make_issue_payload) -> None:
        batch = ingest_issues([make_issue_payload(body=None)])
        row = IssueRow.from_domain(batch.issues[1347])
        assert row.number == 1347
        assert row.fk_milestone == 3
        assert row.body == ""
        assert row.comment_count == 2

    def test_label_row_has_no_id_until_stored(self, make_issue_payload) -> None:
        batch = ingest_issues([make_issue_payload()])
        row = IssueLabelRow.from_domain(batch.labels[1347][0])
        assert row.id is None
        assert (row.fk_issue, row.label, row.color) == (1347, "bug", "f29513")


class TestStorage:
    def test_batch_round_trips_through_tables(self, engine, make_issue_payload, make_comment_payload) -> None:
        labels = [{"name": "dup", "color": "111111"}, {"name": "dup", "color": "111111"}]
        batch = ingest_issues([make_issue_payload(labels=labels)])
        ingest_comments([make_comment_payload()], batch=batch)
        _store(engine, batch)

        with Session(engine) as session:
            issue = session.scalars(select(IssueRow)).one()
            assert issue.milestone is not None and issue.milestone.number == 3
            assert [label.label for label in issue.labels] == ["dup", "dup"]
            assert [comment.id for comment in issue.comments] == [1]

    def test_issue_ingested_in_two_pages_stores_once(self, engine, make_issue_payload) -> None:
        batch = ingest_issues([make_issue_payload()])
        ingest_issues([make_issue_payload(title="edited", updated_at="2012-01-01T00:00:00Z")], batch=batch)
        _store(engine, batch)

        with Session(engine) as session:
            issue = session.scalars(select(IssueRow)).one()
            assert issue.title == "edited"
            assert [label.label for label in issue.labels] == ["bug", "needs triage"]

    def test_sentinel_comment_violates_foreign_key(self, engine, make_issue_payload, make_comment_payload) -> None:
        batch = ingest_issues([make_issue_payload()])
        _store(engine, batch)

        orphan = ingest_comments([make_comment_payload(html_url="https://example.com/")])
        assert orphan.comments[1].fk_issue == ISSUE_NUMBER_SENTINEL
        with Session(engine) as session:
            session.add(IssueCommentRow.from_domain(orphan.comments[1]))
            with pytest.raises(IntegrityError):
                session.commit()
