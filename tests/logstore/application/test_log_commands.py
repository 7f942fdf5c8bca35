"""Application tests for recording and purging log entries."""

from datetime import UTC, datetime, timedelta

import pytest
from logstore.entry.log_entry import LogEntry
from logstore.entry.queries import get_entry, list_entries
from logstore.entry.retention import PurgeLogEntries
from protean import current_domain
from protean.exceptions import ValidationError


class TestRecordLogEntry:
    def test_persists_entry(self, record):
        entry_id = record(correlation_id="abc-123", properties='{"attempt": 2}')
        entry = get_entry(entry_id)
        assert entry.service_name == "OrderService"
        assert entry.correlation_id == "abc-123"
        assert entry.properties == '{"attempt": 2}'

    def test_caller_timestamp_is_kept(self, record):
        at = datetime(2024, 1, 15, 10, 30)
        assert get_entry(record(timestamp=at)).timestamp == at

    def test_aware_timestamp_is_stored_as_local_time(self, record):
        at = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        stored = get_entry(record(timestamp=at)).timestamp
        assert stored.tzinfo is None
        assert stored == at.astimezone().replace(tzinfo=None)

    def test_listing_mixes_aware_and_naive_timestamps(self, record):
        naive_id = record()
        aware_id = record(timestamp=datetime(2020, 6, 1, 8, 0, tzinfo=UTC))
        assert [str(e.id) for e in list_entries().items] == [naive_id, aware_id]

    def test_invalid_level(self, record):
        with pytest.raises(ValidationError):
            record(level="Loud")

    def test_properties_must_be_json(self, record):
        with pytest.raises(ValidationError) as exc:
            record(properties="{not json")
        assert "valid JSON" in str(exc.value)

    def test_properties_length_limit(self, record):
        with pytest.raises(ValidationError):
            record(properties='{"blob": "' + "x" * 4000 + '"}')


class TestPurgeLogEntries:
    def test_deletes_only_older_entries(self, record):
        repo = current_domain.repository_for(LogEntry)
        old = LogEntry(
            level="Information",
            message="old",
            service_name="s",
            category="c",
            created_at=datetime.now() - timedelta(days=40),
        )
        repo.add(old)
        recent_id = record()

        purged = current_domain.process(
            PurgeLogEntries(older_than=datetime.now() - timedelta(days=30)), asynchronous=False
        )

        assert purged == 1
        assert [str(e.id) for e in list_entries().items] == [recent_id]

    def test_nothing_to_purge(self, record):
        record()
        purged = current_domain.process(
            PurgeLogEntries(older_than=datetime.now() - timedelta(days=1)), asynchronous=False
        )
        assert purged == 0
