"""Journal tests: JSONL records and serialization failures."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from weathernow.exceptions import JournalError
from weathernow.journal import JournalWriter, _json_default
from weathernow.models import Coordinate, OrchestratorState, ResolvedLocation


def test_write_event_appends_jsonl_records(tmp_path: Path) -> None:
    writer = JournalWriter(journal_dir=tmp_path / "journal", session_id="abc123")
    writer.write_event("startup", payload={"hourly_max_print": 12})
    writer.write_event("shutdown", payload={"exit_code": 0}, metadata={"session_id": "abc123"})

    lines = writer.events_path.read_text(encoding="utf-8").strip().splitlines()
    records = [json.loads(line) for line in lines]
    assert [r["event_type"] for r in records] == ["startup", "shutdown"]
    assert records[0]["session_id"] == "abc123"
    assert records[0]["metadata"] == {}
    assert records[1]["payload"] == {"exit_code": 0}
    assert writer.events_path.name == f"{datetime.now(UTC):%Y%m%d}.jsonl"


def test_json_default_normalizes_datetimes_to_utc() -> None:
    aware = datetime(2025, 8, 16, 7, 0, tzinfo=timezone(timedelta(hours=-7)))
    assert _json_default(aware) == "2025-08-16T14:00:00+00:00"
    assert _json_default(datetime(2025, 8, 16, 7, 0)) == "2025-08-16T07:00:00+00:00"
    assert _json_default(Path("data/journal")) == str(Path("data/journal"))


def test_unserializable_payload_raises_journal_error(tmp_path: Path) -> None:
    writer = JournalWriter(journal_dir=tmp_path, session_id="abc123")
    with pytest.raises(JournalError, match="Failed writing event journal"):
        writer.write_event("bad", payload={"value": object()})


def test_unknown_event_type_is_rejected(tmp_path: Path) -> None:
    writer = JournalWriter(journal_dir=tmp_path, session_id="abc123")
    with pytest.raises(JournalError, match="Unknown journal event type"):
        writer.write_event("trade_submitted", payload={})  # type: ignore[arg-type]
    assert not writer.events_path.exists()


def test_record_state_journals_phase_changes_only(tmp_path: Path) -> None:
    writer = JournalWriter(journal_dir=tmp_path, session_id="abc123")
    location = ResolvedLocation(
        name="Seattle", coordinate=Coordinate(latitude=47.6062, longitude=-122.3321)
    )
    loading = OrchestratorState(phase="loading", is_loading=True)

    writer.record_state(loading)
    writer.record_state(loading.model_copy(update={"location": location}))
    writer.record_state(
        OrchestratorState(
            phase="failed", error_message="Network error: HTTP 500", location=location
        )
    )

    records = [
        json.loads(line)
        for line in writer.events_path.read_text(encoding="utf-8").strip().splitlines()
    ]
    assert [r["event_type"] for r in records] == ["state_transition", "state_transition"]
    assert [r["payload"]["phase"] for r in records] == ["loading", "failed"]
    failed = records[1]["payload"]
    assert failed["error_message"] == "Network error: HTTP 500"
    assert failed["location"] == "Seattle"
    assert failed["hourly_count"] == 0
    assert failed["current_dt"] is None
