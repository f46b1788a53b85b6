"""Append-only JSONL journaling of fetch-cycle events."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal, get_args

from .exceptions import JournalError
from .models import OrchestratorState

EventType = Literal[
    "startup",
    "state_transition",
    "run_failure_unhandled",
    "shutdown",
]
EVENT_TYPES: frozenset[str] = frozenset(get_args(EventType))


def _json_default(value: Any) -> Any:
    """Fallback serializer for non-JSON native values."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC).isoformat()
        return value.astimezone(UTC).isoformat()
    if isinstance(value, Path):
        return str(value)
    # Objects with their own __str__ (e.g. AnyUrl) are written as strings.
    if hasattr(value, "__str__") and type(value).__str__ is not object.__str__:
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def state_payload(state: OrchestratorState) -> dict[str, Any]:
    """Summarize a published snapshot without the forecast records themselves."""
    location = state.location
    return {
        "phase": state.phase,
        "is_loading": state.is_loading,
        "error_message": state.error_message,
        "location": location.name if location is not None else None,
        "current_dt": state.current.dt if state.current is not None else None,
        "hourly_count": len(state.hourly),
        "daily_count": len(state.daily),
    }


class JournalWriter:
    """Writes fetch-cycle events to a daily JSONL file.

    One file per UTC day (``YYYYMMDD.jsonl``); every record carries the
    session id so runs sharing a file can be told apart.
    """

    def __init__(self, journal_dir: Path, session_id: str) -> None:
        self.journal_dir = journal_dir
        self.session_id = session_id
        self.journal_dir.mkdir(parents=True, exist_ok=True)
        self.events_path = self.journal_dir / f"{datetime.now(UTC):%Y%m%d}.jsonl"
        self._last_phase: str | None = None

    def write_event(
        self,
        event_type: EventType,
        payload: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Append a single event record to the JSONL journal."""
        if event_type not in EVENT_TYPES:
            raise JournalError(f"Unknown journal event type: {event_type!r}")
        record: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "event_type": event_type,
            "session_id": self.session_id,
            "payload": payload,
            "metadata": metadata or {},
        }
        try:
            with self.events_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(record, default=_json_default))
                fh.write("\n")
        except (OSError, TypeError, ValueError) as exc:
            raise JournalError(f"Failed writing event journal: {exc}") from exc

    def record_state(self, state: OrchestratorState) -> None:
        """Journal ``state`` when its phase differs from the last one recorded.

        Usable directly as an orchestrator listener.
        """
        if state.phase == self._last_phase:
            return
        self._last_phase = state.phase
        self.write_event("state_transition", payload=state_payload(state))
