from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from core import config


def log_event(trip_id: str, event: str, data: Dict[str, Any]) -> None:
    """
    Append a structured trip event as a JSON line to TRIP_EVENT_LOG.
    Does nothing when no log path is configured.
    """
    if not config.TRIP_EVENT_LOG:
        return
    try:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "trip_id": trip_id,
            "event": event,
            "data": data,
        }
        path = Path(config.TRIP_EVENT_LOG)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except (OSError, TypeError, ValueError):
        # The audit trail must never fail a request.
        return
