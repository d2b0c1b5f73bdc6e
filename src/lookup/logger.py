from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def log_event(event: str, data: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Append a structured log entry as JSON. No path means event logging is off.
    """
    if path is None:
        return
    try:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "data": data,
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except Exception:
        # Logging should never break a lookup; swallow failures.
        return
