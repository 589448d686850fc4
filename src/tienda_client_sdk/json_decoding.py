from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def safe_json_decode(value: Any) -> Any:
    """Decode a value that may or may not be JSON text.

    Audit snapshots arrive either already decoded or as JSON encoded into a
    text column. ``None``, blank text and the literal ``"null"`` decode to
    ``None``; text that does not parse is returned trimmed. Never raises.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text or text.lower() == "null":
        return None
    try:
        return json.loads(text)
    except ValueError:
        logger.warning("audit_snapshot_not_json", extra={"snippet": text[:80]})
        return text
