import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_logger = logging.getLogger("audit")


def _email_hash(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    h = hashlib.sha256(email.lower().encode()).hexdigest()
    return h[:12]


def audit(event: str, *, email: Optional[str] = None, **fields: Any) -> None:
    """Emit a minimally structured audit log as a single JSON line.

    Email is hashed so sign-up addresses never reach the logs.
    """
    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
    }
    if email:
        payload["email_hash"] = _email_hash(email)
    if fields:
        payload.update(fields)
    try:
        _logger.info(json.dumps(payload, ensure_ascii=False))
    except (TypeError, ValueError):
        # Fallback to plain message if a field is not JSON serializable
        _logger.info(f"AUDIT {event} email_hash={payload.get('email_hash')} fields={fields}")
