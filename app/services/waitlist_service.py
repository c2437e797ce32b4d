from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
import json
import logging
import re

from starlette.requests import ClientDisconnect, Request

from app.core.exceptions import BaseAppException, ValidationError
from app.models.waitlist_entry import WaitlistEntry
from app.services.waitlist_store import WaitlistStore
from app.utils.audit import audit

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1_000_000
EMAIL_REGEX = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

INVALID_EMAIL_MESSAGE = "Please provide a valid email address."
BODY_TOO_LARGE_MESSAGE = "Request body too large."
INVALID_JSON_MESSAGE = "Invalid JSON payload."
UNREADABLE_BODY_MESSAGE = "Unable to read request body."


@dataclass(frozen=True)
class WaitlistSubmission:
    name: str
    email: str
    instagram: str


def normalize_field(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def is_valid_email(email: str) -> bool:
    return EMAIL_REGEX.fullmatch(email) is not None


def normalize_submission(body: Any) -> WaitlistSubmission:
    """Trim the three known fields and reject a malformed email.

    Anything that is not a JSON object counts as an empty one, so it fails
    on the email check like any other submission without an address.
    """
    if not isinstance(body, dict):
        body = {}
    submission = WaitlistSubmission(
        name=normalize_field(body.get("name")),
        email=normalize_field(body.get("email")),
        instagram=normalize_field(body.get("instagram")),
    )
    if not is_valid_email(submission.email):
        raise ValidationError(INVALID_EMAIL_MESSAGE)
    return submission


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_entry(submission: WaitlistSubmission, now: Optional[datetime] = None) -> WaitlistEntry:
    return WaitlistEntry(
        timestamp=utc_timestamp(now),
        name=submission.name,
        email=submission.email.lower(),
        instagram=submission.instagram,
    )


def parse_json_body(raw: bytes) -> Any:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError(INVALID_JSON_MESSAGE, details=str(e)) from e
    if not text.strip():
        return {}
    try:
        # Decimal has no digit limit, so long numbers in ignored fields still parse
        return json.loads(text, parse_int=Decimal)
    except (ValueError, RecursionError) as e:
        raise ValidationError(INVALID_JSON_MESSAGE, details=f"{type(e).__name__}: {e}"[:200]) from e


class WaitlistIntake:
    """Receive -> validate -> persist for one sign-up request.

    Built once at startup around the active store. Failures surface as
    exceptions from ``app.core.exceptions``; nothing is retried.
    """

    def __init__(self, store: WaitlistStore, max_body_size: int = MAX_BODY_SIZE):
        self.store = store
        self.max_body_size = max_body_size

    async def receive(self, request: Request) -> Any:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_body_size:
            raise ValidationError(BODY_TOO_LARGE_MESSAGE, details=f"content-length={declared}", status_code=413)

        chunks = []
        size = 0
        try:
            async for chunk in request.stream():
                size += len(chunk)
                if size > self.max_body_size:
                    raise ValidationError(BODY_TOO_LARGE_MESSAGE, details=f"read {size} bytes", status_code=413)
                chunks.append(chunk)
        except ClientDisconnect as e:
            raise ValidationError(UNREADABLE_BODY_MESSAGE) from e

        return parse_json_body(b"".join(chunks))

    async def submit(self, body: Any) -> WaitlistEntry:
        try:
            submission = normalize_submission(body)
        except ValidationError:
            audit("waitlist.entry_rejected", reason="invalid_email")
            raise

        entry = build_entry(submission)
        try:
            await self.store.append(entry)
        except BaseAppException as e:
            audit("waitlist.entry_failed", email=entry.email, backend=self.store.name, error=type(e).__name__)
            raise

        audit("waitlist.entry_saved", email=entry.email, backend=self.store.name)
        return entry

    async def handle(self, request: Request) -> WaitlistEntry:
        body = await self.receive(request)
        return await self.submit(body)
