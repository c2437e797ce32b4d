from app.models.waitlist_entry import WaitlistEntry, CSV_HEADER

__all__ = [
    "WaitlistEntry",
    "CSV_HEADER",
]
