from pathlib import Path
import asyncio
import errno
import logging
import os
import uuid

from app.core.exceptions import StorageError
from app.models.waitlist_entry import CSV_HEADER, WaitlistEntry

logger = logging.getLogger(__name__)

# link() failures that mean the filesystem has no hard links
LINK_UNSUPPORTED = {errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS}


class FileStore:
    """Append-only CSV file of waitlist entries.

    The file is created lazily with its header line; every append re-checks
    that it exists, so a deleted file is recreated on the next submission.
    Rows go out as one unbuffered append-mode write each, which keeps
    concurrent appends from interleaving without any in-process lock.
    """

    name = "file"

    def __init__(self, path: Path):
        self.path = Path(path)

    async def initialize(self) -> None:
        try:
            await asyncio.to_thread(self._ensure_file)
        except OSError as e:
            logger.exception(f"❌ Could not initialize waitlist file {self.path}: {e}")
            raise StorageError("Unable to initialize waitlist file.", details=str(e)) from e

    async def append(self, entry: WaitlistEntry) -> None:
        data = entry.to_csv_row().encode("utf-8")
        try:
            await asyncio.to_thread(self._append_bytes, data)
        except OSError as e:
            logger.exception(f"❌ Could not append to waitlist file {self.path}: {e}")
            raise StorageError(StorageError.public_message, details=str(e)) from e

    async def close(self) -> None:
        return None

    def _ensure_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            return

        # Write the header aside and hard-link it into place so the file never
        # exists without its header, and a racing initializer cannot add a second one
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")
        tmp_path.write_text(CSV_HEADER, encoding="utf-8")
        try:
            os.link(tmp_path, self.path)
            logger.info(f"📄 Created waitlist file at {self.path}")
        except FileExistsError:
            pass
        except OSError as e:
            if e.errno not in LINK_UNSUPPORTED:
                raise
            logger.info(f"Hard links unsupported at {self.path.parent}; creating header in place")
            self._create_exclusive()
        finally:
            tmp_path.unlink(missing_ok=True)

    def _create_exclusive(self) -> None:
        try:
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY | os.O_APPEND, 0o644)
        except FileExistsError:
            return
        try:
            os.write(fd, CSV_HEADER.encode("utf-8"))
        finally:
            os.close(fd)
        logger.info(f"📄 Created waitlist file at {self.path}")

    def _append_bytes(self, data: bytes) -> None:
        self._ensure_file()
        with open(self.path, "ab", buffering=0) as fh:
            written = fh.write(data)
        if written != len(data):
            raise OSError(f"short write to {self.path}: {written} of {len(data)} bytes")
