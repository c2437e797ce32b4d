from dataclasses import asdict, dataclass
import json
import re

CSV_COLUMNS = ("timestamp", "name", "email", "instagram")
CSV_HEADER = ",".join(CSV_COLUMNS) + "\n"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def to_csv_cell(value) -> str:
    """Quote one CSV field: double inner quotes, collapse line breaks to a space."""
    safe = _LINE_BREAK.sub(" ", str(value).replace('"', '""'))
    return f'"{safe}"'


@dataclass(frozen=True)
class WaitlistEntry:
    timestamp: str
    name: str
    email: str
    instagram: str

    def to_csv_row(self) -> str:
        """One LF-terminated record with every field quoted."""
        return ",".join(to_csv_cell(getattr(self, column)) for column in CSV_COLUMNS) + "\n"

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))
