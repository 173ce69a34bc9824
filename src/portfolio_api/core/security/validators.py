"""Input validators shared by the request handlers."""

import re
from typing import Final

EMAIL_REGEX: Final[str] = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
SAFE_FILENAME_CHARS_REGEX: Final[str] = r"[^a-zA-Z0-9.-]"
RECORD_ID_REGEX: Final[str] = r"^[0-9]+$"

_EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(EMAIL_REGEX)
_UNSAFE_FILENAME_PATTERN: Final[re.Pattern[str]] = re.compile(SAFE_FILENAME_CHARS_REGEX)
_RECORD_ID_PATTERN: Final[re.Pattern[str]] = re.compile(RECORD_ID_REGEX)


def is_valid_email(email: str) -> bool:
    """Check the ``local@domain.tld`` shape. No deliverability checks."""
    return bool(_EMAIL_PATTERN.match(email))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_record_id(raw: str) -> int | None:
    """Parse a path identifier into a positive integer, or None if it is not one."""
    raw = raw.strip()
    if not _RECORD_ID_PATTERN.match(raw):
        return None
    value = int(raw)
    return value if value > 0 else None


def sanitize_filename(filename: str) -> str:
    """Replace every character outside ``[A-Za-z0-9.-]`` with an underscore.

    Path separators are replaced too, so the result never escapes its directory.
    """
    return _UNSAFE_FILENAME_PATTERN.sub("_", filename) or "upload"
