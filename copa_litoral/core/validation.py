"""Input filters and sanitization applied at the HTTP boundary.

The SQL and markup filters are denylist heuristics. Queries are always
parameterized by SQLAlchemy; these filters only keep obviously hostile
usernames out of the store.
"""

from __future__ import annotations

import html
import re
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator

SQL_INJECTION_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(union|select|insert|update|delete|drop|create|alter|exec|execute)",
        r"(or|and)\s+\d+\s*=\s*\d+",
        r"(or|and)\s+['\"].*['\"]",
        r"(\-\-|\#|\/\*)",
        r"(script|javascript|vbscript)",
    )
)
UNSAFE_CHARACTERS = frozenset("<>&\"'/\\")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def looks_like_sql_injection(value: str) -> bool:
    return any(pattern.search(value) for pattern in SQL_INJECTION_PATTERNS)


def has_unsafe_characters(value: str) -> bool:
    return any(char in UNSAFE_CHARACTERS for char in value)


def sanitize_text(value: str) -> str:
    escaped = html.escape(value, quote=True)
    cleaned = "".join(char for char in escaped if ord(char) >= 32 or char in "\n\r\t")
    return cleaned.strip()


def normalize_phone(value: str) -> str:
    return _PHONE_SEPARATORS.sub("", value.strip())


def _check_no_sql_injection(value: str) -> str:
    if looks_like_sql_injection(value):
        raise ValueError("contains a forbidden pattern")
    return value


def _check_safe_string(value: str) -> str:
    if has_unsafe_characters(value):
        raise ValueError("contains forbidden characters")
    return value


def _check_phone(value: str) -> str:
    normalized = normalize_phone(value)
    if not PHONE_PATTERN.match(normalized):
        raise ValueError("invalid phone number")
    return normalized


def _sanitize_optional(value: object) -> object:
    if isinstance(value, str):
        return sanitize_text(value)
    return value


SanitizedText = Annotated[str, BeforeValidator(_sanitize_optional)]
Username = Annotated[
    str,
    AfterValidator(_check_no_sql_injection),
    AfterValidator(_check_safe_string),
]
PhoneNumber = Annotated[str, AfterValidator(_check_phone)]
