from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from copa_litoral.core.validation import (
    PhoneNumber,
    SanitizedText,
    Username,
    has_unsafe_characters,
    looks_like_sql_injection,
    normalize_phone,
    sanitize_text,
)


class _Payload(BaseModel):
    nombre_usuario: Username | None = None
    telefono_wsp: PhoneNumber | None = None
    club: SanitizedText | None = None


@pytest.mark.parametrize(
    "value",
    [
        "admin' OR 1=1",
        "robert'); DROP TABLE usuarios",
        "x -- comment",
        "name /* hidden */",
        "javascript:alert",
        "union all",
    ],
)
def test_sql_injection_patterns_detected(value: str) -> None:
    assert looks_like_sql_injection(value) is True


@pytest.mark.parametrize("value", ["lucia", "ana_lopez", "jugador22"])
def test_plain_usernames_pass_filters(value: str) -> None:
    assert looks_like_sql_injection(value) is False
    assert has_unsafe_characters(value) is False


def test_sanitize_text_escapes_markup_and_strips_control_characters() -> None:
    assert sanitize_text("  <b>Club</b>\x00\x07 ") == "&lt;b&gt;Club&lt;/b&gt;"
    assert sanitize_text("linea 1\nlinea 2\t") == "linea 1\nlinea 2"


def test_normalize_phone_removes_separators() -> None:
    assert normalize_phone(" +54 9 341-123 (4567) ") == "+5493411234567"


def test_username_type_rejects_hostile_values() -> None:
    with pytest.raises(ValidationError):
        _Payload(nombre_usuario="admin' OR 1=1")
    with pytest.raises(ValidationError):
        _Payload(nombre_usuario="<lucia>")
    assert _Payload(nombre_usuario="lucia").nombre_usuario == "lucia"


def test_phone_type_normalizes_and_validates() -> None:
    assert _Payload(telefono_wsp="+54 341-555 0000").telefono_wsp == "+543415550000"
    with pytest.raises(ValidationError):
        _Payload(telefono_wsp="0341-555")
    with pytest.raises(ValidationError):
        _Payload(telefono_wsp="telefono")


def test_sanitized_text_type_escapes_input() -> None:
    assert _Payload(club="Club <Rosario>").club == "Club &lt;Rosario&gt;"
    assert _Payload(club=None).club is None
