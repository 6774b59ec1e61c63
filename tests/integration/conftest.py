from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _fresh_schema(db) -> None:
    # every integration test starts from empty tables
    return None
