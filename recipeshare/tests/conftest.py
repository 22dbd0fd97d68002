from __future__ import annotations

import pytest

from recipeshare.app import app
from recipeshare.storage import InMemoryDocumentStore, get_store, set_store

# Tests always run against the in-process store, whatever MONGO_URI says
set_store(InMemoryDocumentStore())


@pytest.fixture(autouse=True)
def _clean_state():
    get_store().clear()
    yield
    app.dependency_overrides.clear()
