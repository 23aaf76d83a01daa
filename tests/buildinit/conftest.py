import os

import pytest


@pytest.fixture(autouse=True)
def clean_buildinit_env(monkeypatch):
    """Config read from the developer's environment should never leak into tests."""
    for k in list(os.environ):
        if k == "BUILDINIT_CONFIG" or k.startswith("BUILDINIT_INIT_"):
            monkeypatch.delenv(k)


@pytest.fixture
def warnings_sink():
    return []
