"""Root test configuration: isolate each test from config files and PKGDIFF_* env vars"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Run from a clean tmp directory with no PKGDIFF_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("PKGDIFF_"):
            monkeypatch.delenv(name, raising=False)
