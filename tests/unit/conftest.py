"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from pagegather.core import config as config_module
from pagegather.runtime import paging as paging_module
from pagegather.runtime.chunking import pool as pool_module


@pytest.fixture(autouse=True)
def reset_process_defaults(monkeypatch):
    """Isolate tests from the process-wide config, pool and handler."""
    for name in (
        "PAGEGATHER_MAX_PAGE_SIZE",
        "PAGEGATHER_LIST_ALL_PARALLELISM",
        "PAGEGATHER_MAX_WORKERS",
        "PAGEGATHER_MAX_CHUNKS",
    ):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    monkeypatch.setattr(pool_module, "_default_pool", None)
    monkeypatch.setattr(paging_module, "_default_handler", None)
    yield
    config_module.reset_config()
