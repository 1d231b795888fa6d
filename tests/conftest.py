"""Shared pytest fixtures for the logsconfig test suite."""

from __future__ import annotations

import pytest

from logsconfig.processing_rules import ProcessingRule
from logsconfig.settings import Settings
from logsconfig.sources import FileSource, TCPSource


@pytest.fixture()
def file_source() -> FileSource:
    """Return a file source that passes validation."""
    return FileSource(path="/var/log/app/app.log", service="app", source="python")


@pytest.fixture()
def tcp_source() -> TCPSource:
    return TCPSource(port=514, service="syslog")


@pytest.fixture()
def mask_rule() -> ProcessingRule:
    return ProcessingRule(
        type="mask_sequences",
        name="mask_api_keys",
        pattern=r"api_key=\w+",
        replace_placeholder="api_key=[REDACTED]",
    )


@pytest.fixture()
def quiet_settings() -> Settings:
    """Settings that do not warn about dropped keys."""
    return Settings(warn_unknown_keys=False)
