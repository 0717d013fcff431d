from __future__ import annotations

import pytest

from tests.fakes import FakeAuditSink, FakeSchemeStore


@pytest.fixture()
def store() -> FakeSchemeStore:
    return FakeSchemeStore()


@pytest.fixture()
def audit_sink() -> FakeAuditSink:
    return FakeAuditSink()
