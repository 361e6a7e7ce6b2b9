"""Sentry setup on app creation."""

import pytest

from storefront.main import create_app
from storefront.utils import monitoring


@pytest.fixture()
def sentry_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(monitoring.sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))
    return calls


class TestSentry:
    def test_disabled_without_dsn(self, sentry_calls):
        assert monitoring.init_sentry("") is False
        assert sentry_calls == []

    def test_enabled_with_dsn(self, sentry_calls):
        dsn = "https://key@o0.ingest.sentry.io/1"

        assert monitoring.init_sentry(dsn) is True
        assert sentry_calls[0]["dsn"] == dsn
        assert sentry_calls[0]["traces_sample_rate"] == monitoring.SENTRY_TRACES_SAMPLE_RATE

    def test_create_app_initialises_sentry(self, state, sentry_calls):
        create_app(state, sentry_dsn="https://key@o0.ingest.sentry.io/1")
        assert len(sentry_calls) == 1
