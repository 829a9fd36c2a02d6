from aurafarm.core.observability import configure_logging
from aurafarm.core.observability import init_sentry
from aurafarm.settings import Settings


def test_init_sentry_skips_when_dsn_missing(monkeypatch) -> None:
    """Sentry initialization is skipped when DSN is absent."""

    calls: list[dict[str, object]] = []

    def fake_init(**kwargs):
        calls.append(kwargs)

    monkeypatch.setattr("aurafarm.core.observability.sentry_sdk.init", fake_init)

    settings = Settings(sentry_dsn=None)
    init_sentry(settings)

    assert calls == []


def test_init_sentry_initializes_sdk_with_settings(monkeypatch) -> None:
    """Sentry SDK is initialized with configured runtime settings."""

    calls: list[dict[str, object]] = []

    def fake_init(**kwargs):
        calls.append(kwargs)

    monkeypatch.setattr("aurafarm.core.observability.sentry_sdk.init", fake_init)

    settings = Settings(
        sentry_dsn="https://examplePublicKey@o0.ingest.sentry.io/0",
        environment="production",
        release="abc123",
        sentry_traces_sample_rate=0.2,
    )
    init_sentry(settings)

    assert len(calls) == 1
    assert calls[0] == {
        "dsn": "https://examplePublicKey@o0.ingest.sentry.io/0",
        "environment": "production",
        "release": "abc123",
        "traces_sample_rate": 0.2,
        "send_default_pii": False,
    }


def test_configure_logging_applies_level(monkeypatch) -> None:
    """Logging is configured from the LOG_LEVEL setting."""

    calls: list[dict[str, object]] = []

    def fake_basic_config(**kwargs):
        calls.append(kwargs)

    monkeypatch.setattr(
        "aurafarm.core.observability.logging.basicConfig", fake_basic_config
    )

    configure_logging(Settings(log_level="debug"))

    assert calls[0]["level"] == "DEBUG"
