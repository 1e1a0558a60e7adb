"""Tests for configuration lookups, the application logger and health checks.

Run with: pytest tests/test_config.py -v
"""

import logging
from datetime import timedelta

import pytest

from eventease import dependencies
from eventease.services import ApplicationLogger, ConfigurationService, HealthCheckService
from eventease.stores.django_store import DjangoEventStore
from eventease.stores.memory import InMemoryEventStore

VALUES = {
    "application": {"name": "EventEase", "environment": "Development"},
    "features": {"sample_event_count": "12", "enable_sample_data": "true", "broken": "lots"},
    "security": {"enable_audit_logging": False},
}


class TestConfigurationService:
    """Dotted-key lookups with default fallback."""

    @pytest.fixture
    def config(self) -> ConfigurationService:
        return ConfigurationService(VALUES)

    def test_nested_lookup(self, config):
        assert config.get_setting("application.name") == "EventEase"

    def test_missing_key_returns_default(self, config):
        assert config.get_setting("application.missing", "fallback") == "fallback"
        assert config.get_int("nope.nothing", 7) == 7

    def test_typed_lookups_parse_strings(self, config):
        assert config.get_int("features.sample_event_count") == 12
        assert config.get_bool("features.enable_sample_data") is True

    def test_unparsable_values_fall_back(self, config):
        assert config.get_int("features.broken", 3) == 3
        assert config.get_bool("features.broken", True) is True

    def test_get_section(self, config):
        assert config.get_section("security") == {"enable_audit_logging": False}
        assert config.get_section("application.name") == {}

    def test_environment_flags(self, config):
        assert config.is_development
        assert not config.is_production
        assert ConfigurationService({}).environment == "Development"

    def test_defaults_to_django_settings(self, settings):
        settings.EVENTEASE = {"application": {"environment": "Production"}}
        assert ConfigurationService().is_production


class TestApplicationLogger:
    def test_user_actions_respect_audit_switch(self, caplog):
        disabled = ApplicationLogger(ConfigurationService(VALUES))
        enabled = ApplicationLogger(ConfigurationService({"security": {"enable_audit_logging": True}}))
        with caplog.at_level(logging.INFO, logger="eventease.audit"):
            assert not disabled.log_user_action("register", "event 1")
            assert enabled.log_user_action("register", "event 1", "ada@example.com")
        records = [r for r in caplog.records if r.getMessage().startswith("User Action")]
        assert len(records) == 1
        assert records[0].user_id == "ada@example.com"

    def test_debug_only_in_development(self, caplog):
        production = ApplicationLogger(
            ConfigurationService({"application": {"environment": "Production"}})
        )
        with caplog.at_level(logging.DEBUG, logger="eventease.audit"):
            production.debug("hidden")
            ApplicationLogger(ConfigurationService(VALUES)).debug("shown")
        messages = [r.getMessage() for r in caplog.records]
        assert "shown" in messages
        assert "hidden" not in messages

    def test_log_performance_reports_milliseconds(self, caplog):
        app_logger = ApplicationLogger(ConfigurationService(VALUES))
        with caplog.at_level(logging.INFO, logger="eventease.audit"):
            app_logger.log_performance("query", timedelta(milliseconds=12.5), {"rows": 3})
        assert caplog.records[-1].getMessage() == "Performance: query completed in 12.50ms"


class TestHealthCheckService:
    @pytest.fixture
    def health(self, event_service, attendance_service) -> HealthCheckService:
        config = ConfigurationService(VALUES)
        return HealthCheckService(config, event_service, attendance_service, ApplicationLogger(config))

    def test_all_probes_healthy(self, health):
        status = health.get_health_status()
        assert status.is_healthy
        assert status.details == {"total_checks": 4, "failed_checks": 0, "environment": "Development"}
        by_name = {check.name: check for check in status.checks}
        assert by_name["EventService"].data["event_count"] == 5

    def test_failing_probe_is_critical(self, attendance_service, event_service):
        class Exploding:
            def list_events(self):
                raise RuntimeError("database away")

        config = ConfigurationService(VALUES)
        health = HealthCheckService(config, Exploding(), attendance_service, ApplicationLogger(config))
        result = health.check_service("EventService")
        assert result.status == "Critical"
        assert result.data["exception"] == "RuntimeError"
        assert not health.is_system_healthy()

    def test_unknown_service(self, health):
        assert health.check_service("Teleporter").status == "Unknown"


class TestDependencies:
    """Tests for service wiring from settings."""

    def test_memory_backend_is_seeded_from_sample_data(self, settings):
        settings.EVENTEASE = {
            "storage": {"backend": "memory"},
            "features": {"enable_sample_data": True, "sample_event_count": 12},
        }
        dependencies.reset()
        store = dependencies.get_event_store()
        assert isinstance(store, InMemoryEventStore)
        assert len(store.list_events()) == 12
        assert dependencies.get_event_service() is dependencies.get_event_service()

    def test_sample_data_can_be_disabled(self, settings):
        settings.EVENTEASE = {"features": {"enable_sample_data": False}}
        dependencies.reset()
        assert dependencies.get_event_store().list_events() == []
        assert dependencies.get_attendee_store().list_attendees() == []

    def test_django_backend(self, settings):
        settings.EVENTEASE = {"storage": {"backend": "Django"}}
        dependencies.reset()
        assert isinstance(dependencies.get_event_store(), DjangoEventStore)

    def test_session_service_uses_configured_limits(self, settings):
        settings.EVENTEASE = {"session": {"timeout_minutes": 5, "search_history_limit": 2}}
        dependencies.reset()
        sessions = dependencies.build_session_service(prefix="visitor:test:")
        for term in ("a", "b", "c"):
            sessions.track_search(term, 0)
        assert sessions.get_current_session().search_history == ["b", "c"]

    def test_keep_alive_uses_configured_interval(self, settings):
        settings.EVENTEASE = {"session": {"keep_alive_seconds": 3600}}
        dependencies.reset()
        sessions = dependencies.build_session_service()
        keep_alive = dependencies.start_keep_alive(sessions)
        try:
            assert keep_alive.running
            assert keep_alive.interval == 3600
        finally:
            keep_alive.stop()
        assert not keep_alive.running
