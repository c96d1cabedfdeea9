"""
Unit tests for mogrifier Prometheus metrics.
"""

from unittest.mock import patch

import pytest
from prometheus_client import CollectorRegistry, Counter

from mogrifier.metrics import MetricsPublisher, MogrifierMetrics, get_or_create_metric


class TestMogrifierMetrics:
    """Test MogrifierMetrics class"""

    def test_uses_custom_registry(self, registry):
        metrics = MogrifierMetrics(registry=registry)

        assert metrics.registry is registry

    def test_separate_registries_do_not_collide(self):
        MogrifierMetrics(registry=CollectorRegistry())
        MogrifierMetrics(registry=CollectorRegistry())

    def test_same_registry_reuses_metrics(self, registry):
        first = MogrifierMetrics(registry=registry)
        second = MogrifierMetrics(registry=registry)

        second.record_miss()

        assert second.names_total is first.names_total
        assert registry.get_sample_value(
            "mogrifier_names_total", {"result": "unmatched"}
        ) == 1.0

    def test_record_build_success(self, metrics, registry):
        metrics.record_build(success=True, entry_count=4)

        assert registry.get_sample_value(
            "mogrifier_builds_total", {"status": "success"}
        ) == 1.0
        assert registry.get_sample_value("mogrifier_entries") == 4.0

    def test_record_build_failure_keeps_entries(self, metrics, registry):
        metrics.record_build(success=True, entry_count=4)
        metrics.record_build(success=False)

        assert registry.get_sample_value("mogrifier_entries") == 4.0

    def test_record_match_and_miss(self, metrics, registry):
        metrics.record_match("USERS")
        metrics.record_miss()

        assert registry.get_sample_value(
            "mogrifier_entry_matches_total", {"entry": "USERS"}
        ) == 1.0
        assert registry.get_sample_value(
            "mogrifier_names_total", {"result": "unmatched"}
        ) == 1.0

    def test_record_error(self, metrics, registry):
        metrics.record_error("USERS", "TemplateIndexError")

        assert registry.get_sample_value(
            "mogrifier_errors_total",
            {"entry": "USERS", "error_type": "TemplateIndexError"},
        ) == 1.0


class TestGetOrCreateMetric:
    """Test get_or_create_metric()"""

    def test_returns_new_metric(self, registry):
        counter = get_or_create_metric(
            lambda: Counter("things_total", "Things", registry=registry),
            "things_total",
            registry,
        )

        assert registry._names_to_collectors["things_total"] is counter

    def test_unrelated_value_error_propagates(self, registry):
        def bad_factory():
            raise ValueError("invalid metric name")

        with pytest.raises(ValueError, match="invalid metric name"):
            get_or_create_metric(bad_factory, "missing", registry)


class TestMetricsPublisher:
    """Test MetricsPublisher class"""

    def test_init_with_defaults(self):
        publisher = MetricsPublisher()

        assert publisher.port == 9091
        assert publisher.registry is not None
        assert publisher.is_started() is False

    @patch("mogrifier.metrics.start_http_server")
    def test_start(self, mock_start_http_server, registry):
        publisher = MetricsPublisher(port=9200, registry=registry)

        publisher.start()

        mock_start_http_server.assert_called_once_with(9200, registry=registry)
        assert publisher.is_started() is True

    @patch("mogrifier.metrics.start_http_server")
    def test_start_twice(self, mock_start_http_server):
        publisher = MetricsPublisher()

        publisher.start()
        publisher.start()

        mock_start_http_server.assert_called_once()

    @patch(
        "mogrifier.metrics.start_http_server",
        side_effect=OSError("[Errno 98] Address already in use"),
    )
    def test_port_in_use(self, mock_start_http_server):
        publisher = MetricsPublisher(port=9091)

        with pytest.raises(RuntimeError, match="9091"):
            publisher.start()

        assert publisher.is_started() is False

    @patch("mogrifier.metrics.start_http_server", side_effect=OSError("denied"))
    def test_other_os_error_propagates(self, mock_start_http_server):
        with pytest.raises(OSError, match="denied"):
            MetricsPublisher().start()
