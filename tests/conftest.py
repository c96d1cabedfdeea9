"""
Pytest configuration and shared fixtures for mogrifier tests.
"""

import logging
import logging.handlers
import os

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from prometheus_client import CollectorRegistry

from mogrifier import EntrySpec, MogrifierMetrics


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "property: property-based tests")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers installed by setup_logging() and restore the root level."""
    root_logger = logging.getLogger()
    level = root_logger.level

    yield

    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            handler.close()
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def clear_mogrifier_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without mogrifier or logging variables."""
    for key in list(os.environ):
        if key.startswith("DOG_STATSD_MOGRIFIER") or key.startswith("LOG_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def registry() -> CollectorRegistry:
    """Private Prometheus registry."""
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> MogrifierMetrics:
    return MogrifierMetrics(registry=registry)


@pytest.fixture
def span_exporter(monkeypatch: pytest.MonkeyPatch) -> InMemorySpanExporter:
    """Collect spans created through trace_operation()."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(
        "mogrifier.utils.tracing.context.get_tracer",
        lambda: provider.get_tracer("test"),
    )
    return exporter


@pytest.fixture
def user_specs() -> list[EntrySpec]:
    """Two overlapping mogrifiers; the specific one is configured first."""
    return [
        EntrySpec(
            pattern=r"^users\.(\d+)\.(\w+)$",
            name_template="users.$2",
            tag_templates={"user_id": "$1"},
            key="USERS",
        ),
        EntrySpec(
            pattern=r"^(\w+)\.(\d+)\.(\w+)$",
            name_template="$1.$3",
            tag_templates={"id": "$2", "kind": "$1"},
            key="GENERIC",
        ),
    ]
