"""
Span helpers for mogrifier operations.

Attribute values that OpenTelemetry accepts natively (str, bool, int, float)
are recorded as-is; anything else is recorded as its string form.
"""

from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from .tracer import get_tracer

NATIVE_ATTRIBUTE_TYPES = (str, bool, int, float)


def attribute_value(value):
    """Coerce a value to something Span.set_attribute() accepts."""
    if isinstance(value, NATIVE_ATTRIBUTE_TYPES):
        return value
    return str(value)


@contextmanager
def trace_operation(
    operation_name: str,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
    **attributes
):
    """
    Run a block inside a new span.

    Failures mark the span with ERROR status, the exception type and message,
    and an exception event before being re-raised.

    Args:
        operation_name: Span name, e.g. "mogrifier.build"
        kind: Span kind
        **attributes: Attributes set when the span starts

    Yields:
        The active span

    Example:
        >>> with trace_operation("mogrifier.build", spec_count=len(specs)):
        ...     entries = compile_entries(specs)
    """
    tracer = get_tracer()

    with tracer.start_as_current_span(
        operation_name,
        kind=kind,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        for key, value in attributes.items():
            span.set_attribute(key, attribute_value(value))

        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)
            span.record_exception(e)
            raise


def add_span_attributes(**attributes):
    """
    Set attributes on the current span, if one is recording.

    Args:
        **attributes: Attributes to set
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        for key, value in attributes.items():
            current_span.set_attribute(key, attribute_value(value))


def add_span_event(name: str, **attributes):
    """
    Add an event to the current span, if one is recording.

    Args:
        name: Event name, e.g. "mogrifier.compiled"
        **attributes: Event attributes
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        current_span.add_event(
            name,
            attributes={k: attribute_value(v) for k, v in attributes.items()},
        )
