"""
Ambient utilities for the mogrifier

Provides:
- logging: structured and console logging setup
- tracing: OpenTelemetry tracer and span helpers
"""

__all__ = ["logging", "tracing"]
