"""
Exception hierarchy for metric name mogrification.

All configuration problems are raised while building a mogrifier set;
mogrify() itself never raises.
"""


class MogrifierError(Exception):
    """Base class for mogrifier errors."""


class ConfigurationError(MogrifierError):
    """Entry configuration is invalid or incomplete."""


class PatternCompileError(ConfigurationError):
    """A configured pattern is not a valid regular expression."""

    def __init__(self, key: str, pattern: str, reason: str):
        self.key = key
        self.pattern = pattern
        self.reason = reason
        super().__init__(
            f"failed to compile pattern for {key}: {pattern!r}: {reason}"
        )


class TemplateIndexError(ConfigurationError):
    """A template references a capture group the pattern does not produce."""

    def __init__(
        self,
        index: int,
        available: int,
        key: str | None = None,
        template: str | None = None,
    ):
        self.index = index
        self.available = available
        self.key = key
        self.template = template

        message = f"placeholder ${index} out of range ({available} capture(s) available)"
        if template is not None:
            message = f"template {template!r}: {message}"
        if key is not None:
            message = f"mogrifier {key}: {message}"
        super().__init__(message)
