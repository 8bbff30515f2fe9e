"""Exception classes for mathfence.

Only configuration errors are fatal. Render errors are recovered inside
the span that raised them, and an unterminated code span or math span is
not an error at all (the rest of the document is kept as text).
"""

from __future__ import annotations


class MathfenceError(Exception):
    """Base exception for all mathfence errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(MathfenceError):
    """Invalid preprocessor configuration.

    Raised while building a run's configuration, before any chapter
    is scanned.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize config error.

        Args:
            message: Error description
            key: Offending configuration key (optional)
        """
        self.key = key
        self.message = message
        prefix = f"[preprocessor.mathfence] {key}: " if key else "[preprocessor.mathfence] "
        super().__init__(f"{prefix}{message}")


class MacroFileError(ConfigError):
    """Macro definitions file is missing, unreadable, or malformed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        lineno: int | None = None,
    ) -> None:
        """Initialize macro file error with optional location.

        Args:
            message: Error description
            path: Path to the macro file
            lineno: Offending line (1-indexed)
        """
        self.path = path
        self.lineno = lineno

        location = ""
        if path:
            location = path
            if lineno is not None:
                location += f":{lineno}"
            location += ": "

        super().__init__(f"{location}{message}", key="macros")


class RenderError(MathfenceError):
    """A math engine could not render a span.

    Engines raise this for malformed math source or internal failures.
    The span renderer catches it and falls back to literal output.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(message)


class PreprocessorError(MathfenceError):
    """Malformed preprocessor input (book JSON of the wrong shape)."""

    pass
