"""Errors raised by Parsed File Manager.

The engine only raises; callers (CLI, automation) decide how to report.
"""

from typing import Dict, Optional


class ParsedFileError(Exception):
    """Base error for Parsed File Manager."""
    pass


class ConfigurationError(ParsedFileError):
    """Engine misconfiguration (e.g. no default target)."""
    pass


class ParseError(ParsedFileError):
    """Target content could not be parsed.

    Attributes:
        target: Target the text came from (set by the engine on prefetch)
        line: 1-based line number, if known
    """

    def __init__(self, message: str, target: Optional[str] = None, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.target = target
        self.line = line

    def __str__(self) -> str:
        location = ""
        if self.target is not None:
            location = self.target
        if self.line is not None:
            location = f"{location}:{self.line}" if location else f"line {self.line}"
        if location:
            return f"{self.message} ({location})"
        return self.message


class AccessorError(ParsedFileError):
    """A read, write or backup of a target failed.

    Attributes:
        target: Target the operation was for
        operation: "read", "write" or "backup"
    """

    def __init__(self, message: str, target: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.target = target
        self.operation = operation


class InternalInvariantError(ParsedFileError):
    """A collaborator broke its contract. Never retried."""
    pass


class PrefetchError(ParsedFileError):
    """One or more targets failed to load during a full prefetch.

    Attributes:
        failures: Target -> error for every target that failed
    """

    def __init__(self, failures: Dict[str, ParsedFileError]):
        self.failures = dict(failures)
        targets = ", ".join(sorted(self.failures))
        super().__init__(f"Prefetch failed for {len(self.failures)} target(s): {targets}")


class FlushError(AccessorError):
    """One or more dirty targets could not be written.

    Failed targets stay dirty so a later flush retries them.

    Attributes:
        failures: Target -> error for every target that failed
        operation: The failed operation shared by every failure, or None
            when they differ (a ParseError counts as None)
    """

    def __init__(self, failures: Dict[str, ParsedFileError]):
        self.failures = dict(failures)
        targets = ", ".join(sorted(self.failures))
        operations = {getattr(e, "operation", None) for e in self.failures.values()}
        super().__init__(
            f"Flush failed for {len(self.failures)} target(s): {targets}",
            operation=operations.pop() if len(operations) == 1 else None,
        )


class UnknownAttributeError(ParsedFileError, KeyError):
    """Attribute is not declared by the resource schema."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
