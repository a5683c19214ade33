"""Exception hierarchy for script-sandbox.

All errors raised by the package derive from :class:`SandboxError`.  Parse
and configuration errors also subclass :class:`ValueError` so callers that
only care about "bad input" can catch the builtin type.
"""
from __future__ import annotations


class SandboxError(Exception):
    """Base class for every error raised by script-sandbox."""


class SignatureParseError(SandboxError, ValueError):
    """Raised when a definition line cannot be parsed into a signature.

    Attributes
    ----------
    line:
        The offending raw line, exactly as read from the source.
    source:
        Identifier of the definition source (path, URL, ``"<lines>"``), if known.
    line_number:
        1-based line number within the source, if known.
    """

    def __init__(
        self,
        line: str,
        reason: str,
        source: str | None = None,
        line_number: int | None = None,
    ) -> None:
        self.line = line
        self.reason = reason
        self.source = source
        self.line_number = line_number
        location = ""
        if source is not None and line_number is not None:
            location = f"[{source}:{line_number}] "
        elif source is not None:
            location = f"[{source}] "
        super().__init__(f"{location}{reason}: {line!r}")


class GateConfigError(SandboxError, ValueError):
    """Raised when an environment-read gate pattern is not a valid regex."""

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid getenv pattern {pattern!r}: {detail}")


class SandboxConfigError(SandboxError, ValueError):
    """Raised when a sandbox YAML config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class RejectedAccessError(SandboxError, PermissionError):
    """Security failure for an operation the sandbox refused.

    Instances are built by the ``reject_*`` helpers on
    :class:`~script_sandbox.whitelists.static.StaticWhitelist`; raising them is
    up to the interceptor.

    Attributes
    ----------
    signature:
        Canonical signature text of the rejected operation.
    info:
        Optional extra detail appended to the message in parentheses.
    """

    def __init__(self, signature: str, message: str, info: str | None = None) -> None:
        self.signature = signature
        self.info = info
        self.message = message
        super().__init__(message)
