"""
Error taxonomy for code-control.

Every failure the core can surface carries a machine-readable code and a
context mapping. The CLI is the only layer that turns these into exit codes.
"""

from typing import Any


class ControlError(Exception):
    """Base exception for all code-control errors.

    Example:
        raise ControlError(
            code="SOURCE_NOT_FOUND",
            message="Source path does not exist",
            path="src/",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(message)

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Discovery Errors
# ==============================================================================


class DiscoveryError(ControlError):
    """Error while locating or reading source files."""


class SourceNotFoundError(DiscoveryError):
    """The directory (or file) to scan does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(code="SOURCE_NOT_FOUND", message=f"Source path does not exist: {path}", path=path)


class SourceReadError(DiscoveryError):
    """A matching source file could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            code="SOURCE_READ_FAILED",
            message=f"Could not read source file {path}: {reason}",
            path=path,
            reason=reason,
        )


# ==============================================================================
# Grammar Errors
# ==============================================================================


class GrammarError(ControlError):
    """Error while obtaining a parser for a language."""


class UnsupportedLanguageError(GrammarError):
    def __init__(self, language: str) -> None:
        super().__init__(
            code="UNSUPPORTED_LANGUAGE",
            message=f"Unsupported language: {language}",
            language=language,
        )


class GrammarUnavailableError(GrammarError):
    """Language is known but its grammar could not be loaded."""

    def __init__(self, language: str, reason: str) -> None:
        super().__init__(
            code="GRAMMAR_UNAVAILABLE",
            message=f"Could not load parser for language {language}: {reason}",
            language=language,
            reason=reason,
        )


# ==============================================================================
# Snapshot Errors
# ==============================================================================


class SnapshotError(ControlError):
    """Error while reading or writing a snapshot file."""


class SnapshotNotFoundError(SnapshotError):
    def __init__(self, path: str, reason: str = "") -> None:
        message = f"Snapshot file not readable: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(code="SNAPSHOT_NOT_FOUND", message=message, path=path)


class SnapshotWriteError(SnapshotError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            code="SNAPSHOT_WRITE_FAILED",
            message=f"Error generating file {path}: {reason}",
            path=path,
            reason=reason,
        )


class SnapshotCompressionError(SnapshotError):
    """Snapshot bytes are not a valid compressed stream."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code="SNAPSHOT_DECOMPRESSION_FAILED",
            message=f"Snapshot could not be decompressed: {reason}",
            reason=reason,
        )


class SnapshotDecodeError(SnapshotError):
    """Decompressed payload is not a well-formed snapshot."""

    def __init__(self, reason: str, code: str = "SNAPSHOT_DECODE_FAILED") -> None:
        super().__init__(code=code, message=f"Snapshot could not be decoded: {reason}", reason=reason)


class SnapshotVersionError(SnapshotDecodeError):
    def __init__(self, found: object, expected: int) -> None:
        super().__init__(
            f"unsupported snapshot version {found!r} (expected {expected})",
            code="SNAPSHOT_VERSION_MISMATCH",
        )
        self.context.update(found=found, expected=expected)


# ==============================================================================
# Run-level Errors
# ==============================================================================


class NoRegionsFoundError(ControlError):
    """Extraction over the whole tree yielded nothing to record."""

    def __init__(self, path: str) -> None:
        super().__init__(code="NO_REGIONS_FOUND", message="No commented code found.", path=path)


class ConfigError(ControlError):
    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="CONFIG_ERROR", message=message, **context)
