"""
RepoMedic — Custom Exceptions.

Only root-level failures escape a scan. Per-entry problems are absorbed
into the result as soft warnings.
"""


class RepomedicError(Exception):
    """Base exception for all RepoMedic errors."""


class PathNotFound(RepomedicError):
    """Raised when the scan root does not exist or is not a directory."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path not found or not a directory: {path}")


class RootAccessError(RepomedicError):
    """Raised when the scan root exists but cannot be listed."""

    def __init__(self, path, reason: str = ""):
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot read directory {path}{detail}")


class PatternCompileError(RepomedicError):
    """Raised when a built-in detection pattern fails to compile.

    Scanning must not proceed without secret detection, so this is
    fatal at engine construction.
    """

    def __init__(self, rule_id: str, pattern: str, reason: str):
        self.rule_id = rule_id
        self.pattern = pattern
        super().__init__(f"Rule '{rule_id}' has an invalid pattern {pattern!r}: {reason}")


class UnreadableFile(RepomedicError):
    """Raised when a file cannot be read or decoded during a secret scan."""

    def __init__(self, path: str, kind: str, reason: str):
        self.path = path
        self.kind = kind
        super().__init__(f"{path}: {reason}")
