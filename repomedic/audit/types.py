"""Data types for the audit engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Mapping


class Confidence(IntEnum):
    """Ordered so that max() picks the strongest evidence."""

    HEURISTIC = 1
    DEFINITE = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class FileEntry:
    """A regular file found by the walker."""

    path: str  # POSIX path relative to the scan root
    size: int
    is_text: bool

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("/"))

    @property
    def depth(self) -> int:
        """0 for files directly under the root."""
        return self.path.count("/")


@dataclass(frozen=True)
class EcosystemMatch:
    name: str  # e.g. "python", "cargo"
    kind: str  # "language" | "build_system"
    display_name: str
    confidence: Confidence
    markers: tuple[str, ...] = ()
    evidence_count: int = 0


@dataclass(frozen=True)
class CIMatch:
    provider: str
    display_name: str
    path: str


@dataclass(frozen=True)
class SecretFinding:
    """A probable credential. ``excerpt`` is always redacted."""

    rule_id: str
    severity: Severity
    path: str
    line: int  # 1-based
    excerpt: str
    fingerprint: str


@dataclass(frozen=True)
class ScoreComponent:
    key: str
    label: str
    points: int  # negative = deduction, positive = bonus
    category: str  # "required" | "recommended" | "secrets" | "hygiene"


@dataclass(frozen=True)
class ScanWarning:
    path: str
    kind: str  # "permission_denied" | "unreadable" | "undecodable"
    message: str


@dataclass(frozen=True)
class ScanStats:
    files_seen: int = 0
    dirs_traversed: int = 0
    files_scanned_for_secrets: int = 0
    files_skipped: int = 0
    suppressed_findings: int = 0
    duration_ms: int = 0


@dataclass(frozen=True)
class ScanResult:
    """Full repository audit. Read-only once built."""

    root: str
    score: int  # 0-100
    grade: str  # A-F
    files: tuple[FileEntry, ...] = ()
    ecosystems: tuple[EcosystemMatch, ...] = ()
    ci: tuple[CIMatch, ...] = ()
    findings: tuple[SecretFinding, ...] = ()
    components: tuple[ScoreComponent, ...] = ()
    checks: Mapping[str, bool] = field(default_factory=dict)  # check key -> present
    missing_required: tuple[str, ...] = ()
    missing_recommended: tuple[str, ...] = ()
    dependency_files: tuple[str, ...] = ()
    linter_configs: tuple[str, ...] = ()
    workspace_type: str | None = None
    large_files: tuple[str, ...] = ()
    warnings: tuple[ScanWarning, ...] = ()
    system_errors: tuple[str, ...] = ()
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def has_issues(self) -> bool:
        return bool(self.missing_required or self.findings)

    @property
    def has_warnings(self) -> bool:
        return bool(self.missing_recommended or self.large_files or self.warnings)

    @property
    def has_system_error(self) -> bool:
        return bool(self.system_errors)

    @property
    def is_monorepo(self) -> bool:
        return self.workspace_type is not None

    @property
    def languages(self) -> tuple[EcosystemMatch, ...]:
        return tuple(e for e in self.ecosystems if e.kind == "language")

    @property
    def build_systems(self) -> tuple[EcosystemMatch, ...]:
        return tuple(e for e in self.ecosystems if e.kind == "build_system")
