"""RepoMedic audit package."""

from .engine import AuditEngine, audit
from .rules import RuleSet, build_rules
from .types import (
    CIMatch,
    Confidence,
    EcosystemMatch,
    FileEntry,
    ScanResult,
    ScoreComponent,
    SecretFinding,
    Severity,
)

__all__ = [
    "AuditEngine",
    "audit",
    "RuleSet",
    "build_rules",
    "CIMatch",
    "Confidence",
    "EcosystemMatch",
    "FileEntry",
    "ScanResult",
    "ScoreComponent",
    "SecretFinding",
    "Severity",
]
