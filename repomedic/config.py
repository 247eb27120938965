"""
RepoMedic — Configuration.
Scan limits and tuning knobs, overridable through environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# ─── Walker ──────────────────────────────────────────────────────────
MAX_DEPTH = int(os.environ.get("REPOMEDIC_MAX_DEPTH", "20"))
LARGE_FILE_BYTES = int(os.environ.get("REPOMEDIC_LARGE_FILE_BYTES", str(5 * 1024 * 1024)))
SNIFF_BYTES = int(os.environ.get("REPOMEDIC_SNIFF_BYTES", "8192"))

# Comma-separated fnmatch globs, matched against entry names and relative paths
EXTRA_IGNORES = tuple(
    g.strip() for g in os.environ.get("REPOMEDIC_EXTRA_IGNORES", "").split(",") if g.strip()
)

# ─── Secret Scanner ──────────────────────────────────────────────────
MAX_SCAN_BYTES = int(os.environ.get("REPOMEDIC_MAX_SCAN_BYTES", str(1024 * 1024)))
WORKERS = int(os.environ.get("REPOMEDIC_WORKERS", str(min(8, os.cpu_count() or 1))))


@dataclass(frozen=True)
class AuditSettings:
    """Per-scan limits. Defaults come from the environment."""

    max_depth: int = MAX_DEPTH
    large_file_bytes: int = LARGE_FILE_BYTES
    sniff_bytes: int = SNIFF_BYTES
    max_scan_bytes: int = MAX_SCAN_BYTES
    workers: int = WORKERS
    extra_ignores: tuple[str, ...] = field(default_factory=lambda: EXTRA_IGNORES)

    @classmethod
    def from_env(cls) -> "AuditSettings":
        """Re-read REPOMEDIC_* variables (module constants are bound at import)."""
        env = os.environ
        return cls(
            max_depth=int(env.get("REPOMEDIC_MAX_DEPTH", str(MAX_DEPTH))),
            large_file_bytes=int(env.get("REPOMEDIC_LARGE_FILE_BYTES", str(LARGE_FILE_BYTES))),
            sniff_bytes=int(env.get("REPOMEDIC_SNIFF_BYTES", str(SNIFF_BYTES))),
            max_scan_bytes=int(env.get("REPOMEDIC_MAX_SCAN_BYTES", str(MAX_SCAN_BYTES))),
            workers=max(1, int(env.get("REPOMEDIC_WORKERS", str(WORKERS)))),
            extra_ignores=tuple(
                g.strip()
                for g in env.get("REPOMEDIC_EXTRA_IGNORES", ",".join(EXTRA_IGNORES)).split(",")
                if g.strip()
            ),
        )
