"""Audit engine: walk, detect, scan, score."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from types import MappingProxyType

from repomedic.audit.detectors import detect_ci, detect_ecosystems, detect_profile
from repomedic.audit.rules import RuleSet, build_rules
from repomedic.audit.scoring import score_repository
from repomedic.audit.secrets import SecretScanner
from repomedic.audit.types import ScanResult, ScanStats
from repomedic.audit.walker import walk
from repomedic.config import AuditSettings

logger = logging.getLogger("repomedic.audit")


class AuditEngine:
    """Repository health audit.

    The rule set is compiled once in the constructor and shared by every
    scan. A bad built-in pattern raises ``PatternCompileError`` here, so
    an engine that exists can always detect secrets.
    """

    def __init__(self, rules: RuleSet | None = None, settings: AuditSettings | None = None):
        self.rules = rules or build_rules()
        self.settings = settings or AuditSettings()
        self.scanner = SecretScanner(self.rules, self.settings)

    def scan(self, path: str | Path = ".") -> ScanResult:
        """
        Audit the repository rooted at ``path``.

        Raises:
            PathNotFound: the root is missing or not a directory.
            RootAccessError: the root cannot be listed.
        """
        started = time.perf_counter()
        walked = walk(path, self.settings)
        files = walked.files

        ecosystems = detect_ecosystems(files, self.rules)
        ci = detect_ci(files, self.rules)
        profile = detect_profile(walked.root, files)
        secrets = self.scanner.scan(walked.root, files)

        card = score_repository(
            files=files,
            ci=ci,
            findings=secrets.findings,
            large_files=walked.large_files,
            rules=self.rules,
            root_dirs=walked.root_dirs,
        )

        duration_ms = int((time.perf_counter() - started) * 1000)
        result = ScanResult(
            root=str(walked.root),
            score=card.score,
            grade=card.grade,
            files=files,
            ecosystems=ecosystems,
            ci=ci,
            findings=secrets.findings,
            components=card.components,
            checks=MappingProxyType(dict(card.checks)),
            missing_required=card.missing_required,
            missing_recommended=card.missing_recommended,
            dependency_files=profile.dependency_files,
            linter_configs=profile.linter_configs,
            workspace_type=profile.workspace_type,
            large_files=walked.large_files,
            warnings=walked.warnings + secrets.warnings,
            system_errors=walked.system_errors,
            stats=ScanStats(
                files_seen=len(files),
                dirs_traversed=walked.dirs_traversed,
                files_scanned_for_secrets=secrets.scanned,
                files_skipped=secrets.skipped,
                suppressed_findings=secrets.suppressed,
                duration_ms=duration_ms,
            ),
        )
        logger.info(
            "Scanned %s in %dms: score %d (%s), %d findings",
            result.root,
            duration_ms,
            result.score,
            result.grade,
            len(result.findings),
        )
        return result


def audit(path: str | Path = ".", settings: AuditSettings | None = None) -> ScanResult:
    """One-shot convenience wrapper around ``AuditEngine``."""
    return AuditEngine(settings=settings).scan(path)
