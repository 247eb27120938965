"""Secret scanner: line-by-line credential pattern matching."""

from __future__ import annotations

import hashlib
import logging
import math
import re
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from repomedic.audit.constants import EXCERPT_MAX, MASK_MIN_LENGTH, MASK_VISIBLE
from repomedic.audit.rules import RuleSet, SecretRule
from repomedic.audit.types import FileEntry, ScanWarning, SecretFinding
from repomedic.config import AuditSettings
from repomedic.exceptions import UnreadableFile

logger = logging.getLogger("repomedic.audit")

# Only \r\n, \r and \n end a line; form feeds and U+2028 do not.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def shannon_entropy(data: str) -> float:
    """Bits per character. Random tokens sit well above 3.5."""
    if not data:
        return 0.0
    length = len(data)
    return -sum((n / length) * math.log2(n / length) for n in Counter(data).values())


def mask_secret(secret: str) -> str:
    if len(secret) >= MASK_MIN_LENGTH:
        return f"{secret[:MASK_VISIBLE]}****"
    return "****"


def fingerprint(rule_id: str, path: str, line: int, secret: str) -> str:
    digest = hashlib.sha256(f"{rule_id}\x00{path}\x00{line}\x00{secret}".encode("utf-8"))
    return digest.hexdigest()[:16]


def redact(match_text: str, secret_start: int, secret_end: int) -> str:
    """Replace the secret span of ``match_text`` with its mask."""
    secret = match_text[secret_start:secret_end]
    excerpt = match_text[:secret_start] + mask_secret(secret) + match_text[secret_end:]
    excerpt = excerpt.strip()
    if len(excerpt) > EXCERPT_MAX:
        excerpt = excerpt[: EXCERPT_MAX - 3] + "..."
    return excerpt


def _looks_like_placeholder(secret: str, terms: Sequence[str]) -> bool:
    lowered = secret.lower()
    return any(term in lowered for term in terms)


@dataclass(frozen=True)
class SecretScanOutcome:
    findings: tuple[SecretFinding, ...] = ()
    warnings: tuple[ScanWarning, ...] = ()
    scanned: int = 0
    skipped: int = 0
    suppressed: int = 0


@dataclass
class _FileOutcome:
    findings: list
    warning: ScanWarning | None = None
    scanned: bool = False
    suppressed: int = 0


class SecretScanner:
    """Runs every compiled ``SecretRule`` over the text files of a walk.

    Findings come back in walker order, then line order, then rule-table
    order, whatever the number of workers.
    """

    def __init__(self, rules: RuleSet, settings: AuditSettings | None = None):
        self.rules = rules
        self.settings = settings or AuditSettings()

    # ── Per-line ────────────────────────────────────────────────────

    def _is_suppressed(self, line: str) -> bool:
        return self.rules.suppress_pattern.search(line) is not None

    def _rule_hits(self, rule: SecretRule, path: str, line_no: int, line: str):
        for pattern in rule.patterns:
            for match in pattern.finditer(line):
                if "secret" in pattern.groupindex and match.group("secret") is not None:
                    start, end = match.span("secret")
                else:
                    start, end = match.span()
                secret = line[start:end]
                if rule.min_entropy and shannon_entropy(secret) < rule.min_entropy:
                    continue
                if rule.filter_placeholders and _looks_like_placeholder(
                    secret, self.rules.placeholder_terms
                ):
                    continue
                m_start = match.start()
                yield SecretFinding(
                    rule_id=rule.rule_id,
                    severity=rule.severity,
                    path=path,
                    line=line_no,
                    excerpt=redact(match.group(0), start - m_start, end - m_start),
                    fingerprint=fingerprint(rule.rule_id, path, line_no, secret),
                )

    def scan_text(self, path: str, text: str) -> tuple[list[SecretFinding], int]:
        """Scan already-decoded content. Returns (findings, suppressed count)."""
        findings: list[SecretFinding] = []
        seen: set[tuple[str, str, str]] = set()
        suppressed = 0
        for line_no, line in enumerate(_LINE_BREAK.split(text), 1):
            line_hits = []
            for rule in self.rules.secret_rules:
                for finding in self._rule_hits(rule, path, line_no, line):
                    key = (finding.rule_id, finding.path, finding.fingerprint)
                    if key in seen:
                        continue
                    seen.add(key)
                    line_hits.append(finding)
            if line_hits and self._is_suppressed(line):
                suppressed += len(line_hits)
                continue
            findings.extend(line_hits)
        return findings, suppressed

    # ── Per-file ────────────────────────────────────────────────────

    def read_text(self, root: Path, entry: FileEntry) -> str:
        try:
            data = (root / entry.path).read_bytes()
        except OSError as exc:
            raise UnreadableFile(entry.path, "unreadable", exc.strerror or str(exc)) from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnreadableFile(entry.path, "undecodable", "not valid UTF-8") from exc

    def should_scan(self, entry: FileEntry) -> bool:
        return entry.is_text and entry.size <= self.settings.max_scan_bytes

    def _scan_one(self, root: Path, entry: FileEntry) -> _FileOutcome:
        try:
            text = self.read_text(root, entry)
        except UnreadableFile as exc:
            logger.warning("Skipping secret scan of %s", exc)
            return _FileOutcome([], ScanWarning(exc.path, exc.kind, str(exc)))
        findings, suppressed = self.scan_text(entry.path, text)
        return _FileOutcome(findings, scanned=True, suppressed=suppressed)

    def _scan_partition(self, root: Path, entries: Sequence[FileEntry]) -> list[_FileOutcome]:
        return [self._scan_one(root, e) for e in entries]

    # ── Whole scan ──────────────────────────────────────────────────

    def scan(self, root: str | Path, files: Iterable[FileEntry]) -> SecretScanOutcome:
        root = Path(root)
        all_files = list(files)
        targets = [f for f in all_files if self.should_scan(f)]
        skipped = len(all_files) - len(targets)

        workers = max(1, self.settings.workers)
        if workers == 1 or len(targets) < 2 * workers:
            outcomes = self._scan_partition(root, targets)
        else:
            # Contiguous partitions keep walker order when concatenated.
            size = math.ceil(len(targets) / workers)
            partitions = [targets[i:i + size] for i in range(0, len(targets), size)]
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="repomedic") as pool:
                buffers = list(pool.map(lambda part: self._scan_partition(root, part), partitions))
            outcomes = [o for buf in buffers for o in buf]

        findings: list[SecretFinding] = []
        warnings: list[ScanWarning] = []
        scanned = suppressed = 0
        for outcome in outcomes:
            findings.extend(outcome.findings)
            if outcome.warning is not None:
                warnings.append(outcome.warning)
            scanned += int(outcome.scanned)
            suppressed += outcome.suppressed

        logger.debug(
            "Secret scan: %d files scanned, %d skipped, %d findings",
            scanned,
            skipped,
            len(findings),
        )
        return SecretScanOutcome(
            findings=tuple(findings),
            warnings=tuple(warnings),
            scanned=scanned,
            skipped=skipped,
            suppressed=suppressed,
        )
