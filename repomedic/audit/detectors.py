"""Ecosystem, CI and repository-profile detection from the walked file set."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from repomedic.audit.constants import (
    DEPENDENCY_FILES,
    DEPENDENCY_SUFFIXES,
    LINTER_CONFIGS,
    MAX_MARKERS,
    WORKSPACE_CONTENT_MARKERS,
    WORKSPACE_FILES,
)
from repomedic.audit.rules import RuleSet
from repomedic.audit.types import CIMatch, Confidence, EcosystemMatch, FileEntry

logger = logging.getLogger("repomedic.audit")

_KIND_ORDER = {"language": 0, "build_system": 1}


class EcosystemAccumulator:
    """Additive merge of ecosystem evidence.

    Confidence only ever goes up: once an ecosystem is DEFINITE, further
    heuristic evidence adds markers but never lowers it.
    """

    def __init__(self, names):
        self._names = names
        self._kinds: dict[str, str] = {}
        self._confidence: dict[str, Confidence] = {}
        self._markers: dict[str, list[str]] = {}
        self._counts: dict[str, int] = {}

    def add(self, name: str, kind: str, confidence: Confidence, path: str) -> None:
        if name not in self._kinds:
            self._kinds[name] = kind
            self._confidence[name] = confidence
            self._markers[name] = []
            self._counts[name] = 0
        elif confidence > self._confidence[name]:
            self._confidence[name] = confidence
        self._counts[name] += 1
        markers = self._markers[name]
        if len(markers) < MAX_MARKERS and path not in markers:
            markers.append(path)

    def confidence_of(self, name: str) -> Optional[Confidence]:
        return self._confidence.get(name)

    def matches(self) -> tuple[EcosystemMatch, ...]:
        out = [
            EcosystemMatch(
                name=name,
                kind=kind,
                display_name=self._names.get(name, name),
                confidence=self._confidence[name],
                markers=tuple(self._markers[name]),
                evidence_count=self._counts[name],
            )
            for name, kind in self._kinds.items()
        ]
        out.sort(key=lambda m: (_KIND_ORDER.get(m.kind, 9), m.name))
        return tuple(out)


def _lookup(entry: FileEntry, rules: RuleSet):
    """Exact filename first, then manifest suffix, then extension.

    Only a root-level manifest is DEFINITE. A nested one (a vendored or
    example project) shares the HEURISTIC tier with extension hits, so
    the two tie; a root manifest always outranks both.
    """
    name = entry.name
    marker = rules.marker_files.get(name)
    if marker:
        strength = Confidence.DEFINITE if entry.depth == 0 else Confidence.HEURISTIC
        return marker, strength

    lowered = name.lower()
    for suffix, implied in rules.manifest_suffixes.items():
        if lowered.endswith(suffix):
            strength = Confidence.DEFINITE if entry.depth == 0 else Confidence.HEURISTIC
            return implied, strength

    dot = lowered.rfind(".")
    if dot > 0:
        language = rules.language_extensions.get(lowered[dot:])
        if language:
            return ((language, "language"),), Confidence.HEURISTIC
    return (), None


def detect_ecosystems(files: Iterable[FileEntry], rules: RuleSet) -> tuple[EcosystemMatch, ...]:
    acc = EcosystemAccumulator(rules.ecosystem_names)
    for entry in files:
        implied, strength = _lookup(entry, rules)
        for eco, kind in implied:
            acc.add(eco, kind, strength, entry.path)
    return acc.matches()


def detect_ci(files: Iterable[FileEntry], rules: RuleSet) -> tuple[CIMatch, ...]:
    """First matching config per provider, reported in provider-table order."""
    found: dict[str, CIMatch] = {}
    for entry in files:
        for rule in rules.ci_rules:
            if rule.provider in found:
                continue
            if rule.matches(entry.path):
                found[rule.provider] = CIMatch(rule.provider, rule.display_name, entry.path)
    return tuple(found[r.provider] for r in rules.ci_rules if r.provider in found)


# ─── Repository Profile ──────────────────────────────────────────────


@dataclass(frozen=True)
class RepoProfile:
    dependency_files: tuple[str, ...] = ()
    linter_configs: tuple[str, ...] = ()
    workspace_type: str | None = None


def _read_head(path: Path, limit: int = 64 * 1024) -> str:
    try:
        with open(path, "rb") as fh:
            return fh.read(limit).decode("utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Could not read %s for workspace detection: %s", path, exc)
        return ""


def detect_workspace(root: Path, root_names: set[str]) -> Optional[str]:
    for marker, needle, label in WORKSPACE_CONTENT_MARKERS:
        if marker in root_names and needle in _read_head(root / marker):
            return label
    for marker, label in WORKSPACE_FILES:
        if marker in root_names:
            return label
    return None


def detect_profile(root: Path, files: Iterable[FileEntry]) -> RepoProfile:
    """Root-level dependency manifests, linter configs and workspace layout."""
    root_names = {f.name for f in files if f.depth == 0}
    deps = sorted(
        n for n in root_names if n in DEPENDENCY_FILES or n.endswith(DEPENDENCY_SUFFIXES)
    )
    linters = [c for c in LINTER_CONFIGS if c in root_names]
    return RepoProfile(
        dependency_files=tuple(deps),
        linter_configs=tuple(linters),
        workspace_type=detect_workspace(root, root_names),
    )
