"""Compiled detection tables.

``build_rules()`` is called once at startup. The resulting ``RuleSet`` is
immutable and handed by reference to every component of a scan.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from repomedic.audit import constants
from repomedic.audit.types import Severity
from repomedic.exceptions import PatternCompileError

logger = logging.getLogger("repomedic.audit")


@dataclass(frozen=True)
class SecretRule:
    rule_id: str
    description: str
    severity: Severity
    patterns: tuple[re.Pattern, ...]
    min_entropy: float = 0.0
    filter_placeholders: bool = False


@dataclass(frozen=True)
class CIRule:
    provider: str
    display_name: str
    paths: tuple[str, ...] = ()
    prefixes: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()

    def matches(self, path: str) -> bool:
        if path in self.paths:
            return True
        for prefix in self.prefixes:
            if path.startswith(prefix) and (
                not self.suffixes or path.endswith(self.suffixes)
            ):
                return True
        return False


@dataclass(frozen=True)
class PresenceRule:
    """A conventional artifact, matched case-insensitively.

    ``dir_names`` only match directories directly under the root, empty
    ones included.
    """

    key: str
    label: str
    paths: frozenset = frozenset()
    prefixes: tuple[str, ...] = ()
    dir_names: frozenset = frozenset()

    def matches(self, path: str) -> bool:
        lowered = path.lower()
        if lowered in self.paths:
            return True
        return bool(self.prefixes) and lowered.startswith(self.prefixes)

    def matches_dir(self, name: str) -> bool:
        return name.lower() in self.dir_names


@dataclass(frozen=True)
class ScoringPolicy:
    required: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(constants.REQUIRED_DEDUCTIONS))
    )
    recommended: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(constants.RECOMMENDED_BONUSES))
    )
    secret_deductions: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(constants.SECRET_DEDUCTIONS))
    )
    secret_cap: int = constants.SECRET_DEDUCTION_CAP
    large_file_deduction: int = constants.LARGE_FILE_DEDUCTION
    large_file_cap: int = constants.LARGE_FILE_DEDUCTION_CAP


@dataclass(frozen=True)
class RuleSet:
    """Every static table a scan needs, compiled and read-only."""

    marker_files: Mapping[str, tuple]
    manifest_suffixes: Mapping[str, tuple]
    language_extensions: Mapping[str, str]
    ecosystem_names: Mapping[str, str]
    ci_rules: tuple[CIRule, ...]
    secret_rules: tuple[SecretRule, ...]
    required_checks: tuple[PresenceRule, ...]
    recommended_checks: tuple[PresenceRule, ...]
    policy: ScoringPolicy
    placeholder_terms: tuple[str, ...] = constants.PLACEHOLDER_TERMS
    suppress_pattern: re.Pattern = field(
        default_factory=lambda: compile_suppress_markers(constants.SUPPRESS_MARKERS)
    )


def compile_suppress_markers(markers) -> re.Pattern:
    """Whole-word match, so 'nosec' inside an identifier does not count."""
    alternatives = "|".join(re.escape(m) for m in markers)
    return re.compile(rf"(?<![\w-])(?:{alternatives})(?![\w-])")


def compile_secret_rule(spec: dict) -> SecretRule:
    """Compile one rule definition, raising ``PatternCompileError`` on failure."""
    rule_id = spec["id"]
    compiled = []
    for source in spec["patterns"]:
        try:
            compiled.append(re.compile(source))
        except re.error as exc:
            raise PatternCompileError(rule_id, source, str(exc)) from exc
    if not compiled:
        raise PatternCompileError(rule_id, "", "rule has no patterns")
    try:
        severity = Severity(spec["severity"])
    except ValueError as exc:
        raise PatternCompileError(rule_id, "", f"unknown severity {spec['severity']!r}") from exc
    return SecretRule(
        rule_id=rule_id,
        description=spec.get("description", rule_id),
        severity=severity,
        patterns=tuple(compiled),
        min_entropy=float(spec.get("min_entropy", 0.0)),
        filter_placeholders=bool(spec.get("placeholders", False)),
    )


def _presence_rules(table) -> tuple[PresenceRule, ...]:
    return tuple(
        PresenceRule(
            key=key,
            label=label,
            paths=frozenset(paths),
            prefixes=tuple(prefixes),
            dir_names=frozenset(dir_names),
        )
        for key, label, paths, prefixes, dir_names in table
    )


def build_rules(secret_rules=None, policy: ScoringPolicy | None = None) -> RuleSet:
    """Build the process-wide rule set.

    ``secret_rules`` defaults to the built-in table; tests pass their own
    definitions to exercise compile failures.
    """
    specs = constants.SECRET_RULES if secret_rules is None else secret_rules
    compiled = tuple(compile_secret_rule(spec) for spec in specs)

    seen: set[str] = set()
    for rule in compiled:
        if rule.rule_id in seen:
            raise PatternCompileError(rule.rule_id, "", "duplicate rule id")
        seen.add(rule.rule_id)

    rules = RuleSet(
        marker_files=MappingProxyType(dict(constants.MARKER_FILES)),
        manifest_suffixes=MappingProxyType(dict(constants.MANIFEST_SUFFIXES)),
        language_extensions=MappingProxyType(dict(constants.LANGUAGE_EXTENSIONS)),
        ecosystem_names=MappingProxyType(dict(constants.ECOSYSTEM_NAMES)),
        ci_rules=tuple(
            CIRule(provider, name, tuple(paths), tuple(prefixes), tuple(suffixes))
            for provider, name, paths, prefixes, suffixes in constants.CI_PROVIDERS
        ),
        secret_rules=compiled,
        required_checks=_presence_rules(constants.REQUIRED_CHECKS),
        recommended_checks=_presence_rules(constants.RECOMMENDED_CHECKS),
        policy=policy or ScoringPolicy(),
    )
    logger.debug(
        "Compiled %d secret rules, %d CI providers, %d marker files",
        len(rules.secret_rules),
        len(rules.ci_rules),
        len(rules.marker_files),
    )
    return rules
