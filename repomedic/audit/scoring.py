"""Health scorer: presence checks, weighted deductions and grading.

Pure function of its inputs. Components are emitted in table order and
all arithmetic is integer, so identical inputs always give identical
scores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from repomedic.audit.constants import GRADE_THRESHOLDS
from repomedic.audit.rules import PresenceRule, RuleSet
from repomedic.audit.types import CIMatch, FileEntry, ScoreComponent, SecretFinding

BASE_SCORE = 100


@dataclass(frozen=True)
class ScoreCard:
    score: int
    grade: str
    components: tuple[ScoreComponent, ...]
    checks: dict
    missing_required: tuple[str, ...]
    missing_recommended: tuple[str, ...]


def grade_for(score: int) -> str:
    for threshold, letter in GRADE_THRESHOLDS:
        if score >= threshold:
            return letter
    return "F"


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def _present(rule: PresenceRule, paths: Sequence[str], root_dirs: Sequence[str]) -> bool:
    return any(rule.matches(p) for p in paths) or any(rule.matches_dir(d) for d in root_dirs)


def presence_checks(
    files: Iterable[FileEntry],
    ci: Sequence[CIMatch],
    rules: RuleSet,
    root_dirs: Sequence[str] = (),
) -> dict:
    """Map every required and recommended check key to present/absent.

    ``root_dirs`` are the directory names directly under the scan root.
    """
    paths = [f.path for f in files]
    checks: dict[str, bool] = {}
    for rule in rules.required_checks:
        checks[rule.key] = bool(ci) if rule.key == "ci" else _present(rule, paths, root_dirs)
    for rule in rules.recommended_checks:
        checks[rule.key] = _present(rule, paths, root_dirs)
    return checks


def secret_components(findings: Sequence[SecretFinding], rules: RuleSet) -> list[ScoreComponent]:
    """One deduction per finding until the cap is reached.

    The total never exceeds ``policy.secret_cap``, whatever the finding
    order. Findings past the cap are still reported but deduct nothing.
    """
    policy = rules.policy
    out: list[ScoreComponent] = []
    budget = policy.secret_cap
    for finding in findings:
        cost = min(policy.secret_deductions.get(finding.severity.value, 0), budget)
        if cost <= 0:
            break
        budget -= cost
        out.append(
            ScoreComponent(
                key=f"secret:{finding.rule_id}:{finding.fingerprint}",
                label=f"Possible {finding.rule_id} in {finding.path}:{finding.line}",
                points=-cost,
                category="secrets",
            )
        )
    return out


def score_repository(
    files: Sequence[FileEntry],
    ci: Sequence[CIMatch],
    findings: Sequence[SecretFinding],
    large_files: Sequence[str],
    rules: RuleSet,
    root_dirs: Sequence[str] = (),
) -> ScoreCard:
    policy = rules.policy
    checks = presence_checks(files, ci, rules, root_dirs)
    components: list[ScoreComponent] = []
    missing_required: list[str] = []
    missing_recommended: list[str] = []

    for rule in rules.required_checks:
        if not checks[rule.key]:
            missing_required.append(rule.key)
            components.append(
                ScoreComponent(
                    key=f"missing:{rule.key}",
                    label=f"Missing {rule.label}",
                    points=-policy.required.get(rule.key, 0),
                    category="required",
                )
            )

    for rule in rules.recommended_checks:
        if checks[rule.key]:
            bonus = policy.recommended.get(rule.key, 0)
            if bonus:
                components.append(
                    ScoreComponent(
                        key=f"has:{rule.key}",
                        label=f"Has {rule.label}",
                        points=bonus,
                        category="recommended",
                    )
                )
        else:
            missing_recommended.append(rule.key)

    components.extend(secret_components(findings, rules))

    budget = policy.large_file_cap
    for path in large_files:
        cost = min(policy.large_file_deduction, budget)
        if cost <= 0:
            break
        budget -= cost
        components.append(
            ScoreComponent(
                key=f"large:{path}",
                label=f"Large file {path}",
                points=-cost,
                category="hygiene",
            )
        )

    score = clamp(BASE_SCORE + sum(c.points for c in components))
    return ScoreCard(
        score=score,
        grade=grade_for(score),
        components=tuple(components),
        checks=checks,
        missing_required=tuple(missing_required),
        missing_recommended=tuple(missing_recommended),
    )
