"""Serializable views of a ``ScanResult`` (dict, JSON, SARIF)."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from repomedic import __version__
from repomedic.audit.types import EcosystemMatch, ScanResult, Severity

SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
INFO_URI = "https://github.com/Brutus1066/repomedic"

_SARIF_LEVELS = {
    Severity.HIGH: "error",
    Severity.MEDIUM: "error",
    Severity.LOW: "warning",
}


def _ecosystem(match: EcosystemMatch) -> Dict[str, Any]:
    return {
        "name": match.name,
        "display_name": match.display_name,
        "confidence": match.confidence.label,
        "markers": list(match.markers),
        "evidence_count": match.evidence_count,
    }


def to_dict(result: ScanResult) -> Dict[str, Any]:
    return {
        "root": result.root,
        "score": result.score,
        "grade": result.grade,
        "has_issues": result.has_issues,
        "has_warnings": result.has_warnings,
        "has_system_error": result.has_system_error,
        "missing": {
            "required": list(result.missing_required),
            "recommended": list(result.missing_recommended),
        },
        "checks": dict(result.checks),
        "has_git": result.checks.get("git", False),
        "has_gitattributes": result.checks.get("gitattributes", False),
        "has_funding": result.checks.get("funding", False),
        "ecosystems": {
            "languages": [_ecosystem(m) for m in result.languages],
            "build_systems": [_ecosystem(m) for m in result.build_systems],
        },
        "ci": [
            {"provider": c.provider, "display_name": c.display_name, "path": c.path}
            for c in result.ci
        ],
        "findings": [
            {
                "rule_id": f.rule_id,
                "severity": f.severity.value,
                "path": f.path,
                "line": f.line,
                "excerpt": f.excerpt,
                "fingerprint": f.fingerprint,
            }
            for f in result.findings
        ],
        "components": [
            {"key": c.key, "label": c.label, "points": c.points, "category": c.category}
            for c in result.components
        ],
        "dependency_files": list(result.dependency_files),
        "linter_configs": list(result.linter_configs),
        "workspace": {"is_monorepo": result.is_monorepo, "type": result.workspace_type},
        "large_files": list(result.large_files),
        "warnings": [
            {"path": w.path, "kind": w.kind, "message": w.message} for w in result.warnings
        ],
        "system_errors": list(result.system_errors),
        "stats": {
            "files_seen": result.stats.files_seen,
            "dirs_traversed": result.stats.dirs_traversed,
            "files_scanned_for_secrets": result.stats.files_scanned_for_secrets,
            "files_skipped": result.stats.files_skipped,
            "suppressed_findings": result.stats.suppressed_findings,
            "duration_ms": result.stats.duration_ms,
        },
    }


def to_json(result: ScanResult, indent: int = 2) -> str:
    return json.dumps(to_dict(result), indent=indent, ensure_ascii=False)


def to_sarif(result: ScanResult) -> Dict[str, Any]:
    """SARIF 2.1.0 log with one result per secret and per missing required file."""
    rules: List[Dict[str, Any]] = []
    rule_index: Dict[str, int] = {}
    results: List[Dict[str, Any]] = []

    def _rule(rule_id: str, text: str) -> int:
        if rule_id not in rule_index:
            rule_index[rule_id] = len(rules)
            rules.append({"id": rule_id, "shortDescription": {"text": text}})
        return rule_index[rule_id]

    for key in result.missing_required:
        rule_id = f"missing-{key}"
        results.append({
            "ruleId": rule_id,
            "ruleIndex": _rule(rule_id, f"Repository is missing {key}"),
            "level": "error",
            "message": {"text": f"Required artifact '{key}' not found"},
            "locations": [{"physicalLocation": {"artifactLocation": {"uri": "."}}}],
        })

    for finding in result.findings:
        results.append({
            "ruleId": finding.rule_id,
            "ruleIndex": _rule(finding.rule_id, f"Possible {finding.rule_id}"),
            "level": _SARIF_LEVELS.get(finding.severity, "warning"),
            "message": {"text": f"Possible secret ({finding.rule_id}): {finding.excerpt}"},
            "partialFingerprints": {"repomedic/v1": finding.fingerprint},
            "locations": [{
                "physicalLocation": {
                    "artifactLocation": {"uri": finding.path},
                    "region": {"startLine": finding.line},
                }
            }],
        })

    return {
        "$schema": SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [{
            "tool": {
                "driver": {
                    "name": "repomedic",
                    "version": __version__,
                    "informationUri": INFO_URI,
                    "rules": rules,
                }
            },
            "results": results,
        }],
    }
