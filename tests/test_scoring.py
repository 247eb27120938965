"""Tests for the health scorer."""

import pytest

from conftest import HEALTHY_LAYOUT, entries
from repomedic.audit.scoring import clamp, grade_for, presence_checks, score_repository
from repomedic.audit.types import CIMatch, SecretFinding, Severity

GH_CI = (CIMatch("github-actions", "GitHub Actions", ".github/workflows/ci.yml"),)


def _finding(n, severity=Severity.HIGH):
    return SecretFinding(
        rule_id="aws-access-key-id",
        severity=severity,
        path="leak.py",
        line=n,
        excerpt="AKIA****",
        fingerprint=f"{n:016x}",
    )


def _root_dirs(paths):
    return sorted({p.split("/", 1)[0] for p in paths if "/" in p})


def _score(paths, rules, ci=GH_CI, findings=(), large_files=()):
    return score_repository(entries(*paths), ci, findings, large_files, rules, _root_dirs(paths))


class TestRequiredChecks:
    def test_healthy_repo_scores_full_marks(self, rules):
        card = _score(HEALTHY_LAYOUT, rules)
        assert card.score == 100
        assert card.grade == "A"
        assert card.missing_required == ()

    @pytest.mark.parametrize(
        "drop, points",
        [
            ("README.md", 15),
            ("LICENSE", 15),
            (".gitignore", 10),
            ("tests/test_app.py", 10),
        ],
    )
    def test_each_missing_file_deducts_its_weight(self, rules, drop, points):
        paths = [p for p in HEALTHY_LAYOUT if p != drop]
        card = _score(paths, rules)
        assert card.score == 100 - points
        assert len(card.missing_required) == 1

    def test_missing_ci(self, rules):
        card = _score(HEALTHY_LAYOUT, rules, ci=())
        assert card.score == 90
        assert card.missing_required == ("ci",)

    def test_empty_repository(self, rules):
        card = _score([], rules, ci=())
        assert card.score == 40
        assert card.grade == "F"
        assert card.missing_required == ("readme", "license", "gitignore", "tests", "ci")

    def test_case_insensitive_names(self, rules):
        checks = presence_checks(entries("readme.MD", "License.txt"), (), rules, root_dirs=["Test"])
        assert checks["readme"] and checks["license"] and checks["tests"]

    def test_file_named_tests_is_not_a_directory(self, rules):
        checks = presence_checks(entries("tests"), (), rules)
        assert checks["tests"] is False

    def test_empty_tests_directory_counts(self, rules):
        paths = [p for p in HEALTHY_LAYOUT if not p.startswith("tests/")]
        card = score_repository(entries(*paths), GH_CI, (), (), rules, root_dirs=[".github", "tests"])
        assert card.score == 100
        assert card.checks["tests"] is True

    def test_nested_test_named_directory_does_not_count(self, rules):
        paths = [p for p in HEALTHY_LAYOUT if not p.startswith("tests/")] + ["docs/spec/api.md"]
        card = _score(paths, rules)
        assert card.checks["tests"] is False
        assert card.missing_required == ("tests",)


class TestRecommendedChecks:
    def test_bonuses_recover_deductions(self, rules):
        paths = [p for p in HEALTHY_LAYOUT if p != "LICENSE"]
        paths += ["CONTRIBUTING.md", "CHANGELOG.md", "docs/index.md", "SECURITY.md"]
        card = _score(paths, rules)
        assert card.score == 100 - 15 + 8
        assert "has:docs" in [c.key for c in card.components]

    def test_score_capped_at_100(self, rules):
        paths = list(HEALTHY_LAYOUT) + ["CONTRIBUTING.md", ".editorconfig", ".github/CODEOWNERS"]
        card = _score(paths, rules)
        assert card.score == 100
        assert "contributing" not in card.missing_recommended

    def test_repository_metadata_checks(self, rules):
        paths = [".gitattributes", ".github/FUNDING.yml"]
        checks = presence_checks(entries(*paths), (), rules, root_dirs=[".git", ".github"])
        assert checks["git"] and checks["gitattributes"] and checks["funding"]
        assert not any(presence_checks(entries("src/.gitattributes"), (), rules)[k]
                       for k in ("git", "gitattributes", "funding"))

    def test_missing_recommended_never_deducts(self, rules):
        card = _score(HEALTHY_LAYOUT, rules)
        assert "changelog" in card.missing_recommended
        assert all(c.points <= 0 or c.category == "recommended" for c in card.components)
        assert card.score == 100


class TestSecretsAndHygiene:
    def test_severity_weights(self, rules):
        findings = [_finding(1), _finding(2, Severity.MEDIUM), _finding(3, Severity.LOW)]
        card = _score(HEALTHY_LAYOUT, rules, findings=findings)
        assert card.score == 100 - 10 - 5 - 2

    def test_secret_deductions_capped(self, rules):
        findings = [_finding(n) for n in range(1, 12)]
        card = _score(HEALTHY_LAYOUT, rules, findings=findings)
        secret_points = sum(c.points for c in card.components if c.category == "secrets")
        assert secret_points == -40
        assert card.score == 60
        assert card.grade == "D"

    def test_partial_deduction_at_the_cap(self, rules):
        findings = [_finding(n) for n in range(1, 4)] + [_finding(4, Severity.MEDIUM)] * 3
        card = _score(HEALTHY_LAYOUT, rules, findings=findings)
        secret_points = [c.points for c in card.components if c.category == "secrets"]
        assert sum(secret_points) == -40
        assert secret_points[-1] == -5

    def test_large_files_capped(self, rules):
        large = [f"assets/big{i}.bin" for i in range(5)]
        card = _score(HEALTHY_LAYOUT, rules, large_files=large)
        assert card.score == 94
        assert [c.key for c in card.components] == [f"large:{p}" for p in large[:3]]

    def test_score_never_negative(self, rules):
        findings = [_finding(n) for n in range(1, 10)]
        card = _score([], rules, ci=(), findings=findings, large_files=["a", "b", "c"])
        assert card.score == 0
        assert card.grade == "F"


class TestGrades:
    @pytest.mark.parametrize(
        "score, grade",
        [(100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (70, "C"),
         (69, "D"), (60, "D"), (59, "F"), (0, "F")],
    )
    def test_thresholds(self, score, grade):
        assert grade_for(score) == grade

    def test_clamp(self):
        assert clamp(-5) == 0
        assert clamp(130) == 100
        assert clamp(42) == 42

    def test_deterministic(self, rules):
        findings = [_finding(1), _finding(2, Severity.LOW)]
        a = _score(HEALTHY_LAYOUT, rules, findings=findings)
        b = _score(HEALTHY_LAYOUT, rules, findings=findings)
        assert a == b
