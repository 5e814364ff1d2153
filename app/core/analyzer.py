# app/core/analyzer.py
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from app.core.models import FileChange, Hotspot, Metrics, Report, RiskAssessment

ROOT_DIR = "(root)"


@dataclass(frozen=True)
class RiskRule:
    pattern: str
    points: int
    reason: str
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE | re.MULTILINE))

    def matches(self, text: str) -> bool:
        # text holds one filename per line; ^ and $ anchor to each filename
        return self.regex.search(text) is not None


DEFAULT_RULES: Tuple[RiskRule, ...] = (
    RiskRule(r"(auth|security|oauth|jwt|password|login)", 3, "Touches auth/security related code"),
    RiskRule(r"(migration|migrations|schema|db|database)", 3, "Touches database/migrations/schema"),
    RiskRule(r"(github/workflows|ci|terraform|helm|k8s|kubernetes)", 2, "Touches CI/infra config"),
    RiskRule(
        r"(package-lock\.json|yarn\.lock|pnpm-lock\.yaml|requirements\.txt|poetry\.lock)",
        2,
        "Touches dependency lockfiles",
    ),
)

CODE_FILE_RE = re.compile(r"\.(ts|tsx|js|jsx|py|java|go|cs|rb|php)$", re.IGNORECASE)
TEST_FILE_RE = re.compile(r"(^|/)(test|tests|__tests__)\b|\.spec\.|\.test\.", re.IGNORECASE)


@dataclass(frozen=True)
class RiskPolicy:
    """Tunable knobs of the risk heuristic.

    Defaults reproduce the stock scoring; tests and deployments can swap in
    their own thresholds or rule list without touching the aggregation code.
    """
    many_files_threshold: int = 25
    many_files_points: int = 2
    high_churn_threshold: int = 800
    high_churn_points: int = 2
    rules: Tuple[RiskRule, ...] = DEFAULT_RULES
    code_pattern: re.Pattern = CODE_FILE_RE
    test_pattern: re.Pattern = TEST_FILE_RE
    missing_tests_points: int = 2
    high_level_score: int = 6
    medium_level_score: int = 3
    top_n: int = 8
    dir_depth: int = 2

    @classmethod
    def from_settings(cls, settings) -> "RiskPolicy":
        return cls(
            many_files_threshold=settings.RISK_MANY_FILES,
            high_churn_threshold=settings.RISK_HIGH_CHURN,
            top_n=settings.REPORT_TOP_N,
        )


DEFAULT_POLICY = RiskPolicy()

FileLike = Union[FileChange, Mapping[str, Any]]


def _coerce(f: FileLike) -> FileChange:
    if isinstance(f, FileChange):
        return f
    return FileChange.model_validate(dict(f))


def dir_key(filename: str, depth: int = 2) -> str:
    # root-level files have no directory to group under
    if "/" not in filename:
        return ROOT_DIR
    return "/".join(filename.split("/")[:depth]) or ROOT_DIR


def level_for(score: int, policy: RiskPolicy = DEFAULT_POLICY) -> str:
    if score >= policy.high_level_score:
        return "high"
    if score >= policy.medium_level_score:
        return "medium"
    return "low"


def compute_hotspots(files: List[FileChange], policy: RiskPolicy = DEFAULT_POLICY) -> List[Hotspot]:
    totals = {}
    for f in files:
        key = dir_key(f.filename, policy.dir_depth)
        totals[key] = totals.get(key, 0) + f.changes
    # dicts keep first-seen order and sorted() is stable, so ties stay in that order
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [Hotspot(dir=d, churn=c) for d, c in ranked[:policy.top_n]]


def assess_risk(files: List[FileChange], metrics: Metrics, policy: RiskPolicy = DEFAULT_POLICY) -> RiskAssessment:
    score = 0
    reasons: List[str] = []

    if metrics.total_files >= policy.many_files_threshold:
        score += policy.many_files_points
        reasons.append("Large PR: many files changed")
    if metrics.churn >= policy.high_churn_threshold:
        score += policy.high_churn_points
        reasons.append("Large PR: high churn (additions + deletions)")

    names = [f.filename for f in files]
    joined = "\n".join(names)
    for rule in policy.rules:
        if rule.matches(joined):
            score += rule.points
            reasons.append(rule.reason)

    has_code = any(policy.code_pattern.search(n) for n in names)
    has_tests = any(policy.test_pattern.search(n) for n in names)
    if has_code and not has_tests:
        score += policy.missing_tests_points
        reasons.append("Code changed but tests were not updated")

    return RiskAssessment(level=level_for(score, policy), score=score, reasons=reasons)


def analyze(files: Iterable[FileLike], policy: Optional[RiskPolicy] = None) -> Report:
    """Turn a PR's changed-file list into metrics, hotspots and a risk assessment.

    Never raises on structurally incomplete records: missing counts are
    treated as zero.
    """
    policy = policy or DEFAULT_POLICY
    changes = [_coerce(f) for f in files]

    additions = sum(f.additions for f in changes)
    deletions = sum(f.deletions for f in changes)
    metrics = Metrics(
        total_files=len(changes),
        additions=additions,
        deletions=deletions,
        churn=additions + deletions,
    )

    biggest = sorted(changes, key=lambda f: f.changes, reverse=True)[:policy.top_n]

    return Report(
        metrics=metrics,
        risk=assess_risk(changes, metrics, policy),
        hotspots=compute_hotspots(changes, policy),
        biggest_files=biggest,
    )
