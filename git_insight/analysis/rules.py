from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from git_insight.models import Severity

Predicate = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class Rule:
    """A named text predicate with the finding it produces when it matches."""

    name: str
    predicate: Predicate
    message: str
    severity: Optional[Severity] = None

    def matches(self, content: str) -> bool:
        return self.predicate(content)


def contains(literal: str) -> Predicate:
    return lambda content: literal in content


def matches(pattern: str, flags: int = 0) -> Predicate:
    compiled = re.compile(pattern, flags)
    return lambda content: compiled.search(content) is not None


def all_of(*predicates: Predicate) -> Predicate:
    return lambda content: all(predicate(content) for predicate in predicates)


def count_exceeds(pattern: str, threshold: int) -> Predicate:
    compiled = re.compile(pattern)
    return lambda content: len(compiled.findall(content)) > threshold


DEFAULT_SECURITY_RULES: Tuple[Rule, ...] = (
    Rule(
        name="dynamic-eval",
        predicate=contains("eval("),
        severity=Severity.HIGH,
        message="Use of eval() can lead to code injection vulnerabilities",
    ),
    Rule(
        name="hardcoded-credentials",
        predicate=all_of(matches(r"password|secret|key", re.IGNORECASE), matches(r'"[^"]*"')),
        severity=Severity.HIGH,
        message="Possible hardcoded credentials detected",
    ),
    Rule(
        name="inner-html",
        predicate=matches(r"\.innerHTML\s*\+?=(?!=)"),
        severity=Severity.MEDIUM,
        message="Use of innerHTML can lead to XSS vulnerabilities",
    ),
)

DEFAULT_PERFORMANCE_RULES: Tuple[Rule, ...] = (
    Rule(
        name="chained-iteration",
        predicate=matches(r"\.forEach.*\.map"),
        message="Nested array operations detected - consider combining operations",
    ),
    Rule(
        name="repeated-dom-query",
        predicate=matches(r"document\.querySelector.*querySelector"),
        message="Multiple DOM queries - consider caching selectors",
    ),
    Rule(
        name="console-output",
        predicate=matches(r"console\.(log|debug|info)"),
        message="Console statements found - remove in production",
    ),
    Rule(
        name="spread-operations",
        predicate=count_exceeds(r"\[\s*\.\.\..*\]", 2),
        message="Multiple spread operations detected - may impact performance",
    ),
)


@dataclass(frozen=True, slots=True)
class HeuristicConfig:
    """Constants and rule tables used by ImpactAnalyzer."""

    control_keywords: Tuple[str, ...] = ("if", "while", "for", "&&", "||", "case")
    structural_chars: str = "{}();"
    nesting_char: str = "{"

    line_weight: float = 0.3
    token_weight: float = 0.7
    impact_divisor: float = 10

    keyword_weight: float = 0.6
    nesting_weight: float = 0.4
    complexity_multiplier: float = 5

    score_cap: int = 100

    security_rules: Tuple[Rule, ...] = DEFAULT_SECURITY_RULES
    performance_rules: Tuple[Rule, ...] = DEFAULT_PERFORMANCE_RULES

    @property
    def keyword_pattern(self) -> re.Pattern[str]:
        return re.compile("|".join(re.escape(keyword) for keyword in self.control_keywords))

    @property
    def structural_pattern(self) -> re.Pattern[str]:
        return re.compile(f"[{re.escape(self.structural_chars)}]")


DEFAULT_CONFIG = HeuristicConfig()
