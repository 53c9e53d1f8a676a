# bug_zoo/sim/patterns.py
from __future__ import annotations
from enum import Enum
import re
from typing import Dict, List


class CodePattern(Enum):
    POTENTIAL_INFINITE_LOOP = "potential_infinite_loop"
    OFF_BY_ONE_LOOP = "off_by_one_loop"
    MISSING_RESOURCE_CLEANUP = "missing_resource_cleanup"
    SHARED_MUTATION_NO_LOCK = "shared_mutation_no_lock"
    GENERIC_CATCH = "generic_catch"
    DEEP_NESTING = "deep_nesting"
    LOG_SPAM = "log_spam"
    SYNTAX_ERROR = "syntax_error"


PATTERN_TO_CATEGORY: Dict[CodePattern, str] = {
    CodePattern.POTENTIAL_INFINITE_LOOP: "infinite_loop",
    CodePattern.OFF_BY_ONE_LOOP: "off_by_one",
    CodePattern.MISSING_RESOURCE_CLEANUP: "memory_leak",
    CodePattern.SHARED_MUTATION_NO_LOCK: "race_condition",
    CodePattern.GENERIC_CATCH: "null_pointer",
    CodePattern.DEEP_NESTING: "spaghetti_code",
    CodePattern.LOG_SPAM: "log_spam",
    CodePattern.SYNTAX_ERROR: "syntax_error",
}

MAX_NESTING = 4
MAX_LOG_CALLS = 5

_I = re.IGNORECASE
_INFINITE_LOOP = re.compile(r"(while\s*\([^)]*true[^)]*\)|for\s*\([^)]*;;[^)]*\))", _I)
_OFF_BY_ONE = re.compile(r"(for\s*\([^)]*<=\s*\w+\.length|for\s*\([^)]*<\s*\w+\.length\s*-\s*1)", _I)
_ACQUIRE = re.compile(r"(\.open\(|\.connect\(|new\s+\w+Stream\()", _I)
_RELEASE = re.compile(r"(\.close\(|\.disconnect\(|finally)", _I)
_MUTATION = re.compile(r"(\.push\(|\.pop\(|\.shift\(|\.unshift\(|\+\+|--)", _I)
_SYNC = re.compile(r"(lock|mutex|synchronized|await|async)", _I)
_CATCH = re.compile(r"(catch\s*\([^)]*\)\s*\{[^}]*\}|catch\s*\{)", _I)
_TYPED_CATCH = re.compile(r"(catch\s*\([^)]*Error[^)]*\)|catch\s*\([^)]*Exception[^)]*\))", _I)
_LOG_CALL = re.compile(r"(console\.(log|error|warn|info)|print\()", _I)


def max_brace_depth(code: str) -> int:
    depth = best = 0
    for ch in code:
        if ch == "{":
            depth += 1
            best = max(best, depth)
        elif ch == "}":
            depth -= 1
    return best


def _unbalanced(code: str) -> bool:
    return any(code.count(o) != code.count(c) for o, c in (("{", "}"), ("(", ")"), ("[", "]")))


def analyze_code_patterns(code: str) -> List[CodePattern]:
    """
    Heuristic scan for bug signatures. Not a parser: false positives and
    misses are expected. Result follows CodePattern declaration order.
    """
    found: List[CodePattern] = []

    if _INFINITE_LOOP.search(code):
        found.append(CodePattern.POTENTIAL_INFINITE_LOOP)

    if _OFF_BY_ONE.search(code):
        found.append(CodePattern.OFF_BY_ONE_LOOP)

    if _ACQUIRE.search(code) and not _RELEASE.search(code):
        found.append(CodePattern.MISSING_RESOURCE_CLEANUP)

    if _MUTATION.search(code) and not _SYNC.search(code):
        found.append(CodePattern.SHARED_MUTATION_NO_LOCK)

    if _CATCH.search(code) and not _TYPED_CATCH.search(code):
        found.append(CodePattern.GENERIC_CATCH)

    if max_brace_depth(code) > MAX_NESTING:
        found.append(CodePattern.DEEP_NESTING)

    if sum(1 for _ in _LOG_CALL.finditer(code)) > MAX_LOG_CALLS:
        found.append(CodePattern.LOG_SPAM)

    if _unbalanced(code):
        found.append(CodePattern.SYNTAX_ERROR)

    return found


def detect_categories(code: str) -> List[str]:
    """Bug categories for the fired patterns, first occurrence wins."""
    out: List[str] = []
    for pattern in analyze_code_patterns(code):
        cat = PATTERN_TO_CATEGORY[pattern]
        if cat not in out:
            out.append(cat)
    return out
