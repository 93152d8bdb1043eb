"""Gitignore-style pattern parsing and matching."""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class IgnoreRule:
    """One parsed ignore-file line."""

    pattern: str
    negated: bool
    directory_only: bool
    anchored: bool


def parse_ignore_rules(text: str) -> tuple[IgnoreRule, ...]:
    """Parse ignore-file text into ordered rules."""
    rules: list[IgnoreRule] = []
    for raw_line in text.splitlines():
        line = raw_line.rstrip()
        if not line or line.startswith("#"):
            continue
        negated = False
        if line.startswith("!"):
            negated = True
            line = line[1:]
        elif line.startswith("\\"):
            line = line[1:]
        directory_only = line.endswith("/")
        line = line.rstrip("/")
        if line.startswith("**/") and "/" not in line[3:]:
            line = line[3:]
            anchored = False
        else:
            anchored = "/" in line
            line = line.lstrip("/")
        if not line:
            continue
        rules.append(
            IgnoreRule(
                pattern=line,
                negated=negated,
                directory_only=directory_only,
                anchored=anchored,
            )
        )
    return tuple(rules)


def match_ignore_rules(rules: tuple[IgnoreRule, ...], relative_path: str) -> bool:
    """Return True when the POSIX relative path is ignored; the last matching rule wins."""
    parts = [part for part in relative_path.split("/") if part not in ("", ".")]
    if not parts:
        return False
    ignored = False
    for rule in rules:
        if _rule_matches(rule, parts):
            ignored = not rule.negated
    return ignored


def _rule_matches(rule: IgnoreRule, parts: list[str]) -> bool:
    for index in range(1, len(parts) + 1):
        is_directory = index < len(parts)
        if rule.directory_only and not is_directory:
            continue
        if rule.anchored:
            candidate = "/".join(parts[:index])
        else:
            candidate = parts[index - 1]
        if fnmatch.fnmatchcase(candidate, rule.pattern):
            return True
        if rule.pattern.startswith("**/") and fnmatch.fnmatchcase(candidate, rule.pattern[3:]):
            return True
    return False
