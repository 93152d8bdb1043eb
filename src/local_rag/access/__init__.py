"""Path access decisions for the indexer."""

from .ignore import IgnoreRule, match_ignore_rules, parse_ignore_rules
from .policy import (
    AccessFilter,
    AllowAllAccessFilter,
    IgnoreFileAccessFilter,
    is_denylisted,
)

__all__ = [
    "AccessFilter",
    "AllowAllAccessFilter",
    "IgnoreFileAccessFilter",
    "IgnoreRule",
    "is_denylisted",
    "match_ignore_rules",
    "parse_ignore_rules",
]
