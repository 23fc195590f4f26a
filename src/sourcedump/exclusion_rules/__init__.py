"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .ignore_rules import IgnoreRuleSet, build_ignore_rule_set, parse_ignore_lines, read_ignore_file

__all__ = [
    "BaseExclusionRules",
    "IgnoreRuleSet",
    "build_ignore_rule_set",
    "parse_ignore_lines",
    "read_ignore_file",
]
