"""Type rule tables for artifact packaging and dependency auto-wiring."""

from metadelta.rules.table import DEFAULT_RULE, AutoWireKind, RuleTable, TypeRule

__all__ = [
    "AutoWireKind",
    "DEFAULT_RULE",
    "RuleTable",
    "TypeRule",
]
