from .rules import RULES, ReconcileRule, find_violations, reconcile

__all__ = [
    "RULES",
    "ReconcileRule",
    "find_violations",
    "reconcile",
]
