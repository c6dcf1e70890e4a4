"""Intermediate representation: variation overlays and validated rule sets."""

from egg_railroad.ir.ruleset import (
    Diagnostic,
    RuleSet,
    Severity,
    ValidationResult,
    construct,
    validate,
)
from egg_railroad.ir.variations import apply_variation, resolve

__all__ = [
    "Diagnostic",
    "RuleSet",
    "Severity",
    "ValidationResult",
    "apply_variation",
    "construct",
    "resolve",
    "validate",
]
