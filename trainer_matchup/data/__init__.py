"""Fixed game constants for the Gen-3 ruleset."""

from .type_chart import PHYSICAL_TYPES, TYPES, is_physical_type, type_effectiveness

__all__ = [
    "PHYSICAL_TYPES",
    "TYPES",
    "is_physical_type",
    "type_effectiveness",
]
