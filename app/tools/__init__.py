"""Tools package for MediGuard agents."""

from app.tools.drug_interactions import (
    INTERACTION_RULES,
    check_interactions,
    format_interaction_for_display,
    normalize_drug_name,
)

__all__ = [
    "INTERACTION_RULES",
    "check_interactions",
    "format_interaction_for_display",
    "normalize_drug_name",
]
