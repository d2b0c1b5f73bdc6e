from .categories import (
    ACCESSIBLE_CATEGORIES,
    DISPLAY_CATEGORIES,
    best_of,
    category_explanation,
    category_from_benefit_type,
    category_label,
    is_accessible,
    rank,
    worst_of,
)
from .passports import PassportResolver, categorize
from .benefits import BenefitResolver
from .group import full_access_map, merge_group, passport_access_map
from .filters import filter_and_sort
from .compare import compare_passports
from .insights import similar_destinations, suggest_destinations, summarize_access

__all__ = [
    "ACCESSIBLE_CATEGORIES",
    "DISPLAY_CATEGORIES",
    "rank",
    "worst_of",
    "best_of",
    "is_accessible",
    "category_from_benefit_type",
    "category_label",
    "category_explanation",
    "categorize",
    "PassportResolver",
    "BenefitResolver",
    "passport_access_map",
    "full_access_map",
    "merge_group",
    "filter_and_sort",
    "compare_passports",
    "summarize_access",
    "suggest_destinations",
    "similar_destinations",
]
