from typing import Any

from models.schemas import AccessCategory, BenefitAccessType

# Lower rank = better access.
CATEGORY_RANK: dict[AccessCategory, int] = {
    AccessCategory.VISA_FREE: 0,
    AccessCategory.ETA: 1,
    AccessCategory.E_VISA: 2,
    AccessCategory.VISA_ON_ARRIVAL: 3,
    AccessCategory.VISA_REQUIRED: 4,
    AccessCategory.NO_ADMISSION: 5,
    AccessCategory.SELF: 6,
}
WORST_RANK = 6

ACCESSIBLE_CATEGORIES: tuple[AccessCategory, ...] = (
    AccessCategory.VISA_FREE,
    AccessCategory.ETA,
    AccessCategory.E_VISA,
    AccessCategory.VISA_ON_ARRIVAL,
)

DISPLAY_CATEGORIES: tuple[AccessCategory, ...] = ACCESSIBLE_CATEGORIES + (
    AccessCategory.VISA_REQUIRED,
    AccessCategory.NO_ADMISSION,
)

BENEFIT_CATEGORY: dict[BenefitAccessType, AccessCategory] = {
    BenefitAccessType.VISA_FREE: AccessCategory.VISA_FREE,
    BenefitAccessType.VISA_ON_ARRIVAL: AccessCategory.VISA_ON_ARRIVAL,
    BenefitAccessType.E_VISA_SIMPLIFIED: AccessCategory.E_VISA,
    BenefitAccessType.TRANSIT_FREE: AccessCategory.VISA_FREE,
}

CATEGORY_LABELS: dict[AccessCategory, str] = {
    AccessCategory.VISA_FREE: "Visa Free",
    AccessCategory.ETA: "ETA",
    AccessCategory.E_VISA: "e-Visa",
    AccessCategory.VISA_ON_ARRIVAL: "Visa on Arrival",
    AccessCategory.VISA_REQUIRED: "Visa Required",
    AccessCategory.NO_ADMISSION: "No Admission",
}

CATEGORY_EXPLANATIONS: dict[AccessCategory, str] = {
    AccessCategory.VISA_FREE: "You can enter this country without a visa. Just bring your valid passport.",
    AccessCategory.ETA: "You need an Electronic Travel Authorization before departure.",
    AccessCategory.E_VISA: "You need to apply for an electronic visa online before traveling.",
    AccessCategory.VISA_ON_ARRIVAL: "You can get a visa when you arrive at the border or airport.",
    AccessCategory.VISA_REQUIRED: "You must apply for a visa at an embassy or consulate before traveling.",
    AccessCategory.NO_ADMISSION: "Entry is not permitted with your current passport.",
}


def _coerce(category: Any) -> AccessCategory | None:
    if isinstance(category, AccessCategory):
        return category
    try:
        return AccessCategory(category)
    except ValueError:
        return None


def rank(category: Any) -> int:
    """
    Position of a category in the fixed access order. Anything outside the
    closed vocabulary ranks as the worst possible access.
    """
    known = _coerce(category)
    if known is None:
        return WORST_RANK
    return CATEGORY_RANK[known]


def worst_of(first: AccessCategory, second: AccessCategory, *more: AccessCategory) -> AccessCategory:
    # max() keeps the first operand on equal rank, so the result is order independent.
    return max((first, second, *more), key=rank)


def best_of(first: AccessCategory, second: AccessCategory, *more: AccessCategory) -> AccessCategory:
    return min((first, second, *more), key=rank)


def is_accessible(category: Any) -> bool:
    return _coerce(category) in ACCESSIBLE_CATEGORIES


def category_from_benefit_type(access_type: BenefitAccessType | str) -> AccessCategory:
    return BENEFIT_CATEGORY[BenefitAccessType(access_type)]


def category_label(category: AccessCategory | str) -> str:
    known = _coerce(category)
    if known is None:
        return str(category)
    return CATEGORY_LABELS.get(known, known.value)


def category_explanation(category: AccessCategory | str) -> str:
    known = _coerce(category)
    return CATEGORY_EXPLANATIONS.get(known, "") if known else ""
