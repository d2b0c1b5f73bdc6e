from typing import Iterable, Sequence

from catalog.countries import CountryTable
from engine.categories import DISPLAY_CATEGORIES, is_accessible
from models.schemas import AccessCategory, AccessSource, AccessSummary, GroupResult, Suggestions

POPULAR_DESTINATIONS = (
    "TH", "JP", "FR", "ES", "IT", "TR", "AE", "SG", "GB", "US", "MY", "GR", "PT", "KR", "MX",
)


def summarize_access(results: Sequence[GroupResult]) -> AccessSummary:
    """
    Headline numbers plus the per-filter counts shown next to each filter tab.
    """
    counts = {"all": len(results), "accessible": 0}
    counts.update({category.value: 0 for category in DISPLAY_CATEGORIES})

    visa_free = max_days = 0
    for result in results:
        counts[result.category.value] = counts.get(result.category.value, 0) + 1
        if is_accessible(result.category):
            counts["accessible"] += 1
        if result.category is AccessCategory.VISA_FREE:
            visa_free += 1
        if result.days and result.days > max_days:
            max_days = result.days

    return AccessSummary(
        total=len(results),
        visa_free=visa_free,
        easy_access=counts["accessible"],
        max_days=max_days,
        counts=counts,
    )


def _by_days(results: Iterable[GroupResult]) -> list[GroupResult]:
    return sorted(results, key=lambda r: -(r.days or 0))


def suggest_destinations(
    results: Sequence[GroupResult],
    countries: CountryTable,
    favorites: Iterable[str] = (),
    limit: int = 5,
) -> Suggestions:
    visa_free = [
        r
        for r in results
        if r.category is AccessCategory.VISA_FREE and r.source is AccessSource.PASSPORT
    ]
    if not visa_free:
        return Suggestions()

    longest = _by_days(r for r in visa_free if r.days)[:limit]

    favorite_regions = {countries.region_of(code) for code in favorites if code in countries}
    gems = _by_days(
        r
        for r in visa_free
        if r.destination in countries and countries.region_of(r.destination) not in favorite_regions
    )[:limit]

    by_code = {r.destination: r for r in visa_free}
    popular = [by_code[code] for code in POPULAR_DESTINATIONS if code in by_code][:limit]

    return Suggestions(longest_stays=longest, easy_gems=gems, popular_picks=popular)


def similar_destinations(
    results: Sequence[GroupResult],
    countries: CountryTable,
    code: str,
    limit: int = 6,
) -> list[GroupResult]:
    """
    Other destinations in the same region reachable under the same category.
    """
    country = countries.get(code)
    if country is None:
        return []
    current = next((r for r in results if r.destination == code), None)
    category = current.category if current else None
    return [
        r
        for r in results
        if r.destination != code
        and r.category == category
        and countries.region_of(r.destination) == country.region
    ][:limit]
