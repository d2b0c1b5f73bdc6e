from typing import Callable, Sequence

from catalog.countries import CountryTable
from engine.categories import is_accessible, rank
from models.schemas import AccessSource, GroupResult, ResultFilter, SortOption

ALL = "all"
ACCESSIBLE = "accessible"
FAVORITES = "favorites"


def _matches_primary(result: GroupResult, primary: str, favorites: set[str]) -> bool:
    if primary == FAVORITES:
        return result.destination in favorites
    if primary == ACCESSIBLE:
        return is_accessible(result.category)
    if primary == ALL:
        return True
    return result.category.value == primary


def _tertiary_key(sort_by: SortOption, countries: CountryTable) -> Callable[[GroupResult], tuple]:
    def name(result: GroupResult) -> str:
        return countries.name_of(result.destination).casefold()

    if sort_by is SortOption.DAYS_DESC:
        return lambda r: (-(r.days or 0),)
    if sort_by is SortOption.CATEGORY:
        return lambda r: (rank(r.category),)
    if sort_by is SortOption.REGION:
        return lambda r: (countries.region_of(r.destination).casefold(), name(r))
    return lambda r: (name(r),)


def filter_and_sort(
    results: Sequence[GroupResult],
    countries: CountryTable,
    result_filter: ResultFilter | None = None,
    sort_by: SortOption | str = SortOption.NAME,
) -> list[GroupResult]:
    """
    Apply the display filters and ordering to merged results.

    Favorites come first (unless only favorites are shown), then passport
    access ahead of visa-benefit access, then the chosen order. The sort is
    stable, so ties keep merge order.
    """
    result_filter = result_filter or ResultFilter()
    sort_by = SortOption(sort_by)
    favorites = result_filter.favorites

    filtered = [r for r in results if _matches_primary(r, result_filter.primary, favorites)]

    if result_filter.region and result_filter.region != ALL:
        filtered = [r for r in filtered if countries.region_of(r.destination) == result_filter.region]

    if result_filter.search:
        query = result_filter.search.lower()
        filtered = [r for r in filtered if query in countries.name_of(r.destination).lower()]

    tertiary = _tertiary_key(sort_by, countries)
    favorites_first = result_filter.primary != FAVORITES

    def key(result: GroupResult) -> tuple:
        fav = 0 if (not favorites_first or result.destination in favorites) else 1
        src = 0 if result.source is AccessSource.PASSPORT else 1
        return (fav, src) + tertiary(result)

    return sorted(filtered, key=key)
