from typing import Optional

from catalog.countries import CountryTable
from engine.categories import rank
from engine.passports import PassportResolver
from models.schemas import ComparisonRow, PassportComparison


def compare_passports(
    resolver: PassportResolver,
    countries: CountryTable,
    first: str,
    second: str,
) -> Optional[PassportComparison]:
    """
    Side-by-side access of two passports over every destination either one
    has data for. A destination one passport lacks data for counts against it.
    """
    if first not in countries or second not in countries:
        return None

    first_map = {r.destination: r for r in resolver.resolve(first)}
    second_map = {r.destination: r for r in resolver.resolve(second)}

    comparison = PassportComparison(first=first, second=second, rows=[])
    for destination in dict.fromkeys([*first_map, *second_map]):
        a = first_map.get(destination)
        b = second_map.get(destination)
        cat_a = a.category if a else None
        cat_b = b.category if b else None
        differs = cat_a != cat_b

        if not differs:
            comparison.same += 1
        elif rank(cat_a) < rank(cat_b):
            comparison.first_better += 1
        else:
            comparison.second_better += 1

        comparison.rows.append(
            ComparisonRow(
                destination=destination,
                first=cat_a,
                second=cat_b,
                first_days=a.days if a else None,
                second_days=b.days if b else None,
                differs=differs,
            )
        )

    comparison.rows.sort(key=lambda row: countries.name_of(row.destination).casefold())
    return comparison
