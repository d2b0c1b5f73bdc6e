import logging
import re
import threading
from typing import Iterable, Mapping, Optional, Tuple

from engine.categories import best_of
from models.schemas import AccessCategory, PassportAccessResult

logger = logging.getLogger(__name__)

# Raw dataset vocabulary, checked in order; the first exact match wins.
RAW_LITERALS: Tuple[Tuple[str, AccessCategory], ...] = (
    ("-1", AccessCategory.SELF),
    ("no admission", AccessCategory.NO_ADMISSION),
    ("visa required", AccessCategory.VISA_REQUIRED),
    ("e-visa", AccessCategory.E_VISA),
    ("eta", AccessCategory.ETA),
    ("visa on arrival", AccessCategory.VISA_ON_ARRIVAL),
    ("visa free", AccessCategory.VISA_FREE),
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def categorize(raw: str) -> Tuple[AccessCategory, Optional[int]]:
    """
    Decode one raw dataset cell into (category, days).

    Literals map directly; a leading integer means visa-free for that many
    days; anything else falls back to visa-required so unknown values never
    over-promise access.
    """
    for literal, category in RAW_LITERALS:
        if raw == literal:
            return category, None

    match = _LEADING_INT.match(raw)
    if match:
        days = int(match.group(1))
        return AccessCategory.VISA_FREE, days if days > 0 else None

    return AccessCategory.VISA_REQUIRED, None


def _better(candidate: PassportAccessResult, current: PassportAccessResult) -> bool:
    if candidate.category is not current.category:
        return best_of(current.category, candidate.category) is candidate.category
    return (candidate.days or 0) > (current.days or 0)


class PassportResolver:
    """
    Resolves passport codes against the requirements matrix.

    Results are memoized per instance: the matrix is immutable once loaded, so
    entries are never evicted, only dropped wholesale by clear_cache().
    """

    def __init__(self, requirements: Mapping[str, Mapping[str, str]], countries: Iterable[str]):
        self._requirements = requirements
        self._known = frozenset(countries)
        self._cache: dict[str, Tuple[PassportAccessResult, ...]] = {}
        self._group_cache: dict[Tuple[str, ...], dict[str, PassportAccessResult]] = {}
        self._lock = threading.Lock()

    def resolve(self, passport_code: str) -> list[PassportAccessResult]:
        cached = self._cache.get(passport_code)
        if cached is None:
            cached = self._build(passport_code)
            with self._lock:
                cached = self._cache.setdefault(passport_code, cached)
        return list(cached)

    def _build(self, passport_code: str) -> Tuple[PassportAccessResult, ...]:
        row = self._requirements.get(passport_code)
        if row is None:
            logger.debug("No requirement data for passport %s", passport_code)
            return ()

        results = []
        for destination, raw in row.items():
            category, days = categorize(raw)
            if category is AccessCategory.SELF:
                continue
            if destination not in self._known:
                continue
            results.append(
                PassportAccessResult(destination=destination, category=category, days=days, raw=raw)
            )
        return tuple(results)

    def resolve_many(self, passport_codes: Iterable[str]) -> dict[str, PassportAccessResult]:
        """
        Best access per destination across several passports held by one person.
        """
        key = tuple(sorted(set(passport_codes)))
        cached = self._group_cache.get(key)
        if cached is None:
            best: dict[str, PassportAccessResult] = {}
            for code in key:
                for result in self.resolve(code):
                    current = best.get(result.destination)
                    if current is None or _better(result, current):
                        best[result.destination] = result
            with self._lock:
                cached = self._group_cache.setdefault(key, best)
        return dict(cached)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
            self._group_cache.clear()

    def knows(self, passport_code: str) -> bool:
        return passport_code in self._requirements
