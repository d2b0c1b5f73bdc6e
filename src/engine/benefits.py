import logging
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from engine.categories import category_from_benefit_type, rank
from models.schemas import AccessCategory, AccessSource, EnhancedAccessResult, VisaBenefitRule

logger = logging.getLogger(__name__)


def _unique(holdings: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for holding_id in holdings:
        seen.setdefault(holding_id, None)
    return list(seen)


class BenefitResolver:
    """
    Works out which destinations a traveler's visas and residence permits
    open up beyond what their passports already give them.

    `baseline` arguments map destination codes to anything carrying a
    `category` attribute (passport results or enhanced results).
    """

    def __init__(
        self,
        rules: Mapping[str, Sequence[VisaBenefitRule]],
        countries: Optional[Iterable[str]] = None,
    ):
        self._rules = rules
        self._known = frozenset(countries) if countries is not None else None

    def _improvements(
        self, holding_id: str, baseline: Mapping[str, Any]
    ) -> Iterator[Tuple[VisaBenefitRule, AccessCategory]]:
        rules = self._rules.get(holding_id)
        if rules is None:
            logger.debug("Unknown visa holding %s; no benefits applied", holding_id)
            return
        for rule in rules:
            if self._known is not None and rule.destination not in self._known:
                continue
            candidate = category_from_benefit_type(rule.access_type)
            passport_access = baseline.get(rule.destination)
            # Equal rank keeps the passport entry, even when the benefit allows a longer stay.
            if passport_access is not None and rank(passport_access.category) <= rank(candidate):
                continue
            yield rule, candidate

    def resolve_benefits(
        self, holdings: Iterable[str], baseline: Mapping[str, Any]
    ) -> list[EnhancedAccessResult]:
        best: dict[str, EnhancedAccessResult] = {}
        for holding_id in _unique(holdings):
            for rule, category in self._improvements(holding_id, baseline):
                existing = best.get(rule.destination)
                if existing is not None and rank(category) >= rank(existing.category):
                    continue
                best[rule.destination] = EnhancedAccessResult(
                    destination=rule.destination,
                    category=category,
                    days=rule.days,
                    source=AccessSource.VISA_BENEFIT,
                    visa_holding_id=holding_id,
                    conditions=list(rule.conditions),
                    confidence=rule.confidence,
                )
        return list(best.values())

    def summarize_new_destinations(
        self, holdings: Iterable[str], baseline: Mapping[str, Any]
    ) -> dict[str, int]:
        """
        Per holding, how many destinations it improves on its own. Two holdings
        unlocking the same place both count it.
        """
        counts: dict[str, int] = {}
        for holding_id in _unique(holdings):
            counts[holding_id] = sum(1 for _ in self._improvements(holding_id, baseline))
        return counts
