"""
Visa and residence-permit holdings a traveler can add, and the destinations
each one opens up.

Benefit rules were compiled from official immigration sites, IATA and
embassy pages; only high and medium confidence entries are kept.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field, TypeAdapter

from catalog.loader import HOLDINGS_FILE, read_json, validate
from models.schemas import HoldingCategory, HoldingGroup, VisaBenefitRule, VisaHoldingType

logger = logging.getLogger(__name__)

HOLDING_CATEGORY_ORDER = (
    HoldingCategory.RESIDENCY,
    HoldingCategory.LONG_TERM_VISA,
    HoldingCategory.SHORT_TERM_VISA,
    HoldingCategory.SPECIAL_PERMIT,
)

HOLDING_CATEGORY_LABELS = {
    HoldingCategory.RESIDENCY: "Residencies",
    HoldingCategory.LONG_TERM_VISA: "Long-term Visas",
    HoldingCategory.SHORT_TERM_VISA: "Short-term Visas",
    HoldingCategory.SPECIAL_PERMIT: "Special Permits",
}


class HoldingsDocument(BaseModel):
    holding_types: list[VisaHoldingType]
    benefits: dict[str, list[VisaBenefitRule]] = Field(default_factory=dict)


_DOCUMENT = TypeAdapter(HoldingsDocument)


class HoldingCatalog:
    def __init__(self, holding_types: Iterable[VisaHoldingType], benefits: dict[str, list[VisaBenefitRule]]):
        self._types: dict[str, VisaHoldingType] = {t.id: t for t in holding_types}
        self._benefits = benefits
        orphaned = sorted(set(benefits) - set(self._types))
        if orphaned:
            # Still usable by id; just missing display metadata.
            logger.warning("Benefit rules without a holding type: %s", ", ".join(orphaned))

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "HoldingCatalog":
        document = validate(_DOCUMENT, read_json(path, HOLDINGS_FILE), "holdings document")
        return cls(document.holding_types, document.benefits)

    @property
    def rules(self) -> dict[str, list[VisaBenefitRule]]:
        return self._benefits

    @property
    def holding_types(self) -> list[VisaHoldingType]:
        return list(self._types.values())

    def get(self, holding_id: str) -> Optional[VisaHoldingType]:
        return self._types.get(holding_id)

    def benefits_for(self, holding_id: str) -> list[VisaBenefitRule]:
        return list(self._benefits.get(holding_id, []))

    def search(self, query: str = "", exclude: Iterable[str] = ()) -> list[VisaHoldingType]:
        held = set(exclude)
        needle = query.lower()
        return [
            t
            for t in self._types.values()
            if t.id not in held and (needle in t.name.lower() or needle in t.short_name.lower())
        ]

    def grouped(self, query: str = "", exclude: Iterable[str] = ()) -> list[HoldingGroup]:
        matches = self.search(query, exclude)
        groups = []
        for category in HOLDING_CATEGORY_ORDER:
            items = [t for t in matches if t.category is category]
            if items:
                groups.append(HoldingGroup(category=category, label=HOLDING_CATEGORY_LABELS[category], items=items))
        return groups
