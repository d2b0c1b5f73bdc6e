import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from engine.benefits import BenefitResolver
from engine.categories import best_of, worst_of
from engine.passports import PassportResolver
from models.schemas import (
    AccessCategory,
    AccessSource,
    EnhancedAccessResult,
    GroupResult,
    MergeOutcome,
    PassportAccessResult,
    Traveler,
)

logger = logging.getLogger(__name__)


def passport_access_map(resolver: PassportResolver, passports: Iterable[str]) -> dict[str, EnhancedAccessResult]:
    """
    One passport-sourced entry per destination, best access across the
    traveler's passports.
    """
    return {
        destination: _from_passport(result)
        for destination, result in resolver.resolve_many(passports).items()
    }


def _from_passport(result: PassportAccessResult) -> EnhancedAccessResult:
    return EnhancedAccessResult(
        destination=result.destination,
        category=result.category,
        days=result.days,
        source=AccessSource.PASSPORT,
    )


def full_access_map(
    passport_map: Mapping[str, EnhancedAccessResult],
    benefits: Sequence[EnhancedAccessResult],
) -> dict[str, EnhancedAccessResult]:
    """
    Passport access plus benefit access, one entry per destination. A benefit
    replaces a passport entry only when it ranks strictly better.
    """
    merged = dict(passport_map)
    for benefit in benefits:
        current = merged.get(benefit.destination)
        if current is None or best_of(current.category, benefit.category) is not current.category:
            merged[benefit.destination] = benefit
    return merged


@dataclass
class _TravelerAccess:
    traveler: Traveler
    access: dict[str, EnhancedAccessResult]
    counts: dict[str, int]


def _traveler_access(
    traveler: Traveler,
    passport_resolver: PassportResolver,
    benefit_resolver: BenefitResolver,
) -> _TravelerAccess:
    passport_map = passport_access_map(passport_resolver, traveler.passports)
    if traveler.visa_holdings:
        benefits = benefit_resolver.resolve_benefits(traveler.visa_holdings, passport_map)
        counts = benefit_resolver.summarize_new_destinations(traveler.visa_holdings, passport_map)
    else:
        benefits, counts = [], {}
    return _TravelerAccess(traveler, full_access_map(passport_map, benefits), counts)


def _single(entry: EnhancedAccessResult) -> GroupResult:
    return GroupResult(
        destination=entry.destination,
        category=entry.category,
        days=entry.days,
        source=entry.source,
        visa_holding_id=entry.visa_holding_id,
        conditions=entry.conditions,
    )


def _combine(destination: str, members: Sequence[_TravelerAccess]) -> GroupResult:
    per_person: dict[str, EnhancedAccessResult] = {}
    worst: AccessCategory = AccessCategory.VISA_FREE
    min_days: Optional[int] = None
    source = AccessSource.PASSPORT
    visa_holding_id: Optional[str] = None
    conditions: Optional[list[str]] = None

    for member in members:
        entry = member.access[destination]
        per_person[member.traveler.id] = entry
        worst = worst_of(worst, entry.category)
        if entry.days is not None and (min_days is None or entry.days < min_days):
            min_days = entry.days
        # Last traveler using a benefit supplies the attribution.
        if entry.source is AccessSource.VISA_BENEFIT:
            source = AccessSource.VISA_BENEFIT
            visa_holding_id = entry.visa_holding_id
            conditions = entry.conditions

    return GroupResult(
        destination=destination,
        category=worst,
        days=min_days if worst is AccessCategory.VISA_FREE else None,
        per_person=per_person,
        source=source,
        visa_holding_id=visa_holding_id,
        conditions=conditions,
    )


def merge_group(
    travelers: Sequence[Traveler],
    passport_resolver: PassportResolver,
    benefit_resolver: BenefitResolver,
) -> MergeOutcome:
    """
    Merge every active traveler's access into one result list.

    A single traveler gets their full access map as-is. Several travelers get
    only the destinations all of them can reach, at the worst category any of
    them faces.
    """
    active = [t for t in travelers if t.is_active]
    if not active:
        return MergeOutcome()

    members = [_traveler_access(t, passport_resolver, benefit_resolver) for t in active]
    counts = {member.traveler.id: member.counts for member in members}

    if len(members) == 1:
        results = [_single(entry) for entry in members[0].access.values()]
        return MergeOutcome(results=results, visa_benefit_counts=counts)

    common = [
        destination
        for destination in members[0].access
        if all(destination in member.access for member in members[1:])
    ]
    logger.debug("%d travelers share %d destinations", len(members), len(common))
    results = [_combine(destination, members) for destination in common]
    return MergeOutcome(results=results, visa_benefit_counts=counts)
