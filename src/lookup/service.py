import logging
from typing import Iterable, Optional, Sequence

from catalog import CountryTable, HoldingCatalog, OfficialLinks, load_requirements
from catalog.loader import RequirementsMatrix
from engine import (
    BenefitResolver,
    PassportResolver,
    category_explanation,
    compare_passports,
    filter_and_sort,
    merge_group,
    similar_destinations,
    suggest_destinations,
    summarize_access,
)
from lookup.config import Settings
from lookup.logger import log_event
from models.schemas import (
    AccessSummary,
    DestinationDetail,
    GroupResult,
    HoldingGroup,
    MergeOutcome,
    PassportComparison,
    ResultFilter,
    SortOption,
    Suggestions,
    Traveler,
)

logger = logging.getLogger(__name__)


class VisaLookupService:
    """
    Entry point for a host UI: owns the reference data and the resolvers
    built on it, and runs the merge / filter pipeline on request.
    """

    def __init__(
        self,
        requirements: RequirementsMatrix,
        countries: CountryTable,
        holdings: HoldingCatalog,
        links: Optional[OfficialLinks] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self._install(requirements, countries, holdings, links or OfficialLinks({}))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "VisaLookupService":
        settings = settings or Settings()
        return cls(*cls._load(settings), settings=settings)

    @staticmethod
    def _load(settings: Settings):
        return (
            load_requirements(settings.requirements_path),
            CountryTable.load(settings.countries_path),
            HoldingCatalog.load(settings.holdings_path),
            OfficialLinks.load(settings.links_path),
        )

    def _install(
        self,
        requirements: RequirementsMatrix,
        countries: CountryTable,
        holdings: HoldingCatalog,
        links: OfficialLinks,
    ) -> None:
        self.countries = countries
        self.holdings = holdings
        self.links = links
        self.passports = PassportResolver(requirements, countries.codes())
        self.benefits = BenefitResolver(holdings.rules, countries.codes())

    def reload(self) -> None:
        """Re-read every data file and start over with empty caches."""
        self._install(*self._load(self.settings))
        logger.info("Reference data reloaded")

    def compute(self, travelers: Sequence[Traveler]) -> MergeOutcome:
        outcome = merge_group(travelers, self.passports, self.benefits)
        log_event(
            "merge_computed",
            {
                "travelers": len(travelers),
                "active": sum(1 for t in travelers if t.is_active),
                "passports": sorted({p for t in travelers for p in t.passports}),
                "results": len(outcome.results),
            },
            path=self.settings.event_log_path,
        )
        return outcome

    def display_results(
        self,
        outcome: MergeOutcome,
        result_filter: Optional[ResultFilter] = None,
        sort_by: SortOption = SortOption.NAME,
    ) -> list[GroupResult]:
        return filter_and_sort(outcome.results, self.countries, result_filter, sort_by)

    def compare(self, first: str, second: str) -> Optional[PassportComparison]:
        return compare_passports(self.passports, self.countries, first, second)

    def summary(self, results: Sequence[GroupResult]) -> AccessSummary:
        return summarize_access(results)

    def suggestions(self, results: Sequence[GroupResult], favorites: Iterable[str] = ()) -> Suggestions:
        return suggest_destinations(results, self.countries, favorites)

    def destination_detail(self, code: str, results: Sequence[GroupResult]) -> Optional[DestinationDetail]:
        country = self.countries.get(code)
        if country is None:
            return None
        result = next((r for r in results if r.destination == code), None)
        return DestinationDetail(
            country=country,
            result=result,
            explanation=category_explanation(result.category) if result else "",
            links=self.links.get(code),
            similar=similar_destinations(results, self.countries, code),
        )

    def holding_options(self, traveler: Traveler, query: str = "") -> list[HoldingGroup]:
        """Holdings the traveler could still add, grouped for a picker."""
        return self.holdings.grouped(query, exclude=traveler.visa_holdings)
