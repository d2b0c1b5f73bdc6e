from catalog import CountryTable, HoldingCatalog, OfficialLinks
from engine import BenefitResolver, PassportResolver
from lookup.service import VisaLookupService
from models.schemas import Country, GroupResult, HoldingCategory, OfficialLink, VisaBenefitRule, VisaHoldingType

COUNTRIES = [
    Country(code="DE", name="Germany", region="Europe"),
    Country(code="FR", name="France", region="Europe"),
    Country(code="US", name="United States", region="North America"),
    Country(code="MX", name="Mexico", region="North America"),
    Country(code="TR", name="Turkey", region="Asia"),
    Country(code="TH", name="Thailand", region="Asia"),
    Country(code="JP", name="Japan", region="Asia"),
    Country(code="GE", name="Georgia", region="Asia"),
    Country(code="IN", name="India", region="Asia"),
    Country(code="XX", name="Testland", region="Oceania"),
]

# "ZZ" is deliberately missing from COUNTRIES.
MATRIX = {
    "DE": {
        "DE": "-1", "FR": "visa free", "US": "eta", "MX": "180", "TR": "90",
        "TH": "30", "JP": "90", "GE": "365", "IN": "e-visa", "XX": "visa free", "ZZ": "90",
    },
    "US": {
        "US": "-1", "DE": "90", "FR": "90", "MX": "180", "TR": "visa required",
        "TH": "30", "JP": "90", "GE": "365", "IN": "e-visa",
    },
    "IN": {
        "IN": "-1", "DE": "visa required", "FR": "visa required", "US": "visa required",
        "MX": "visa required", "TR": "e-visa", "TH": "visa on arrival", "JP": "visa required",
        "GE": "e-visa", "XX": "no admission",
    },
}


def rule(destination, access_type, days=None, conditions=None, confidence="high") -> VisaBenefitRule:
    return VisaBenefitRule(
        destination=destination,
        access_type=access_type,
        days=days,
        conditions=conditions or [],
        confidence=confidence,
    )


RULES = {
    "us-visa": [
        rule("TR", "e_visa_simplified", 30, ["E-visa required"]),
        rule("MX", "visa_free", 180, ["Valid US visa"]),
        rule("GE", "visa_free", 90),
        rule("JP", "visa_on_arrival", 15),
    ],
    "schengen-visa": [
        rule("MX", "visa_on_arrival", 30),
        rule("GE", "visa_free", 90),
        rule("TR", "visa_free", 90, ["Schengen multi-entry"]),
        rule("ZZ", "visa_free", 90),
    ],
    "uk-visa": [
        rule("JP", "e_visa_simplified", 30),
    ],
}

HOLDING_TYPES = [
    VisaHoldingType(id="us-visa", name="Valid US Visa", short_name="US Visa",
                    category=HoldingCategory.SHORT_TERM_VISA, issuing_country="US"),
    VisaHoldingType(id="schengen-visa", name="Schengen Visa", short_name="Schengen",
                    category=HoldingCategory.SHORT_TERM_VISA, issuing_country="EU"),
    VisaHoldingType(id="uk-visa", name="Valid UK Visa / BRP", short_name="UK Visa",
                    category=HoldingCategory.SHORT_TERM_VISA, issuing_country="GB"),
    VisaHoldingType(id="us-green-card", name="US Permanent Residency", short_name="Green Card",
                    category=HoldingCategory.RESIDENCY, issuing_country="US"),
]


def country_table() -> CountryTable:
    return CountryTable(COUNTRIES)


def passport_resolver(matrix=None) -> PassportResolver:
    return PassportResolver(MATRIX if matrix is None else matrix, country_table().codes())


def benefit_resolver(rules=None) -> BenefitResolver:
    return BenefitResolver(RULES if rules is None else rules, country_table().codes())


def service(settings=None) -> VisaLookupService:
    links = OfficialLinks({"TR": OfficialLink(visa_info="https://www.evisa.gov.tr/")})
    return VisaLookupService(
        MATRIX,
        country_table(),
        HoldingCatalog(HOLDING_TYPES, RULES),
        links,
        settings=settings,
    )


def result(destination, category, days=None, source="passport", **extra) -> GroupResult:
    return GroupResult(destination=destination, category=category, days=days, source=source, **extra)
