from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AccessCategory(str, Enum):
    VISA_FREE = "visa-free"
    ETA = "eta"
    E_VISA = "e-visa"
    VISA_ON_ARRIVAL = "visa-on-arrival"
    VISA_REQUIRED = "visa-required"
    NO_ADMISSION = "no-admission"
    SELF = "self"


class BenefitAccessType(str, Enum):
    VISA_FREE = "visa_free"
    VISA_ON_ARRIVAL = "visa_on_arrival"
    E_VISA_SIMPLIFIED = "e_visa_simplified"
    TRANSIT_FREE = "transit_free"


class HoldingCategory(str, Enum):
    RESIDENCY = "residency"
    LONG_TERM_VISA = "long_term_visa"
    SHORT_TERM_VISA = "short_term_visa"
    SPECIAL_PERMIT = "special_permit"


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class AccessSource(str, Enum):
    PASSPORT = "passport"
    VISA_BENEFIT = "visa_benefit"


class SortOption(str, Enum):
    NAME = "name"
    DAYS_DESC = "days-desc"
    CATEGORY = "category"
    REGION = "region"


class Country(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    region: str
    flag: str = ""


class OfficialLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    visa_info: str | None = None
    embassy: str | None = None


class PassportAccessResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: str
    category: AccessCategory
    days: int | None = None
    raw: str


class VisaHoldingType(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    short_name: str
    category: HoldingCategory
    issuing_country: str
    icon: str = ""
    description: str = ""


class VisaBenefitRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: str
    access_type: BenefitAccessType
    days: int | None = None
    conditions: list[str] = Field(default_factory=list)
    confidence: ConfidenceLevel = ConfidenceLevel.MEDIUM


class EnhancedAccessResult(BaseModel):
    destination: str
    category: AccessCategory
    days: int | None = None
    source: AccessSource = AccessSource.PASSPORT
    visa_holding_id: str | None = None
    conditions: list[str] | None = None
    confidence: ConfidenceLevel | None = None


class Traveler(BaseModel):
    id: str
    name: str = ""
    passports: list[str] = Field(default_factory=list)
    visa_holdings: list[str] = Field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return len(self.passports) > 0


class GroupResult(BaseModel):
    destination: str
    category: AccessCategory
    days: int | None = None
    per_person: dict[str, EnhancedAccessResult] = Field(default_factory=dict)
    source: AccessSource = AccessSource.PASSPORT
    visa_holding_id: str | None = None
    conditions: list[str] | None = None


class MergeOutcome(BaseModel):
    results: list[GroupResult] = Field(default_factory=list)
    visa_benefit_counts: dict[str, dict[str, int]] = Field(default_factory=dict)


class ResultFilter(BaseModel):
    primary: str = Field("accessible", description="all | accessible | favorites | an access category value")
    region: str | None = None
    search: str = ""
    favorites: set[str] = Field(default_factory=set)


class ComparisonRow(BaseModel):
    destination: str
    first: AccessCategory | None = None
    second: AccessCategory | None = None
    first_days: int | None = None
    second_days: int | None = None
    differs: bool


class PassportComparison(BaseModel):
    first: str
    second: str
    rows: list[ComparisonRow]
    first_better: int = 0
    second_better: int = 0
    same: int = 0

    def differences_only(self) -> list[ComparisonRow]:
        return [row for row in self.rows if row.differs]


class AccessSummary(BaseModel):
    visa_free: int = 0
    easy_access: int = 0
    total: int = 0
    max_days: int = 0
    counts: dict[str, int] = Field(default_factory=dict)


class Suggestions(BaseModel):
    longest_stays: list[GroupResult] = Field(default_factory=list)
    easy_gems: list[GroupResult] = Field(default_factory=list)
    popular_picks: list[GroupResult] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.longest_stays or self.easy_gems or self.popular_picks)


class HoldingGroup(BaseModel):
    category: HoldingCategory
    label: str
    items: list[VisaHoldingType]


class DestinationDetail(BaseModel):
    country: Country
    result: GroupResult | None = None
    explanation: str = ""
    links: OfficialLink | None = None
    similar: list[GroupResult] = Field(default_factory=list)
