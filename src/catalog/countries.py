from pathlib import Path
from typing import Iterable, Iterator, Optional

from pydantic import TypeAdapter

from catalog.loader import COUNTRIES_FILE, CatalogError, read_json, validate
from models.schemas import Country

_COUNTRIES = TypeAdapter(list[Country])


class CountryTable:
    """
    Canonical list of countries. Codes not in the table are treated as
    nonexistent everywhere else in the engine.
    """

    def __init__(self, countries: Iterable[Country]):
        self._by_code: dict[str, Country] = {}
        for country in countries:
            if country.code in self._by_code:
                raise CatalogError(f"Duplicate country code {country.code}")
            self._by_code[country.code] = country

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "CountryTable":
        return cls(validate(_COUNTRIES, read_json(path, COUNTRIES_FILE), "country table"))

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __iter__(self) -> Iterator[Country]:
        return iter(self._by_code.values())

    def __len__(self) -> int:
        return len(self._by_code)

    def codes(self) -> list[str]:
        return list(self._by_code)

    def get(self, code: str) -> Optional[Country]:
        return self._by_code.get(code)

    def name_of(self, code: str) -> str:
        country = self._by_code.get(code)
        return country.name if country else ""

    def region_of(self, code: str) -> str:
        country = self._by_code.get(code)
        return country.region if country else ""

    def regions(self) -> list[str]:
        return sorted({country.region for country in self._by_code.values()})
