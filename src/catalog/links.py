from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter

from catalog.loader import LINKS_FILE, read_json, validate
from models.schemas import OfficialLink

_LINKS = TypeAdapter(dict[str, OfficialLink])


class OfficialLinks:
    """Government visa-information and embassy-finder URLs by country code."""

    def __init__(self, links: dict[str, OfficialLink]):
        self._links = links

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "OfficialLinks":
        return cls(validate(_LINKS, read_json(path, LINKS_FILE), "official links"))

    def get(self, code: str) -> Optional[OfficialLink]:
        return self._links.get(code)

    def __len__(self) -> int:
        return len(self._links)
