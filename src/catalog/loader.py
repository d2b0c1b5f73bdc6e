import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATA_PACKAGE = "catalog.data"

REQUIREMENTS_FILE = "visa_requirements.json"
COUNTRIES_FILE = "countries.json"
HOLDINGS_FILE = "visa_holdings.json"
LINKS_FILE = "official_links.json"

RequirementsMatrix = dict[str, dict[str, str]]


class CatalogError(Exception):
    """Raised when a reference data file is missing or not the documented shape."""


def read_json(path: Optional[Path], default_name: str) -> Any:
    """
    Read a JSON document from `path`, or from the bundled data file when no
    path is configured.
    """
    try:
        if path is None:
            text = resources.files(DATA_PACKAGE).joinpath(default_name).read_text(encoding="utf-8")
            source = f"bundled {default_name}"
        else:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)
    except OSError as exc:
        raise CatalogError(f"Cannot read {path or default_name}: {exc}") from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"{source} is not valid JSON: {exc}") from exc
    logger.debug("Loaded %s", source)
    return payload


def validate(adapter: TypeAdapter[T], payload: Any, label: str) -> T:
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise CatalogError(f"Invalid {label}: {exc}") from exc


_REQUIREMENTS = TypeAdapter(RequirementsMatrix)


def load_requirements(path: Optional[Path] = None) -> RequirementsMatrix:
    """
    Passport code -> destination code -> raw requirement string.
    """
    payload = read_json(path, REQUIREMENTS_FILE)
    matrix = validate(_REQUIREMENTS, payload, "requirements matrix")
    logger.info("Requirements matrix covers %d passports", len(matrix))
    return matrix
