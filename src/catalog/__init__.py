from .loader import CatalogError, load_requirements
from .countries import CountryTable
from .holdings import HoldingCatalog
from .links import OfficialLinks

__all__ = [
    "CatalogError",
    "load_requirements",
    "CountryTable",
    "HoldingCatalog",
    "OfficialLinks",
]
