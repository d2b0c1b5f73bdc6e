from .config import Settings, configure_logging, load_settings
from .service import VisaLookupService

__all__ = [
    "Settings",
    "configure_logging",
    "load_settings",
    "VisaLookupService",
]
