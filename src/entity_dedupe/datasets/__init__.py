from entity_dedupe.datasets.profiles import GUEST_PROFILE, HOUSEHOLD_PROFILE, PROFILES, VENDOR_PROFILE
from entity_dedupe.datasets.reference import GUEST_COLUMNS, ReferenceDatasetGenerator

__all__ = [
    "GUEST_COLUMNS",
    "GUEST_PROFILE",
    "HOUSEHOLD_PROFILE",
    "PROFILES",
    "VENDOR_PROFILE",
    "ReferenceDatasetGenerator",
]
