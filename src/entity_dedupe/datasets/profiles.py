from __future__ import annotations

from entity_dedupe.schema import Comparison, EntityProfile, FieldSpec, Normalizer

# Guest list imports: one threshold, everything reported goes to a person.
GUEST_FIELDS = [
    FieldSpec("email", Comparison.EXACT_NORMALIZED, 0.7, Normalizer.EMAIL, label="email address"),
    FieldSpec("phone", Comparison.EXACT_NORMALIZED, 0.6, Normalizer.PHONE, label="phone number"),
    FieldSpec("name", Comparison.FUZZY, 0.5, Normalizer.TEXT),
]

GUEST_PROFILE = EntityProfile.from_fields("guest", GUEST_FIELDS, threshold=0.4)


# Shared vendor directory: same name in the same city, or same name and email,
# is the same business.
VENDOR_FIELDS = [
    FieldSpec("name", Comparison.FUZZY, 0.5, Normalizer.TEXT),
    FieldSpec("email", Comparison.EXACT_NORMALIZED, 0.7, Normalizer.EMAIL, label="email address"),
    FieldSpec("phone", Comparison.EXACT_NORMALIZED, 0.6, Normalizer.PHONE, label="phone number"),
    FieldSpec("city", Comparison.EXACT_NORMALIZED, 0.2, Normalizer.TEXT, plural="cities"),
    FieldSpec("categories", Comparison.SET_OVERLAP, 0.3, Normalizer.TEXT, label="category", plural="categories"),
]

VENDOR_PROFILE = EntityProfile.from_fields(
    "vendor",
    VENDOR_FIELDS,
    identity_sets=[("name", "email"), ("name", "city")],
    threshold=0.5,
)


# Guest suggestions against existing households.
HOUSEHOLD_FIELDS = [
    FieldSpec("household_name", Comparison.FUZZY, 0.5, Normalizer.TEXT),
    FieldSpec("email", Comparison.EXACT_NORMALIZED, 0.7, Normalizer.EMAIL, label="email address"),
]

HOUSEHOLD_PROFILE = EntityProfile.from_fields(
    "household",
    HOUSEHOLD_FIELDS,
    identity_sets=[("household_name",), ("email",)],
    threshold=0.4,
)


PROFILES: dict[str, EntityProfile] = {
    profile.name: profile for profile in (GUEST_PROFILE, VENDOR_PROFILE, HOUSEHOLD_PROFILE)
}
