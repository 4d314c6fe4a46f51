import pytest

from entity_dedupe.datasets import GUEST_PROFILE, PROFILES, VENDOR_PROFILE
from entity_dedupe.errors import ConfigurationError
from entity_dedupe.schema import Comparison, EntityProfile, FieldSpec, Normalizer


def test_field_spec_accepts_string_kinds() -> None:
    spec = FieldSpec("household_name", "fuzzy", 0.5, "text")

    assert spec.comparison == Comparison.FUZZY
    assert spec.normalizer == Normalizer.TEXT
    assert spec.label == "household name"
    assert spec.plural == "household names"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "email", "comparison": Comparison.EXACT_NORMALIZED, "weight": -0.1},
        {"name": "email", "comparison": Comparison.EXACT_NORMALIZED, "weight": float("nan")},
        {"name": "email", "comparison": Comparison.EXACT_NORMALIZED, "weight": float("inf")},
        {"name": "email", "comparison": Comparison.EXACT_NORMALIZED, "weight": "0.7"},
        {"name": "name", "comparison": "phonetic", "weight": 0.5},
        {"name": "name", "comparison": Comparison.FUZZY, "weight": 0.5, "normalizer": "soundex"},
        {"name": "  ", "comparison": Comparison.FUZZY, "weight": 0.5},
    ],
)
def test_invalid_field_specs(kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        FieldSpec(**kwargs)


def test_profile_rejects_bad_configuration() -> None:
    name = FieldSpec("name", Comparison.FUZZY, 0.5)

    with pytest.raises(ConfigurationError):
        EntityProfile.from_fields("empty", [])
    with pytest.raises(ConfigurationError):
        EntityProfile.from_fields("dupes", [name, name])
    with pytest.raises(ConfigurationError):
        EntityProfile.from_fields("unknown", [name], identity_sets=[("email",)])
    with pytest.raises(ConfigurationError):
        EntityProfile.from_fields("blank-set", [name], identity_sets=[()])
    with pytest.raises(ConfigurationError):
        EntityProfile.from_fields("thresholds", [name], threshold=0.6, exact_threshold=0.5)
    with pytest.raises(ConfigurationError):
        EntityProfile.from_fields("negative", [name], threshold=-0.4)


def test_profile_max_score_and_lookup() -> None:
    assert GUEST_PROFILE.max_score == pytest.approx(1.8)
    assert VENDOR_PROFILE.max_score == pytest.approx(2.3)
    assert GUEST_PROFILE.field_names() == ("email", "phone", "name")
    assert GUEST_PROFILE.get_field("phone").normalizer == Normalizer.PHONE
    with pytest.raises(ConfigurationError):
        GUEST_PROFILE.get_field("website")


def test_builtin_profiles_are_registered() -> None:
    assert sorted(PROFILES) == ["guest", "household", "vendor"]
    assert PROFILES["vendor"].identity_sets == (("name", "email"), ("name", "city"))
