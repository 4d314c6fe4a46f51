import pytest

from entity_dedupe.datasets import GUEST_PROFILE, HOUSEHOLD_PROFILE, VENDOR_PROFILE
from entity_dedupe.errors import ConfigurationError, ValidationError
from entity_dedupe.models import Decision, EntityRecord
from entity_dedupe.policy import Classifier
from entity_dedupe.steps.compare import WeightedFieldComparator
from entity_dedupe.steps.matcher import EntityMatcher, validate_records


def test_match_one_reports_reference_and_reasons() -> None:
    matcher = EntityMatcher.from_profile(GUEST_PROFILE)
    candidate = EntityRecord(record_id=None, attributes={"name": "Amarjeet Singh", "email": "a.singh@example.com"})
    reference = EntityRecord(
        record_id="g-17",
        attributes={"name": "Amarjeet Singh", "email": "a.singh@example.com"},
        label="Amarjeet Singh",
    )

    match = matcher.match_one(candidate, reference)

    assert match is not None
    assert match.reference_id == "g-17"
    assert match.reference_label == "Amarjeet Singh"
    assert match.score == pytest.approx(1.2)
    assert match.confidence == 1.0
    assert match.reasons == ["Same email address", "Nearly identical names (100%)"]
    assert match.exact is False


def test_match_one_returns_none_when_nothing_matches() -> None:
    matcher = EntityMatcher.from_profile(GUEST_PROFILE)
    candidate = EntityRecord(record_id=None, attributes={"name": "Raj Patel"})
    reference = EntityRecord(record_id="g-1", attributes={"name": "Neha Reddy", "email": "neha@example.com"})

    assert matcher.match_one(candidate, reference) is None


def test_match_one_keeps_low_scores_for_the_caller() -> None:
    matcher = EntityMatcher.from_profile(GUEST_PROFILE)
    candidate = EntityRecord(record_id=None, attributes={"name": "Jon Smith"})
    reference = EntityRecord(record_id="g-2", attributes={"name": "John Smith"})

    match = matcher.match_one(candidate, reference)

    assert match is not None
    assert match.score == pytest.approx(0.35)
    assert match.reference_label == "g-2"


def test_identity_set_short_circuits_to_max_score() -> None:
    matcher = EntityMatcher.from_profile(VENDOR_PROFILE)
    candidate = EntityRecord(record_id=None, attributes={"name": "Sunrise Catering", "email": "info@sunrise.com"})
    reference = EntityRecord(
        record_id="v-9",
        attributes={
            "name": "Sunrise Catering",
            "email": "INFO@sunrise.com",
            "categories": "Catering",
            "city": "Surrey",
        },
    )

    match = matcher.match_one(candidate, reference)

    assert match is not None
    assert match.exact is True
    assert match.score == VENDOR_PROFILE.max_score
    assert match.score == pytest.approx(2.3)
    assert match.reasons == ["Same name and email address"]
    assert Classifier.for_profile(VENDOR_PROFILE).classify(match.score) == Decision.EXACT


def test_identity_set_needs_every_field_present() -> None:
    matcher = EntityMatcher.from_profile(VENDOR_PROFILE)
    candidate = EntityRecord(record_id=None, attributes={"name": "Sunrise Catering"})
    reference = EntityRecord(
        record_id="v-9",
        attributes={"name": "Sunrise Catering", "email": "info@sunrise.com", "city": "Surrey"},
    )

    match = matcher.match_one(candidate, reference)

    assert match is not None
    assert match.exact is False
    assert match.score == pytest.approx(0.5)
    assert Classifier.for_profile(VENDOR_PROFILE).classify_match(match) == Decision.POTENTIAL


def test_second_identity_set_name_and_city() -> None:
    matcher = EntityMatcher.from_profile(VENDOR_PROFILE)

    breakdown = matcher.score(
        {"name": "Sunrise  Catering", "city": "surrey", "email": "bookings@sunrise.com"},
        {"name": "sunrise catering", "city": "Surrey", "email": "info@sunrise.com"},
    )

    assert breakdown.exact is True
    assert breakdown.reasons == ["Same name and city"]


def test_single_field_identity_set() -> None:
    matcher = EntityMatcher.from_profile(HOUSEHOLD_PROFILE)

    breakdown = matcher.score(
        {"household_name": "The Gills", "email": "gill@example.com"},
        {"household_name": "Sandhu Family", "email": "GILL@example.com"},
    )

    assert breakdown.exact is True
    assert breakdown.score == pytest.approx(1.2)
    assert breakdown.reasons == ["Same email address"]


def test_identity_set_with_unknown_field_is_rejected() -> None:
    comparator = WeightedFieldComparator(GUEST_PROFILE.fields)

    with pytest.raises(ConfigurationError):
        EntityMatcher(comparator, identity_sets=[("name", "website")])
    with pytest.raises(ConfigurationError):
        EntityMatcher(comparator, identity_sets=[()])


def test_reference_without_id_is_rejected() -> None:
    matcher = EntityMatcher.from_profile(GUEST_PROFILE)
    candidate = EntityRecord(record_id=None, attributes={"name": "Raj Patel"})

    with pytest.raises(ValidationError):
        matcher.match_one(candidate, EntityRecord(record_id=None, attributes={"name": "Raj Patel"}))
    with pytest.raises(ValidationError):
        matcher.match_one(candidate, EntityRecord(record_id="", attributes={"name": "Raj Patel"}))


def test_non_string_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_records([EntityRecord(record_id="1", attributes={"phone": 5551234567})])
    with pytest.raises(ValidationError):
        validate_records([EntityRecord(record_id="1", attributes=["name", "Raj"])])
    with pytest.raises(ValidationError):
        validate_records([{"name": "Raj"}])


def test_matcher_does_not_mutate_records() -> None:
    matcher = EntityMatcher.from_profile(GUEST_PROFILE)
    attributes = {"name": "  Priya SHARMA ", "email": " Priya@Example.com", "phone": "(604) 555-0101"}
    snapshot = dict(attributes)

    matcher.match_one(
        EntityRecord(record_id=None, attributes=attributes),
        EntityRecord(record_id="g-3", attributes=dict(attributes)),
    )

    assert attributes == snapshot
