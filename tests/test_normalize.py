from entity_dedupe.schema import Normalizer
from entity_dedupe.steps.normalize import (
    normalize,
    normalize_email,
    normalize_phone,
    normalize_text,
    split_values,
)


def test_normalize_text_lowercases_trims_and_collapses_whitespace() -> None:
    assert normalize_text("  Amarjeet \t  SINGH\n") == "amarjeet singh"


def test_normalize_text_is_idempotent() -> None:
    for value in ["  Jon   Smith ", "", "   ", "ZOË Kaur", "already clean"]:
        once = normalize_text(value)
        assert normalize_text(once) == once


def test_normalize_email_keeps_subaddress_and_dots() -> None:
    assert normalize_email("  A.Singh+RSVP@Example.COM ") == "a.singh+rsvp@example.com"
    assert normalize_email("a.singh@gmail.com") != normalize_email("asingh@gmail.com")


def test_normalize_phone_keeps_last_ten_digits() -> None:
    assert normalize_phone("(555) 123-4567") == "5551234567"
    assert normalize_phone("+1 555 123 4567") == "5551234567"
    assert normalize_phone("n/a") == ""


def test_normalize_phone_conflates_country_codes() -> None:
    assert normalize_phone("+44 555 123 4567") == normalize_phone("+1 555 123 4567")


def test_normalize_dispatches_on_kind_and_handles_none() -> None:
    assert normalize(None, Normalizer.EMAIL) == ""
    assert normalize("555.123.4567", Normalizer.PHONE) == "5551234567"
    assert normalize(" Info@Sunrise.com", Normalizer.EMAIL) == "info@sunrise.com"


def test_split_values_normalizes_members() -> None:
    assert split_values("Catering, DJ;  Photo Booth | ") == frozenset({"catering", "dj", "photo booth"})
    assert split_values(None) == frozenset()
    assert split_values(" , ;") == frozenset()
