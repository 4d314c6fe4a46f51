from __future__ import annotations

import re
from collections.abc import Callable

from entity_dedupe.schema import Normalizer

_WHITESPACE = re.compile(r"\s+")
_NON_DIGIT = re.compile(r"\D")
_VALUE_SEPARATORS = re.compile(r"[,;|]")

PHONE_DIGITS = 10


def normalize_text(value: str) -> str:
    return _WHITESPACE.sub(" ", value.lower().strip())


def normalize_email(value: str) -> str:
    # Sub-addresses and alias domains are kept: distinct mailboxes must not merge.
    return value.strip().lower()


def normalize_phone(value: str) -> str:
    """Digits only, last ten kept.

    Numbers that differ only before their last ten digits (country codes) compare
    equal; acceptable for the North-American populations this was built for.
    """
    return _NON_DIGIT.sub("", value)[-PHONE_DIGITS:]


NORMALIZERS: dict[Normalizer, Callable[[str], str]] = {
    Normalizer.TEXT: normalize_text,
    Normalizer.EMAIL: normalize_email,
    Normalizer.PHONE: normalize_phone,
}


def normalize(value: str | None, kind: Normalizer) -> str:
    if value is None:
        return ""
    return NORMALIZERS[kind](value)


def split_values(value: str | None, kind: Normalizer = Normalizer.TEXT) -> frozenset[str]:
    """Normalized members of a multi-valued field such as ``"Catering; DJ"``."""
    if not value:
        return frozenset()
    parts = (normalize(part, kind) for part in _VALUE_SEPARATORS.split(value))
    return frozenset(part for part in parts if part)
