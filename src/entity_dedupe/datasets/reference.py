from __future__ import annotations

import random

from entity_dedupe.models import EntityRecord

GUEST_COLUMNS = ["name", "email", "phone"]

_FIRST_NAMES = [
    "Amarjeet",
    "Priya",
    "Raj",
    "Harpreet",
    "Anjali",
    "Vikram",
    "Simran",
    "Arjun",
    "Neha",
    "Rohan",
]
_LAST_NAMES = [
    "Singh",
    "Patel",
    "Sharma",
    "Gill",
    "Kaur",
    "Mehta",
    "Reddy",
    "Sandhu",
]
_DOMAINS = ["gmail.com", "outlook.com", "yahoo.com", "example.com"]


class ReferenceDatasetGenerator:
    """Generate synthetic guest records (with intentional dupes) for tests and benchmarks."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(self, size: int, duplicate_rate: float = 0.15) -> list[EntityRecord]:
        if size <= 0:
            return []

        records: list[EntityRecord] = []
        unique_count = int(size * (1.0 - duplicate_rate))
        unique_count = max(1, min(unique_count, size))

        for i in range(unique_count):
            attrs = self._profile(i)
            records.append(EntityRecord(record_id=f"guest_{i:07d}", attributes=attrs, label=attrs["name"]))

        while len(records) < size:
            source = self._rng.choice(records[:unique_count])
            attrs = dict(source.attributes)
            self._perturb(attrs)
            records.append(
                EntityRecord(record_id=f"guest_{len(records):07d}", attributes=attrs, label=attrs["name"])
            )

        self._rng.shuffle(records)
        return records

    def _profile(self, idx: int) -> dict[str, str | None]:
        first_name = self._rng.choice(_FIRST_NAMES)
        last_name = self._rng.choice(_LAST_NAMES)
        email_local = f"{first_name}.{last_name}{idx % 97}".lower()

        # Guest lists are patchy: not everyone has an email or phone on file.
        email = f"{email_local}@{self._rng.choice(_DOMAINS)}" if self._rng.random() < 0.8 else None
        phone = f"604{idx % 10000000:07d}" if self._rng.random() < 0.6 else None
        return {"name": f"{first_name} {last_name}", "email": email, "phone": phone}

    def _perturb(self, attrs: dict[str, str | None]) -> None:
        mutation = self._rng.choice(["email", "name", "phone", "mixed"])

        if mutation in {"email", "mixed"} and attrs.get("email"):
            attrs["email"] = self._email_variant(attrs["email"])

        if mutation in {"name", "mixed"} and attrs.get("name"):
            attrs["name"] = self._name_variant(attrs["name"])

        if mutation in {"phone", "mixed"} and attrs.get("phone"):
            attrs["phone"] = self._phone_variant(attrs["phone"])

    def _email_variant(self, email: str) -> str:
        local, _, domain = email.partition("@")
        if self._rng.random() < 0.5:
            return f"  {local.capitalize()}@{domain.upper()} "
        return email

    def _name_variant(self, name: str) -> str:
        variant = self._rng.choice(["case", "typo", "spacing"])
        if variant == "case":
            return name.upper()
        if variant == "typo" and len(name) > 4:
            drop_at = self._rng.randrange(1, len(name) - 1)
            return name[:drop_at] + name[drop_at + 1 :]
        return "  ".join(name.split())

    def _phone_variant(self, phone: str) -> str:
        digits = phone[-10:]
        style = self._rng.choice(["dashes", "parens", "country"])
        if style == "dashes":
            return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
        if style == "parens":
            return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
        return f"+1 {digits[:3]} {digits[3:6]} {digits[6:]}"
