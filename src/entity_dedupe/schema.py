from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Sequence

from entity_dedupe.errors import ConfigurationError


class Comparison(StrEnum):
    EXACT_NORMALIZED = "exact_normalized"
    FUZZY = "fuzzy"
    SET_OVERLAP = "set_overlap"


class Normalizer(StrEnum):
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"


@dataclass(frozen=True)
class FieldSpec:
    """One comparable attribute of an entity type."""

    name: str
    comparison: Comparison
    weight: float
    normalizer: Normalizer = Normalizer.TEXT
    label: str = ""
    plural: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError("field name must be a non-empty string")
        object.__setattr__(self, "comparison", _coerce(Comparison, self.comparison, self.name))
        object.__setattr__(self, "normalizer", _coerce(Normalizer, self.normalizer, self.name))

        if isinstance(self.weight, bool) or not isinstance(self.weight, (int, float)):
            raise ConfigurationError(f"field {self.name!r}: weight must be a number")
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ConfigurationError(f"field {self.name!r}: weight must be finite and non-negative")
        object.__setattr__(self, "weight", float(self.weight))

        label = self.label or self.name.replace("_", " ")
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "plural", self.plural or f"{label}s")


@dataclass(frozen=True)
class EntityProfile:
    """Weight table, identity sets and thresholds for one entity type."""

    name: str
    fields: tuple[FieldSpec, ...]
    identity_sets: tuple[tuple[str, ...], ...] = ()
    threshold: float = 0.4
    exact_threshold: float | None = None
    _by_name: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        fields = tuple(self.fields)
        if not fields:
            raise ConfigurationError(f"profile {self.name!r}: at least one field is required")
        for spec in fields:
            if not isinstance(spec, FieldSpec):
                raise ConfigurationError(f"profile {self.name!r}: fields must be FieldSpec instances")

        by_name: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in by_name:
                raise ConfigurationError(f"profile {self.name!r}: duplicate field {spec.name!r}")
            by_name[spec.name] = spec

        identity_sets = tuple(tuple(names) for names in self.identity_sets)
        for names in identity_sets:
            if not names:
                raise ConfigurationError(f"profile {self.name!r}: identity sets cannot be empty")
            unknown = [name for name in names if name not in by_name]
            if unknown:
                raise ConfigurationError(
                    f"profile {self.name!r}: identity set references unknown fields {unknown}"
                )

        check_threshold(self.threshold, "threshold")
        if self.exact_threshold is not None:
            check_threshold(self.exact_threshold, "exact_threshold", allow_infinite=True)
            if self.exact_threshold < self.threshold:
                raise ConfigurationError(
                    f"profile {self.name!r}: exact_threshold must not be below threshold"
                )

        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "identity_sets", identity_sets)
        object.__setattr__(self, "_by_name", by_name)

    @classmethod
    def from_fields(
        cls,
        name: str,
        fields: Sequence[FieldSpec],
        identity_sets: Sequence[Sequence[str]] = (),
        threshold: float = 0.4,
        exact_threshold: float | None = None,
    ) -> "EntityProfile":
        return cls(
            name=name,
            fields=tuple(fields),
            identity_sets=tuple(tuple(names) for names in identity_sets),
            threshold=threshold,
            exact_threshold=exact_threshold,
        )

    @property
    def max_score(self) -> float:
        return sum(spec.weight for spec in self.fields)

    def get_field(self, name: str) -> FieldSpec:
        try:
            return self._by_name[name]
        except KeyError:
            raise ConfigurationError(f"profile {self.name!r} has no field {name!r}") from None

    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)


def check_threshold(value: object, name: str, allow_infinite: bool = False) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number")
    if math.isnan(value) or value < 0 or (math.isinf(value) and not allow_infinite):
        raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}")
    return float(value)


def _coerce(kind: type[StrEnum], value: object, field_name: str):
    try:
        return kind(value)
    except ValueError:
        raise ConfigurationError(
            f"field {field_name!r}: unknown {kind.__name__.lower()} {value!r}"
        ) from None
