"""Normalization of host tool-output envelopes into canonical meal data."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from nutrition_macros.domain.meals import Meal, MealData

_logger = logging.getLogger(__name__)

Extractor = Callable[[Mapping[str, Any]], Mapping[str, Any] | None]


class EnvelopePath(str, Enum):
    """Location inside the envelope that carried the meal data."""

    RESULT_STRUCTURED_CONTENT = "result.structuredContent"
    STRUCTURED_CONTENT = "structuredContent"
    RESULT = "result"
    TOP_LEVEL = "top_level"


@dataclass(frozen=True)
class NormalizedEnvelope:
    """Meal data and error extracted from a single envelope."""

    meal_data: MealData | None
    error: str | None
    source: EnvelopePath | None = None
    candidate: Mapping[str, Any] | None = None

    @property
    def logged_meals(self) -> list[Meal]:
        """Derived meals, empty when absent."""
        if self.meal_data is None or self.meal_data.logged_meals is None:
            return []
        return self.meal_data.logged_meals


def _as_mapping(value: object) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def _from_result_structured_content(
    envelope: Mapping[str, Any],
) -> Mapping[str, Any] | None:
    result = _as_mapping(envelope.get("result"))
    if result is None:
        return None
    return _as_mapping(result.get("structuredContent"))


def _from_structured_content(envelope: Mapping[str, Any]) -> Mapping[str, Any] | None:
    return _as_mapping(envelope.get("structuredContent"))


def _from_result(envelope: Mapping[str, Any]) -> Mapping[str, Any] | None:
    return _as_mapping(envelope.get("result"))


def _from_top_level(envelope: Mapping[str, Any]) -> Mapping[str, Any] | None:
    if "loggedMeals" in envelope or "dailyTotals" in envelope:
        return envelope
    return None


_EXTRACTORS: tuple[tuple[EnvelopePath, Extractor], ...] = (
    (EnvelopePath.RESULT_STRUCTURED_CONTENT, _from_result_structured_content),
    (EnvelopePath.STRUCTURED_CONTENT, _from_structured_content),
    (EnvelopePath.RESULT, _from_result),
    (EnvelopePath.TOP_LEVEL, _from_top_level),
)


def find_meal_payload(
    envelope: object,
) -> tuple[EnvelopePath, Mapping[str, Any]] | None:
    """Return the first envelope location holding a meal data mapping."""
    if not isinstance(envelope, Mapping):
        return None
    for path, extractor in _EXTRACTORS:
        candidate = extractor(envelope)
        if candidate is not None:
            return path, candidate
    return None


def normalize_envelope(envelope: object) -> NormalizedEnvelope:
    """Extract canonical meal data and an error string from an envelope.

    Never raises: unknown shapes produce ``meal_data=None`` and malformed
    fields inside a recognized shape degrade to their defaults.
    The error is taken from the meal data first, then the envelope itself.
    """
    match = find_meal_payload(envelope)
    if match is None:
        return NormalizedEnvelope(meal_data=None, error=_error_from(envelope))

    source, candidate = match
    _logger.debug("Meal data found at %s", source.value)
    meal_data = MealData.model_validate(dict(candidate))

    error = (
        meal_data.error
        or _error_from(candidate)
        or _error_from(envelope)
    )
    return NormalizedEnvelope(
        meal_data=meal_data, error=error, source=source, candidate=candidate
    )


def _error_from(value: object) -> str | None:
    """Return a non-empty ``error`` string from a mapping."""
    if not isinstance(value, Mapping):
        return None
    error = value.get("error")
    if isinstance(error, str) and error:
        return error
    return None
