"""Widget render state derivation."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from nutrition_macros.services.envelope import NormalizedEnvelope, normalize_envelope
from nutrition_macros.services.presenter import MealDataView, present_meal_data


class RenderState(str, Enum):
    """Exactly one of these is shown per envelope."""

    ERROR = "error"
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"


def is_awaiting_analysis(
    envelope: Mapping[str, Any], normalized: NormalizedEnvelope
) -> bool:
    """Whether the producer accepted the request but has not analyzed it yet.

    There is no explicit pending status in the envelope, so this relies on a
    ``foodDescription`` being present while no meals have been produced.
    """
    if normalized.logged_meals:
        return False
    has_description = envelope.get("foodDescription") is not None or (
        normalized.candidate is not None
        and normalized.candidate.get("foodDescription") is not None
    )
    top_level_meals = envelope.get("loggedMeals")
    has_top_level_meals = isinstance(top_level_meals, list) and bool(top_level_meals)
    return has_description and not has_top_level_meals


def derive_render_state(
    envelope: object, normalized: NormalizedEnvelope | None = None
) -> RenderState:
    """Map an envelope to its render state, in priority order."""
    if normalized is None:
        normalized = normalize_envelope(envelope)
    if normalized.error:
        return RenderState.ERROR
    if envelope is None:
        return RenderState.LOADING
    if isinstance(envelope, Mapping) and is_awaiting_analysis(envelope, normalized):
        return RenderState.LOADING
    if not normalized.logged_meals:
        return RenderState.EMPTY
    return RenderState.READY


@dataclass(frozen=True)
class WidgetRender:
    """Everything the widget page needs for one envelope."""

    state: RenderState
    normalized: NormalizedEnvelope
    view: MealDataView | None = None

    @property
    def error(self) -> str | None:
        """Error message shown in the error state."""
        return self.normalized.error


def render_envelope(
    envelope: object, expanded: Mapping[int, bool] | None = None
) -> WidgetRender:
    """Normalize an envelope, derive its state and present it when ready."""
    normalized = normalize_envelope(envelope)
    state = derive_render_state(envelope, normalized)
    view = None
    if state is RenderState.READY and normalized.meal_data is not None:
        view = present_meal_data(normalized.meal_data, expanded)
    return WidgetRender(state=state, normalized=normalized, view=view)
