"""Tests for widget render state derivation."""

from nutrition_macros.services.envelope import normalize_envelope
from nutrition_macros.services.rendering import (
    RenderState,
    derive_render_state,
    is_awaiting_analysis,
    render_envelope,
)
from tests.conftest import meal_data


def test_big_mac_envelope_is_ready() -> None:
    envelope = {"result": {"structuredContent": meal_data()}}

    render = render_envelope(envelope)

    assert render.state is RenderState.READY
    assert render.view is not None
    assert render.view.daily_totals is not None
    assert len(render.view.meals) == 1
    assert render.view.meals[0].totals.calories == 657


def test_error_wins_over_meals() -> None:
    data = meal_data()
    data["error"] = "rate limited"

    render = render_envelope({"structuredContent": data})

    assert render.state is RenderState.ERROR
    assert render.error == "rate limited"
    assert render.view is None


def test_envelope_level_error_wins_over_meals() -> None:
    envelope = {"loggedMeals": meal_data()["loggedMeals"], "error": "host failure"}

    assert derive_render_state(envelope) is RenderState.ERROR


def test_error_wins_over_loading_signal() -> None:
    envelope = {"foodDescription": "pizza", "error": "rate limited"}

    assert derive_render_state(envelope) is RenderState.ERROR


def test_missing_envelope_is_loading() -> None:
    assert derive_render_state(None) is RenderState.LOADING


def test_food_description_without_meals_is_loading() -> None:
    assert derive_render_state({"foodDescription": "pizza and burger"}) is (
        RenderState.LOADING
    )


def test_food_description_inside_structured_content_is_loading() -> None:
    envelope = {"structuredContent": {"foodDescription": "pizza and burger"}}

    assert derive_render_state(envelope) is RenderState.LOADING


def test_food_description_with_empty_meals_is_loading() -> None:
    envelope = {"foodDescription": "pizza", "structuredContent": {"loggedMeals": []}}

    assert derive_render_state(envelope) is RenderState.LOADING


def test_food_description_with_meals_is_ready() -> None:
    envelope = {"foodDescription": "Big Mac meal", "structuredContent": meal_data()}

    assert derive_render_state(envelope) is RenderState.READY


def test_awaiting_requires_no_top_level_meals() -> None:
    envelope = {
        "foodDescription": "pizza",
        "structuredContent": {"loggedMeals": []},
        "loggedMeals": meal_data()["loggedMeals"],
    }

    assert not is_awaiting_analysis(envelope, normalize_envelope(envelope))
    assert derive_render_state(envelope) is RenderState.EMPTY


def test_empty_meal_list_is_empty() -> None:
    assert derive_render_state({"loggedMeals": []}) is RenderState.EMPTY


def test_unrecognized_envelope_is_empty() -> None:
    assert derive_render_state({"unexpected": True}) is RenderState.EMPTY
    assert derive_render_state(["not", "a", "mapping"]) is RenderState.EMPTY


def test_totals_without_meals_is_empty() -> None:
    envelope = {"dailyTotals": {"calories": 1, "protein": 1, "carbs": 1, "fat": 1}}

    assert derive_render_state(envelope) is RenderState.EMPTY


def test_state_depends_only_on_current_envelope() -> None:
    ready = {"structuredContent": meal_data()}
    loading = {"foodDescription": "pizza"}
    empty = {"loggedMeals": []}

    states = [derive_render_state(envelope) for envelope in (ready, loading, empty)]

    assert states == [RenderState.READY, RenderState.LOADING, RenderState.EMPTY]
    assert derive_render_state(ready) is RenderState.READY


def test_render_envelope_applies_breakdown_toggles() -> None:
    render = render_envelope({"structuredContent": meal_data()}, {0: True})

    assert render.view is not None
    assert render.view.meals[0].breakdown_open


def test_ingredient_without_serving_info_is_ready() -> None:
    data = meal_data()
    del data["loggedMeals"][0]["ingredients"][0]["serving_info"]

    render = render_envelope({"result": {"structuredContent": data}})

    assert render.state is RenderState.READY
    assert render.view is not None
    assert render.view.meals[0].ingredients[0].heading == "Big Mac"


def test_daily_totals_without_fat_is_ready() -> None:
    data = meal_data()
    del data["dailyTotals"]["fat"]

    render = render_envelope({"structuredContent": data})

    assert render.state is RenderState.READY
    assert render.view is not None
    assert render.view.daily_totals is not None
    assert render.view.daily_totals.totals_cells()[3] == ("Fat", "-")


def test_top_level_meals_with_null_fat_are_ready() -> None:
    meals = meal_data()["loggedMeals"]
    meals[0]["ingredients"][1]["nutrients"]["fat"] = None

    render = render_envelope({"loggedMeals": meals})

    assert render.state is RenderState.READY
    assert render.view is not None
    fries = render.view.meals[0].ingredients[1]
    assert fries.nutrients.values() == ["94", "5", "18", "-"]
