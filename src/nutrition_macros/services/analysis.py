"""Food analysis tool: strategy selection and response envelopes."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from nutrition_macros.domain.analysis import (
    AnalysisError,
    AnalysisRequest,
    AnalysisValidationError,
    CredentialMissingError,
    Deferred,
    LiveService,
    Passthrough,
    Strategy,
    TextContent,
    ToolResponse,
)
from nutrition_macros.domain.widget import ContentWidget, widget_meta

_logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("dailyTotals", "loggedMeals")

GENERIC_FAILURE_MESSAGE = "Failed to analyze food. Please try again."

ANALYSIS_INSTRUCTIONS = """You are a nutrition expert. When given a food description, analyze it using your knowledge and return a JSON object with nutritional information.

CRITICAL INSTRUCTIONS:
1. Use your built-in nutrition knowledge to analyze the food
2. Extract weight/portion information from the description (e.g., "100g", "medium", "large")
3. Calculate accurate nutritional values based on standard serving sizes
4. Return ONLY valid JSON in the exact structure specified below

RULES FOR MEAL GROUPING:
- If items are part of a COMBO/MEAL/DEAL or mentioned WITH each other: Create ONE meal with items as ingredients
- If items are separate (mentioned with "and" but not a combo): Create separate meals
- Always provide realistic nutritional values - never use zeros
- Calculate dailyTotals as the sum of all meals' nutrients

REQUIRED JSON STRUCTURE (return this exact format):
{
  "dailyTotals": {
    "calories": <number - sum of all meals>,
    "protein": <number in grams - sum of all meals>,
    "carbs": <number in grams - sum of all meals>,
    "fat": <number in grams - sum of all meals>
  },
  "loggedMeals": [
    {
      "meal_name": "<meal name>",
      "meal_size": "<size or weight from description, e.g., '100g', 'Medium', '6 pieces'>",
      "total_nutrients": {
        "calories": <number>,
        "protein": <number in grams>,
        "carbs": <number in grams>,
        "fat": <number in grams>
      },
      "ingredients": [
        {
          "name": "<ingredient name>",
          "brand": "<brand name or 'Generic'>",
          "serving_info": "<serving description, e.g., '1 serving (100g)'>",
          "nutrients": {
            "calories": <number>,
            "protein": <number in grams>,
            "carbs": <number in grams>,
            "fat": <number in grams>
          }
        }
      ]
    }
  ]
}

EXAMPLES:
- "100g blueberries" -> 1 meal with 57 calories, 1g protein, 14g carbs, 0g fat
- "Big Mac meal" -> 1 meal with ingredients: Big Mac, fries, drink
- "pizza and burger" -> 2 separate meals"""

DEFERRED_INSTRUCTION = (
    "Please analyze this food using your nutrition knowledge and call "
    "analyze_food again with analyzedData populated (dailyTotals and "
    "loggedMeals) in the JSON structure specified in the tool description."
)


class AnalysisClient(Protocol):
    """Interface for the external nutrition inference service."""

    async def analyze(self, *, model: str, store: bool, prompt: str) -> dict[str, Any]:
        """Return the parsed JSON object produced for the prompt."""


def has_complete_analysis(analyzed_data: dict[str, Any] | None) -> bool:
    """Whether the caller supplied totals and at least one meal."""
    if not isinstance(analyzed_data, dict):
        return False
    daily_totals = analyzed_data.get("dailyTotals")
    logged_meals = analyzed_data.get("loggedMeals")
    return (
        isinstance(daily_totals, dict)
        and isinstance(logged_meals, list)
        and bool(logged_meals)
    )


def select_strategy(request: AnalysisRequest, *, live_enabled: bool) -> Strategy:
    """Pick how to fulfil a request from the data available to it."""
    if request.analyzed_data is not None and has_complete_analysis(
        request.analyzed_data
    ):
        return Passthrough(
            food_description=request.food_description,
            payload=request.analyzed_data,
        )
    if live_enabled:
        return LiveService(food_description=request.food_description)
    return Deferred(food_description=request.food_description)


def build_analysis_prompt(food_description: str) -> str:
    """Embed a food description in the fixed instruction template."""
    return f"{ANALYSIS_INSTRUCTIONS}\n\nFood description: {food_description}"


@dataclass
class AnalysisService:
    """Runs the selected strategy and packages its result."""

    widget: ContentWidget
    client: AnalysisClient | None
    model: str
    store: bool = False

    @property
    def live_enabled(self) -> bool:
        return self.client is not None

    async def analyze(self, request: AnalysisRequest) -> ToolResponse:
        """Return an envelope for the request; strategy failures become errors."""
        strategy = select_strategy(request, live_enabled=self.live_enabled)
        _logger.info(
            "Food analysis strategy=%s description=%r",
            type(strategy).__name__,
            request.food_description,
        )
        try:
            response = await self.execute(strategy)
        except AnalysisError as exc:
            _logger.warning(
                "Food analysis failed (%s): %s", type(exc).__name__, exc
            )
            return self.error_response(request.food_description, str(exc))
        if response.error:
            _logger.info("Food analysis returned error: %s", response.error)
        return response

    async def execute(self, strategy: Strategy) -> ToolResponse:
        """Run one strategy; may raise an ``AnalysisError``."""
        if isinstance(strategy, Passthrough):
            return self.analyzed_response(strategy.food_description, strategy.payload)
        if isinstance(strategy, Deferred):
            return self.deferred_response(strategy.food_description)
        payload = await self._analyze_live(strategy.food_description)
        return self.analyzed_response(strategy.food_description, payload)

    async def _analyze_live(self, food_description: str) -> dict[str, Any]:
        if self.client is None:
            raise CredentialMissingError(
                "Live nutrition analysis is unavailable: no inference credential "
                "is configured."
            )
        payload = await self.client.analyze(
            model=self.model,
            store=self.store,
            prompt=build_analysis_prompt(food_description),
        )
        missing = [name for name in REQUIRED_FIELDS if name not in payload]
        if missing:
            _logger.warning("Analysis response missing fields: %s", ", ".join(missing))
            raise AnalysisValidationError(
                "Invalid response from nutrition analysis service"
            )
        return payload

    def analyzed_response(
        self, food_description: str, payload: dict[str, Any]
    ) -> ToolResponse:
        return self._envelope(f"Analyzed nutrition for: {food_description}", payload)

    def deferred_response(self, food_description: str) -> ToolResponse:
        return self._envelope(
            f"Food to analyze: {food_description}\n\n{DEFERRED_INSTRUCTION}",
            {"foodDescription": food_description, "error": DEFERRED_INSTRUCTION},
        )

    def error_response(self, food_description: str, message: str) -> ToolResponse:
        return self._envelope(
            f"Error processing food analysis request: {food_description}",
            {"foodDescription": food_description, "error": message},
        )

    def _envelope(self, text: str, structured: dict[str, Any]) -> ToolResponse:
        return ToolResponse(
            content=[TextContent(text=text)],
            structured_content=structured,
            meta=widget_meta(self.widget),
        )
