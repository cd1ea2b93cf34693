"""Models for the food analysis tool."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class AnalysisError(Exception):
    """Base error for failures inside an analysis strategy."""


class CredentialMissingError(AnalysisError):
    """Raised when live analysis is needed but no credential is configured."""


class UpstreamCallError(AnalysisError):
    """Raised when the inference service call fails or returns garbage."""


class AnalysisValidationError(AnalysisError):
    """Raised when the inference response lacks required fields."""


class AnalyzedData(BaseModel):
    """Caller-supplied analysis; unknown keys are kept as sent."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    daily_totals: dict[str, Any] | None = Field(
        default=None,
        alias="dailyTotals",
        description="Calories, protein, carbs and fat for the whole description",
    )
    logged_meals: list[Any] | None = Field(
        default=None,
        alias="loggedMeals",
        description="Meals with meal_name, meal_size, ingredients, total_nutrients",
    )

    def to_payload(self) -> dict[str, Any]:
        """Dump back to the keys the caller sent."""
        return self.model_dump(by_alias=True, exclude_unset=True)


@dataclass(frozen=True)
class AnalysisRequest:
    """Tool input: a food description and optional pre-analyzed data."""

    food_description: str
    analyzed_data: dict[str, Any] | None = None


@dataclass(frozen=True)
class Passthrough:
    """Caller supplied complete analysis; copy it verbatim."""

    food_description: str
    payload: dict[str, Any]


@dataclass(frozen=True)
class Deferred:
    """No usable analysis and no live service; ask the caller to resubmit."""

    food_description: str


@dataclass(frozen=True)
class LiveService:
    """Analyze the description with the external inference service."""

    food_description: str


Strategy = Passthrough | Deferred | LiveService


class TextContent(BaseModel):
    """Human-readable content block of a tool response."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Uniform envelope returned by every analysis strategy."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    structured_content: dict[str, Any] = Field(alias="structuredContent")
    meta: dict[str, Any] = Field(alias="_meta")

    @property
    def error(self) -> str | None:
        """Error carried in the structured payload, if any."""
        value = self.structured_content.get("error")
        return value if isinstance(value, str) and value else None
