"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from typing import Any

import pytest

from nutrition_macros.adapters.widget_html_client import WidgetHtmlClient
from nutrition_macros.config import Settings
from nutrition_macros.containers import AppContainer
from nutrition_macros.domain.widget import ContentWidget, macros_widget
from nutrition_macros.services.analysis import AnalysisClient, AnalysisService
from nutrition_macros.services.widget_markup import WidgetMarkupService

BIG_MAC_MEAL_DATA: dict[str, Any] = {
    "dailyTotals": {"calories": 657, "protein": 30, "carbs": 62, "fat": 35},
    "loggedMeals": [
        {
            "meal_name": "Big Mac Meal",
            "meal_size": "Medium",
            "total_nutrients": {
                "calories": 657,
                "protein": 30,
                "carbs": 62,
                "fat": 35,
            },
            "ingredients": [
                {
                    "name": "Big Mac",
                    "brand": "McDonald's",
                    "serving_info": "1 burger (219g)",
                    "nutrients": {
                        "calories": 563,
                        "protein": 25.5,
                        "carbs": 44.4,
                        "fat": 32.6,
                    },
                },
                {
                    "name": "French Fries",
                    "brand": "McDonald's",
                    "serving_info": "1 medium (111g)",
                    "nutrients": {
                        "calories": 94,
                        "protein": 4.5,
                        "carbs": 17.6,
                        "fat": 2.4,
                    },
                },
            ],
        }
    ],
}

BLUEBERRIES_MEAL_DATA: dict[str, Any] = {
    "dailyTotals": {"calories": 56.5, "protein": 0.7, "carbs": 14.5, "fat": 0.3},
    "loggedMeals": [
        {
            "meal_name": "Blueberries",
            "meal_size": "100g",
            "total_nutrients": {
                "calories": 56.5,
                "protein": 0.7,
                "carbs": 14.5,
                "fat": 0.3,
            },
            "ingredients": [
                {
                    "name": "Blueberries",
                    "brand": "Generic",
                    "serving_info": "1 serving (100g)",
                    "nutrients": {
                        "calories": 56.5,
                        "protein": 0.7,
                        "carbs": 14.5,
                        "fat": 0.3,
                    },
                }
            ],
        }
    ],
}


def meal_data(template: dict[str, Any] = BIG_MAC_MEAL_DATA) -> dict[str, Any]:
    """Return a fresh copy of a sample payload."""
    return copy.deepcopy(template)


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake inference client returning a fixed payload."""

    payload: dict[str, Any] = field(default_factory=meal_data)
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def analyze(self, *, model: str, store: bool, prompt: str) -> dict[str, Any]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeWidgetHtmlClient(WidgetHtmlClient):
    """Fake markup client that records fetched paths."""

    html: str = "<body><main>widget</main></body>"
    calls: list[str] = field(default_factory=list)

    async def fetch_html(self, path: str) -> str:
        self.calls.append(path)
        return self.html


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key=None,
        base_url="https://macros.example.com",
        _env_file=None,
    )


@pytest.fixture
def widget(settings: Settings) -> ContentWidget:
    return macros_widget(settings.base_url)


@pytest.fixture
def analysis_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def deferred_service(widget: ContentWidget) -> AnalysisService:
    return AnalysisService(widget=widget, client=None, model="gpt-4.1-mini")


@pytest.fixture
def live_service(
    widget: ContentWidget, analysis_client: FakeAnalysisClient
) -> AnalysisService:
    return AnalysisService(widget=widget, client=analysis_client, model="gpt-4.1-mini")


@pytest.fixture
def html_client() -> FakeWidgetHtmlClient:
    return FakeWidgetHtmlClient()


@pytest.fixture
def container(
    settings: Settings,
    widget: ContentWidget,
    deferred_service: AnalysisService,
    html_client: FakeWidgetHtmlClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        widget=widget,
        analysis_service=deferred_service,
        widget_markup_service=WidgetMarkupService(client=html_client),
        close_resources=close_resources,
    )
