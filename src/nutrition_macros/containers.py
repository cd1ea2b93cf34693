"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_macros.adapters.openai_analysis_client import OpenAIAnalysisClient
from nutrition_macros.adapters.widget_html_client import HttpxWidgetHtmlClient
from nutrition_macros.config import Settings, widget_domain
from nutrition_macros.domain.widget import ContentWidget, macros_widget
from nutrition_macros.services.analysis import AnalysisService
from nutrition_macros.services.widget_markup import WidgetMarkupService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    widget: ContentWidget
    analysis_service: AnalysisService
    widget_markup_service: WidgetMarkupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    base_url = widget_domain(resolved_settings.base_url)
    widget = macros_widget(base_url)

    openai_client = None
    if resolved_settings.live_analysis_enabled and resolved_settings.openai_api_key:
        openai_client = OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
    analysis_service = AnalysisService(
        widget=widget,
        client=openai_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    html_client = HttpxWidgetHtmlClient.create(base_url)
    widget_markup_service = WidgetMarkupService(client=html_client)

    async def close_resources() -> None:
        await html_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        widget=widget,
        analysis_service=analysis_service,
        widget_markup_service=widget_markup_service,
        close_resources=close_resources,
    )
