"""MCP server exposing the food analysis tool and its widget resource."""

import logging
from collections.abc import Sequence
from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from mcp import types as mt
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import TextContent
from pydantic import Field

from nutrition_macros.containers import AppContainer
from nutrition_macros.domain.analysis import (
    AnalysisRequest,
    AnalyzedData,
    ToolResponse,
)
from nutrition_macros.domain.widget import (
    WIDGET_MIME_TYPE,
    resource_meta,
    widget_meta,
)
from nutrition_macros.services.analysis import (
    ANALYSIS_INSTRUCTIONS,
    GENERIC_FAILURE_MESSAGE,
    AnalysisService,
)
from nutrition_macros.services.widget_markup import wrap_html

_logger = logging.getLogger(__name__)


async def run_analyze_food(
    service: AnalysisService,
    food_description: str,
    analyzed_data: dict[str, Any] | None = None,
) -> ToolResponse:
    """Run the analysis tool; nothing escapes as a protocol-level fault."""
    request = AnalysisRequest(
        food_description=food_description, analyzed_data=analyzed_data
    )
    try:
        return await service.analyze(request)
    except Exception:
        _logger.exception("Unexpected failure analyzing %r", food_description)
        return service.error_response(food_description, GENERIC_FAILURE_MESSAGE)


def to_tool_result(response: ToolResponse) -> ToolResult:
    """Convert an analysis envelope to a FastMCP tool result."""
    return ToolResult(
        content=[
            TextContent(type="text", text=block.text) for block in response.content
        ],
        structured_content=response.structured_content,
        meta=response.meta,
    )


class ResourceMetaMiddleware(Middleware):
    """Attach resource metadata to the contents returned by a read."""

    def __init__(self, meta_by_uri: dict[str, dict[str, Any]]) -> None:
        self.meta_by_uri = meta_by_uri

    async def on_read_resource(
        self,
        context: MiddlewareContext[mt.ReadResourceRequestParams],
        call_next: CallNext[
            mt.ReadResourceRequestParams, Sequence[ReadResourceContents]
        ],
    ) -> Sequence[ReadResourceContents]:
        contents = await call_next(context)
        meta = self.meta_by_uri.get(str(context.message.uri))
        if meta is None:
            return contents
        return [
            ReadResourceContents(
                content=item.content,
                mime_type=item.mime_type,
                meta={**meta, **(item.meta or {})},
            )
            for item in contents
        ]


def build_mcp_server(container: AppContainer) -> FastMCP:
    """Register the widget resource and the analyze_food tool."""
    widget = container.widget
    resource_metadata = ResourceMetaMiddleware(
        {widget.template_uri: resource_meta(widget)}
    )
    mcp = FastMCP("Nutrition Macros", middleware=[resource_metadata])

    @mcp.resource(
        widget.template_uri,
        name="macros-widget",
        title=widget.title,
        description=widget.description,
        mime_type=WIDGET_MIME_TYPE,
        meta=resource_meta(widget),
    )
    async def macros_widget_html() -> str:
        html = await container.widget_markup_service.get_html()
        return wrap_html(html)

    @mcp.tool(
        name=widget.id,
        title=widget.title,
        description=ANALYSIS_INSTRUCTIONS,
        meta=widget_meta(widget),
    )
    async def analyze_food(
        foodDescription: Annotated[  # noqa: N803
            str,
            Field(
                description=(
                    "The food description from the user (e.g., 'I had 100g of "
                    "blueberries', 'Big Mac meal', 'pizza and burger')"
                )
            ),
        ],
        analyzedData: Annotated[  # noqa: N803
            AnalyzedData | None,
            Field(
                description=(
                    "Nutrition analysis of the description with dailyTotals and "
                    "loggedMeals in the JSON structure above"
                )
            ),
        ] = None,
    ) -> ToolResult:
        analyzed = analyzedData.to_payload() if analyzedData is not None else None
        response = await run_analyze_food(
            container.analysis_service, foodDescription, analyzed
        )
        return to_tool_result(response)

    return mcp
