"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Body, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from nutrition_macros.api.mcp_server import build_mcp_server
from nutrition_macros.api.widget_page import render_fragment, render_page
from nutrition_macros.app_logging import configure_logging
from nutrition_macros.containers import AppContainer
from nutrition_macros.services.presenter import expanded_from_indices
from nutrition_macros.services.rendering import render_envelope

WIDGET_PATH = "/nmacros"
RENDER_PATH = "/nmacros/render"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    mcp_app = build_mcp_server(container).http_app(path="/mcp")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with mcp_app.lifespan(app):
            logger.info(
                "MCP server ready (live analysis %s)",
                "enabled" if container.analysis_service.live_enabled else "disabled",
            )
            yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get(WIDGET_PATH, response_class=HTMLResponse)
    async def widget_page(request: Request) -> HTMLResponse:
        """Widget page shell; shows the loading state until output arrives."""
        state_container: AppContainer = request.app.state.container
        render_url = f"{state_container.widget.widget_domain}{RENDER_PATH}"
        fragment = render_fragment(render_envelope(None))
        return HTMLResponse(render_page(render_url, fragment))

    @app.post(RENDER_PATH, response_class=HTMLResponse)
    async def render_widget(
        envelope: Annotated[Any, Body()] = None,
        expanded: Annotated[list[int] | None, Query()] = None,
    ) -> HTMLResponse:
        """Render the widget markup for one tool-output envelope."""
        render = render_envelope(envelope, expanded_from_indices(expanded))
        logger.debug("Rendered widget state=%s", render.state.value)
        return HTMLResponse(render_fragment(render))

    app.mount("/", mcp_app)
    return app
