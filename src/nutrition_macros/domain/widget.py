"""Host widget descriptor and rendering directives."""

from dataclasses import dataclass

WIDGET_MIME_TYPE = "text/html+skybridge"


@dataclass(frozen=True)
class ContentWidget:
    """Describes a tool whose result the host renders in a widget."""

    id: str
    title: str
    template_uri: str
    invoking: str
    invoked: str
    description: str
    widget_domain: str


def macros_widget(widget_domain: str) -> ContentWidget:
    """Return the descriptor for the food macros widget."""
    return ContentWidget(
        id="analyze_food",
        title="Analyze Food Macros",
        template_uri="ui://widget/macros-template.html",
        invoking="Analyzing food nutrition...",
        invoked="Food analysis complete",
        description=(
            "Analyzes food descriptions and displays nutritional information "
            "in meal cards"
        ),
        widget_domain=widget_domain,
    )


def widget_meta(widget: ContentWidget) -> dict[str, object]:
    """Directives attached to every tool definition and tool response."""
    return {
        "openai/outputTemplate": widget.template_uri,
        "openai/toolInvocation/invoking": widget.invoking,
        "openai/toolInvocation/invoked": widget.invoked,
        "openai/widgetAccessible": False,
        "openai/resultCanProduceWidget": True,
    }


def resource_meta(widget: ContentWidget) -> dict[str, object]:
    """Directives attached to the widget HTML resource."""
    return {
        "openai/widgetDescription": widget.description,
        "openai/widgetPrefersBorder": True,
        "openai/widgetDomain": widget.widget_domain,
    }
