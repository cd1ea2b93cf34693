"""HTML for the macros widget page."""

import json
from html import escape
from string import Template

from nutrition_macros.services.presenter import MealDataView, MealView, NutrientFigures
from nutrition_macros.services.rendering import RenderState, WidgetRender

LOADING_MESSAGE = "Analyzing your food..."
EMPTY_MESSAGE = "No meal data available"


def render_fragment(render: WidgetRender) -> str:
    """Render the markup for a single render state."""
    if render.state is RenderState.ERROR:
        return (
            '<div class="notice notice-error" role="alert">'
            f"<p>{escape(render.error or '')}</p></div>"
        )
    if render.state is RenderState.LOADING:
        return f'<p class="status" aria-busy="true">{LOADING_MESSAGE}</p>'
    if render.state is RenderState.EMPTY or render.view is None:
        return f'<p class="status">{EMPTY_MESSAGE}</p>'
    return _render_ready(render.view)


def _render_ready(view: MealDataView) -> str:
    parts: list[str] = []
    if view.daily_totals is not None:
        parts.append(
            '<section class="daily-totals"><h3>Daily Totals</h3>'
            f"{_grid(view.daily_totals.totals_cells(), value_first=True)}</section>"
        )
    parts.append('<div class="meals">')
    parts.extend(_render_meal(meal) for meal in view.meals)
    parts.append("</div>")
    return "".join(parts)


def _render_meal(meal: MealView) -> str:
    size = f'<p class="meal-size">{escape(meal.size)}</p>' if meal.size else ""
    card = (
        f'<article class="meal-card" data-meal-index="{meal.index}">'
        f'<header><h3>{escape(meal.name)}</h3>{size}</header>'
        f"{_grid(meal.totals.meal_cells(), value_first=False)}"
    )
    if not meal.has_breakdown:
        return f"{card}</article>"
    lines = "".join(
        '<div class="ingredient">'
        f"<h5>{escape(item.heading)}</h5>{_values(item.nutrients)}</div>"
        for item in meal.ingredients
    )
    open_attr = " open" if meal.breakdown_open else ""
    return (
        f"{card}<details class=\"breakdown\"{open_attr}>"
        '<summary><span class="show-label">+ Show Breakdown</span>'
        '<span class="hide-label">- Hide Breakdown</span></summary>'
        f"{lines}</details></article>"
    )


def _grid(cells: list[tuple[str, str]], *, value_first: bool) -> str:
    items = []
    for label, value in cells:
        label_html = f'<div class="label">{label}</div>'
        value_html = f'<div class="value">{value}</div>'
        inner = value_html + label_html if value_first else label_html + value_html
        items.append(f'<div class="cell">{inner}</div>')
    return f'<div class="grid">{"".join(items)}</div>'


def _values(nutrients: NutrientFigures) -> str:
    cells = "".join(
        f'<div class="cell"><div class="value">{value}</div></div>'
        for value in nutrients.values()
    )
    return f'<div class="grid">{cells}</div>'


def render_page(render_url: str, fragment: str) -> str:
    """Full widget page; the script re-renders whenever the host pushes output."""
    return _PAGE_TEMPLATE.substitute(
        render_url=json.dumps(render_url), fragment=fragment
    )


_PAGE_TEMPLATE = Template("""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Food Macros</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0; }
      main { max-width: 56rem; margin: 0 auto; padding: 1rem; }
      .grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 0.75rem; }
      .cell { text-align: center; }
      .value { font-weight: 700; font-size: 1.25rem; }
      .label { color: #6b7280; font-size: 0.85rem; }
      .daily-totals { background: #f3f4f6; border-radius: 0.5rem; padding: 1rem; }
      .meal-card { border: 1px solid #e5e7eb; border-radius: 1rem; padding: 1rem; margin-top: 1rem; }
      .meal-size { color: #6b7280; margin: 0; }
      .notice-error { background: #fef2f2; color: #991b1b; border-radius: 0.5rem; padding: 0.75rem; }
      .status { color: #6b7280; text-align: center; }
      .breakdown summary { cursor: pointer; text-align: center; list-style: none; }
      .breakdown[open] .show-label, .breakdown:not([open]) .hide-label { display: none; }
    </style>
  </head>
  <body>
    <main id="macros-root">$fragment</main>
    <script>
      const RENDER_URL = $render_url;
      const root = document.getElementById('macros-root');

      async function renderOutput(output) {
        const res = await fetch(RENDER_URL, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(output === undefined ? null : output)
        });
        if (!res.ok) {
          return;
        }
        root.innerHTML = await res.text();
      }

      window.addEventListener('openai:set_globals', (event) => {
        const globals = event.detail && event.detail.globals;
        if (globals && 'toolOutput' in globals) {
          renderOutput(globals.toolOutput);
        }
      });
      if (window.openai && window.openai.toolOutput != null) {
        renderOutput(window.openai.toolOutput);
      }
    </script>
  </body>
</html>
""")
