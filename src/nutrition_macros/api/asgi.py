"""ASGI entrypoint for the nutrition macros API."""

from nutrition_macros.api.app import create_app
from nutrition_macros.containers import build_container

app = create_app(build_container())
