"""ASGI entrypoint for the meal scorer API."""

from meal_scorer.api.app import create_app
from meal_scorer.containers import build_container

app = create_app(build_container())
