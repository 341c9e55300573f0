"""ASGI entrypoint for the meal planner API."""

from hranoplan.api.app import create_app
from hranoplan.containers import build_container

app = create_app(build_container())
