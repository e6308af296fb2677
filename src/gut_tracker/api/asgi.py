"""ASGI entrypoint for the gut tracker API."""

from gut_tracker.api.app import create_app
from gut_tracker.containers import build_container

app = create_app(build_container())
