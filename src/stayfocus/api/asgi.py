"""ASGI entrypoint for the StayFocus sleep API."""

from stayfocus.api.app import create_app
from stayfocus.containers import build_container

app = create_app(build_container())
