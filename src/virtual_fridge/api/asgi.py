"""ASGI entrypoint for the virtual fridge API."""

from virtual_fridge.api.app import create_app
from virtual_fridge.containers import build_container

app = create_app(build_container())
