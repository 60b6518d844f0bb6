"""ASGI entrypoint for the donation board API."""

from donation_board.api.app import create_app
from donation_board.containers import build_container

app = create_app(build_container())
