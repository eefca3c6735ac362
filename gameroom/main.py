"""ASGI entrypoint: ``uvicorn gameroom.main:app`` (uvicorn comes with the ``serve`` extra)."""

from gameroom.api.app import create_app

app = create_app()
