"""ASGI entrypoint for the metabolic impact API."""

from metabolic_impact.api.app import create_app
from metabolic_impact.containers import build_container

app = create_app(build_container())
