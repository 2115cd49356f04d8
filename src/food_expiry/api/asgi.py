"""ASGI entrypoint for the food expiry tracker."""

from food_expiry.api.app import create_app
from food_expiry.containers import build_container

app = create_app(build_container())
