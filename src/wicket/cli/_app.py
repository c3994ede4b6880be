"""Build the process-wide App from the environment and the shipped routes."""

import dataclasses

from wicket.app import App
from wicket.config import AppConfig
from wicket.routes import STATUS_ROUTES


def build_app(config: AppConfig | None = None, **overrides: object) -> App:
    """Create the App served by ``wicket run``.

    Configuration comes from ``WICKET_*`` variables unless *config* is
    given; non-None *overrides* replace individual fields.
    """
    config = config or AppConfig.from_env()
    changes = {name: value for name, value in overrides.items() if value is not None}
    if changes:
        config = dataclasses.replace(config, **changes)  # type: ignore[arg-type]
    return App(config, routes=STATUS_ROUTES)
