"""Shared helpers for one-shot commands."""

from pomoterm.core.app import PomodoroApp
from pomoterm.core.dispatcher import InlineDispatcher
from pomoterm.services.config_service import get_config_service
from pomoterm.services.persistence import PersistenceGateway


def get_gateway() -> PersistenceGateway:
    return PersistenceGateway(get_config_service())


def open_app() -> PomodoroApp:
    """Load saved state for a command that edits it and exits.

    Unlike the interactive timer, a corrupt file is an error here: it
    propagates as PersistenceFailure rather than being replaced by defaults.
    """
    gateway = get_gateway()
    snapshot = gateway.load()
    return PomodoroApp(snapshot, gateway=gateway, dispatcher=InlineDispatcher())


def save(app: PomodoroApp) -> None:
    """Write the app's state now, raising if the write fails."""
    app.gateway.save(app.snapshot())
