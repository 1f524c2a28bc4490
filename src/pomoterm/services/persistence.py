"""Persistence gateway - loads and saves snapshots.

Settings go to config.json, tasks, statistics and the session to
state.json. Both are pretty-printed JSON written via temp file + rename.
Timestamps keep their microseconds, so nothing is rounded.
"""

from __future__ import annotations

from pydantic import ValidationError

from pomoterm.core.exceptions import PersistenceFailure
from pomoterm.models.snapshot import Snapshot, StateFile
from pomoterm.services.config_service import ConfigService
from pomoterm.utils.atomic import atomic_write_text
from pomoterm.utils.logger import get_logger


class PersistenceGateway:
    """Reads and writes the on-disk snapshot."""

    def __init__(self, config_service: ConfigService):
        self.config_service = config_service
        self.state_path = config_service.state_path
        self.logger = get_logger()

    def load(self) -> Snapshot:
        """Load config and state; missing files fall back to defaults.

        Raises:
            PersistenceFailure: If a file is unreadable or corrupt. The
                exception's ``fallback`` holds whatever could be loaded,
                with defaults for the rest.
        """
        errors: list[str] = []
        try:
            config = self.config_service.load_config()
        except PersistenceFailure as e:
            errors.append(str(e))
            config = Snapshot().config

        try:
            state = self._load_state()
        except PersistenceFailure as e:
            errors.append(str(e))
            state = StateFile()

        snapshot = Snapshot(config=config, state=state)
        if errors:
            self.logger.warning("load fell back to defaults: %s", "; ".join(errors))
            raise PersistenceFailure("; ".join(errors), fallback=snapshot)
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        """Write the snapshot.

        Raises:
            PersistenceFailure: If either file cannot be written
        """
        self.config_service.save_config(snapshot.config)
        try:
            atomic_write_text(self.state_path, snapshot.state.model_dump_json(indent=2))
        except OSError as e:
            raise PersistenceFailure(f"Failed to save state: {e}") from e
        self.logger.debug("snapshot saved to %s", self.state_path)

    def _load_state(self) -> StateFile:
        try:
            with open(self.state_path, encoding="utf-8") as f:
                return StateFile.model_validate_json(f.read())
        except FileNotFoundError:
            return StateFile()
        except (OSError, ValidationError) as e:
            raise PersistenceFailure(f"Failed to load state: {e}") from e
