"""Services module for pomoterm - state machine, tasks, statistics and I/O."""

from .config_service import ConfigService, get_config_service
from .persistence import PersistenceGateway
from .session_engine import SessionEngine
from .sinks import AudioSink, NotificationSink
from .stats_recorder import StatsRecorder
from .task_store import TaskStore

__all__ = [
    "AudioSink",
    "ConfigService",
    "NotificationSink",
    "PersistenceGateway",
    "SessionEngine",
    "StatsRecorder",
    "TaskStore",
    "get_config_service",
]
