"""Full-screen rendering of the app state with rich."""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pomoterm.core.app import PomodoroApp
from pomoterm.models.session import Phase
from pomoterm.ui.input_router import SETTING_FIELDS, InputRouter

PHASE_COLORS = {
    Phase.IDLE: "white",
    Phase.WORK: "bright_red",
    Phase.SHORT_BREAK: "bright_green",
    Phase.LONG_BREAK: "bright_blue",
}

SETTING_LABELS = {
    "work_duration": "Pomodoro Duration",
    "short_break_duration": "Short Break",
    "long_break_duration": "Long Break",
    "long_break_interval": "Long Break Every",
    "theme": "Color Theme",
    "desktop_notifications": "Desktop Notifications",
    "sound": "Sound",
    "auto_cycle": "Auto-start Next Pomodoro",
}

FOOTERS = {
    "timer": "[Tab] Tasks  •  [o] Options  •  [Space] Start/Pause  •  [s] Skip  •  [r] Reset  •  [q] Quit",
    "tasks": "[Tab] Stats  •  [Space] Start  •  [j/k] Navigate  •  [J/K] Move  •  [n] New  •  [Enter] Complete  •  [d] Delete  •  [q] Quit",
    "statistics": "[Tab] Timer  •  [j/k] Navigate  •  [u] Reopen  •  [d] Delete  •  [q] Quit",
    "settings": "[j/k] Navigate  •  [h/l] Change  •  [Tab] Back",
    "editing": "[Enter] Submit  •  [Esc] Cancel",
}


def format_clock(seconds: float) -> str:
    """MM:SS, rounding partial seconds up so 00:00 only shows at the end."""
    whole = int(seconds) + (1 if seconds % 1 else 0)
    mins, secs = divmod(whole, 60)
    return f"{mins:02d}:{secs:02d}"


def format_duration(seconds: float) -> str:
    """Hours and minutes, e.g. ``2h 05m``."""
    minutes = int(seconds) // 60
    return f"{minutes // 60}h {minutes % 60:02d}m"


def progress_bar(fraction: float, width: int = 40) -> str:
    fraction = max(0.0, min(1.0, fraction))
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


class AppDisplay:
    """Builds one rich Layout per frame from the app and router state."""

    def __init__(self, router: InputRouter, console: Console | None = None):
        self.router = router
        self.console = console or Console()

    @property
    def app(self) -> PomodoroApp:
        return self.router.app

    def create_layout(self) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=4),
        )
        layout["header"].update(self._header())
        body = {
            "timer": self._timer_view,
            "tasks": self._tasks_view,
            "statistics": self._statistics_view,
            "settings": self._settings_view,
        }[self.app.view]()
        layout["body"].update(body)
        layout["footer"].update(self._footer())
        return layout

    def _header(self) -> RenderableType:
        title = {
            "timer": "🍅 pomoterm",
            "tasks": "✅ Tasks",
            "statistics": "📊 Statistics",
            "settings": "⚙ Settings",
        }[self.app.view]
        return Align.center(Text(title, style="bold cyan"), vertical="middle")

    def _footer(self) -> RenderableType:
        key = "editing" if self.router.editing else self.app.view
        lines = [Text(FOOTERS[key], style="dim", justify="center")]
        if self.app.messages:
            lines.append(Text(self.app.messages[-1], style="yellow", justify="center"))
        return Panel(Group(*lines), title="Controls", border_style="dim")

    def _timer_view(self) -> RenderableType:
        engine = self.app.engine
        phase = engine.phase
        color = PHASE_COLORS[phase]
        components: list[RenderableType] = []

        task = self.app.tasks.get(engine.bound_task_id) if engine.bound_task_id else None
        task_name = task.title if task else "No active task"
        components.append(Text(task_name, style=f"italic {color}", justify="center"))
        components.append(Text(""))

        components.append(
            Text(format_clock(engine.remaining), style=f"bold {color}", justify="center")
        )
        components.append(Text(""))

        if phase is Phase.IDLE:
            status, status_style = "■ Idle", "dim"
        elif engine.paused:
            status, status_style = "⏸ Paused", "yellow"
        else:
            status, status_style = "▶ Running", "green"
        components.append(Text(status, style=status_style, justify="center"))

        total = engine.duration_of(phase)
        fraction = (total - engine.remaining) / total if total else 0.0
        components.append(
            Text(f"{progress_bar(fraction)}  {int(fraction * 100)}%", style="dim", justify="center")
        )

        state = engine.state
        interval = self.app.config.timer.long_break_interval
        dots = " ".join(
            "●" if i < state.work_cycles_completed else "○" for i in range(interval)
        )
        components.append(Text(dots, style=color, justify="center"))
        components.append(
            Text(
                f"Total Sessions: {self.app.stats.total_sessions_completed}",
                style="dim",
                justify="center",
            )
        )

        panel = Panel(
            Align.center(Group(*components), vertical="middle"),
            title=phase.label,
            border_style=color if state.is_running else "dim",
        )
        return panel

    def _tasks_view(self) -> RenderableType:
        table = Table(expand=True, show_header=True, header_style="bold")
        table.add_column("", width=2)
        table.add_column("#", style="cyan", justify="right", width=4)
        table.add_column("Task")
        table.add_column("🍅", justify="right", width=4)
        table.add_column("Focused", justify="right", width=8)

        bound = self.app.engine.bound_task_id
        selected = self.router.selected_task_id()
        for task in self.app.tasks.active:
            marker = "▶" if task.id == bound else ""
            style = "reverse" if task.id == selected else ""
            table.add_row(
                marker,
                str(task.id),
                task.title,
                str(task.completed_pomodoros),
                format_duration(task.focused_seconds),
                style=style,
            )

        parts: list[RenderableType] = [Panel(table, title="Active Tasks")]
        if self.router.editing:
            parts.append(
                Panel(Text(self.router.buffer + "▏", style="yellow"), title="New Task")
            )
        return Group(*parts)

    def _statistics_view(self) -> RenderableType:
        stats = self.app.stats
        summary = Text(justify="center")
        summary.append(f"Total Pomodoros: {stats.total_sessions_completed}\n")
        summary.append(f"Total Time Focused: {format_duration(stats.total_focused_seconds)}")

        table = Table(expand=True, show_header=True, header_style="bold")
        table.add_column("Task")
        table.add_column("🍅", justify="right", width=4)
        table.add_column("Focused", justify="right", width=8)
        table.add_column("Completed", width=16)

        selected = self.router.selected_completed_id()
        for task in self.app.tasks.completed:
            table.add_row(
                task.title,
                str(task.completed_pomodoros),
                format_duration(task.focused_seconds),
                task.completed_at.astimezone().strftime("%Y-%m-%d %H:%M"),
                style="reverse" if task.id == selected else "",
            )

        return Group(
            Panel(summary, title="Summary"),
            Panel(table, title="Completed & Archived Tasks"),
        )

    def _settings_view(self) -> RenderableType:
        timer = self.app.config.timer
        table = Table(expand=True, show_header=False)
        table.add_column("Setting")
        table.add_column("Value", justify="center")
        for index, field in enumerate(SETTING_FIELDS):
            value = getattr(timer, field)
            if field.endswith("_duration"):
                shown = f"{value // 60} mins"
            elif isinstance(value, bool):
                shown = "On" if value else "Off"
            else:
                shown = str(value)
            style = "reverse bold" if index == self.router.selected_setting else ""
            table.add_row(SETTING_LABELS[field], f"< {shown} >", style=style)
        return Panel(table, title="Settings", border_style="cyan")
