"""Command palette - named workspace commands and their key bindings"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .layout import CycleDirection, Direction
from .panes import count_panes
from .telemetry import get_logger

if TYPE_CHECKING:
    from .lifecycle import TabCoordinator

logger = get_logger(__name__)


class CommandCategory(str, Enum):
    TABS = "tabs"
    PANES = "panes"
    GROUPS = "groups"
    NAVIGATION = "navigation"
    SETTINGS = "settings"


@dataclass(frozen=True)
class Shortcut:
    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False

    def matches(self, key: str, ctrl: bool = False, shift: bool = False, alt: bool = False) -> bool:
        return (
            self.key.lower() == key.lower()
            and self.ctrl == ctrl
            and self.shift == shift
            and self.alt == alt
        )


def format_shortcut(shortcut: Shortcut | None) -> str:
    """Render a shortcut as ``Ctrl+Shift+D``; empty for None."""
    if shortcut is None:
        return ""
    parts = []
    if shortcut.ctrl:
        parts.append("Ctrl")
    if shortcut.shift:
        parts.append("Shift")
    if shortcut.alt:
        parts.append("Alt")
    parts.append(shortcut.key)
    return "+".join(parts)


@dataclass(frozen=True)
class Command:
    """Palette entry

    Attributes:
        id: stable command id (camelCase)
        title: display label
        category: palette section
        handler: called with the keyword arguments given to ``run``
        shortcut: key binding, if any
        enabled: predicate; None means always enabled
    """

    id: str
    title: str
    category: CommandCategory
    handler: Callable[..., Any]
    shortcut: Shortcut | None = None
    enabled: Callable[[], bool] | None = None

    def is_enabled(self) -> bool:
        return self.enabled is None or bool(self.enabled())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "shortcut": format_shortcut(self.shortcut),
            "enabled": self.is_enabled(),
        }


class CommandPalette:
    """Registry of commands, in registration order."""

    def __init__(self):
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        if command.id in self._commands:
            logger.warning(f"[Palette] Replacing command {command.id}")
        self._commands[command.id] = command

    def get(self, command_id: str) -> Command | None:
        return self._commands.get(command_id)

    def commands(self) -> list[Command]:
        return list(self._commands.values())

    def available(self) -> list[Command]:
        """Commands whose enabled predicate currently holds."""
        return [command for command in self._commands.values() if command.is_enabled()]

    def run(self, command_id: str, **kwargs) -> bool:
        """Run a command by id.

        Returns:
            False for unknown or disabled commands
        """
        command = self._commands.get(command_id)
        if command is None:
            logger.debug(f"[Palette] Unknown command {command_id}")
            return False
        if not command.is_enabled():
            logger.debug(f"[Palette] Command {command_id} disabled")
            return False
        logger.debug(f"[Palette] Run {command_id}")
        command.handler(**kwargs)
        return True

    def match_shortcut(
        self, key: str, ctrl: bool = False, shift: bool = False, alt: bool = False
    ) -> Command | None:
        for command in self._commands.values():
            if command.shortcut and command.shortcut.matches(key, ctrl, shift, alt):
                return command
        return None


def build_commands(coordinator: "TabCoordinator") -> CommandPalette:
    """Default palette wired to a coordinator."""
    workspace = coordinator.workspace

    def has_active_tab() -> bool:
        return coordinator.active_tab is not None

    def has_pane_tab() -> bool:
        tab = coordinator.active_tab
        return tab is not None and tab.type.has_panes

    def has_multiple_panes() -> bool:
        tab = coordinator.active_tab
        return tab is not None and tab.type.has_panes and count_panes(tab.pane_tree) > 1

    def has_multiple_tabs() -> bool:
        return len(workspace.state.focused_group.tabs) > 1

    def has_multiple_groups() -> bool:
        return len(workspace.state.group_ids) > 1

    def close_tab() -> None:
        coordinator.close_tab(coordinator.active_tab_id)

    def rename_tab(title: str) -> None:
        workspace.rename_tab(coordinator.active_tab_id, title)

    def split_pane(direction: str = Direction.VERTICAL.value) -> None:
        coordinator.split_pane(direction)

    def close_pane() -> None:
        coordinator.close_pane_by_id(coordinator.active_tab.focused_pane_id)

    def split_group(direction: str = Direction.HORIZONTAL.value) -> None:
        workspace.split_focused_group(direction)

    def close_group() -> None:
        coordinator.close_group(workspace.focused_group_id)

    palette = CommandPalette()
    for command in (
        # Tabs
        Command(
            "newLocalTab", "New Local Terminal", CommandCategory.TABS,
            coordinator.create_local_tab, Shortcut("N", ctrl=True),
        ),
        Command(
            "closeTab", "Close Tab", CommandCategory.TABS,
            close_tab, Shortcut("W", ctrl=True), has_active_tab,
        ),
        Command("renameTab", "Rename Tab", CommandCategory.TABS, rename_tab, None, has_active_tab),
        # Panes
        Command(
            "splitPane", "Split Pane", CommandCategory.PANES,
            split_pane, Shortcut("D", ctrl=True, shift=True), has_pane_tab,
        ),
        Command("closePane", "Close Pane", CommandCategory.PANES, close_pane, None, has_pane_tab),
        Command(
            "focusNextPane", "Focus Next Pane", CommandCategory.PANES,
            lambda: coordinator.cycle_focused_pane(CycleDirection.NEXT),
            Shortcut("Tab", ctrl=True), has_multiple_panes,
        ),
        Command(
            "focusPrevPane", "Focus Previous Pane", CommandCategory.PANES,
            lambda: coordinator.cycle_focused_pane(CycleDirection.PREV),
            Shortcut("Tab", ctrl=True, shift=True), has_multiple_panes,
        ),
        # Navigation
        Command(
            "nextTab", "Next Tab", CommandCategory.NAVIGATION,
            lambda: workspace.cycle_focused_group_tab(CycleDirection.NEXT),
            Shortcut("Tab", ctrl=True, alt=True), has_multiple_tabs,
        ),
        Command(
            "prevTab", "Previous Tab", CommandCategory.NAVIGATION,
            lambda: workspace.cycle_focused_group_tab(CycleDirection.PREV),
            Shortcut("Tab", ctrl=True, alt=True, shift=True), has_multiple_tabs,
        ),
        # Groups
        Command("splitGroup", "Split Group", CommandCategory.GROUPS, split_group),
        Command(
            "focusNextGroup", "Focus Next Group", CommandCategory.GROUPS,
            lambda: workspace.cycle_focused_pane_group(CycleDirection.NEXT),
            None, has_multiple_groups,
        ),
        Command(
            "focusPrevGroup", "Focus Previous Group", CommandCategory.GROUPS,
            lambda: workspace.cycle_focused_pane_group(CycleDirection.PREV),
            None, has_multiple_groups,
        ),
        Command("closeGroup", "Close Group", CommandCategory.GROUPS, close_group),
        # Settings
        Command(
            "openSettings", "Open Settings", CommandCategory.SETTINGS,
            coordinator.open_settings, Shortcut(",", ctrl=True),
        ),
    ):
        palette.register(command)
    return palette
