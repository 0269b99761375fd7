# src/day_schedule/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..schedule.scheduler import TaskUpdates
from ..schedule.task_factory import TaskValidationError, parse_priority, parse_time_to_minutes
from ..schedule.task_models import Task

CommandEmitter = Callable[[str], None]
CommandAsker = Callable[[str], Awaitable[str]]
CommandHandler = Callable[[AppState, list[str], CommandAsker, CommandEmitter], Awaitable[str]]

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = 'Unknown command. Type "help" for menu.'


class CommandRegistry:
    """
    Line command registry used by the console connector (add, view:high, ...).

    "name:a:b" is routed to handler "name" with args ["a", "b"]; a bare "name" gets [].
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._takes_args: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        takes_args: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        names = [key, *(a.lower() for a in aliases)]
        for alias in names[1:]:
            self._handlers[alias] = handler
        if takes_args:
            self._takes_args.update(names)

    def describe(self, usage: str, help_text: str) -> None:
        """Add a help line for a command form that has no handler key of its own."""
        self._help[usage] = help_text

    async def handle(
        self,
        state: AppState,
        line: str,
        ask: CommandAsker,
        emit: CommandEmitter,
    ) -> str:
        """Run one command line and return the text to show."""
        line = line.strip()
        if not line:
            return self.build_help()

        name, sep, rest = line.partition(":")
        args = rest.split(":") if sep else []

        key = name.strip().lower()
        handler = self._handlers.get(key)
        if not handler:
            return UNKNOWN_COMMAND
        # "add:foo" is not a command form; only handlers registered with takes_args see args.
        if args and key not in self._takes_args:
            return UNKNOWN_COMMAND

        return await handler(state, args, ask, emit)

    def build_help(self) -> str:
        lines = ["", "--- Daily Schedule ---", "Commands:"]
        width = max((len(k) for k in self._help), default=0) + 2
        for usage, help_text in self._help.items():
            lines.append(f"  {usage.ljust(width)}-> {help_text}")
        lines.append("  exit".ljust(width + 2) + "-> Exit app")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_line(t: Task) -> str:
    return f"{t.id} | {t.to_display_string()}"


async def cmd_help(state: AppState, args: list[str], ask: CommandAsker, emit: CommandEmitter) -> str:
    return registry.build_help()


async def cmd_add(state: AppState, args: list[str], ask: CommandAsker, emit: CommandEmitter) -> str:
    title = await ask("Title: ")
    description = await ask("Description (optional): ")
    start = await ask("Start (HH:mm): ")
    end = await ask("End (HH:mm): ")
    priority = await ask("Priority (Low/Medium/High): ")

    try:
        task = state.factory.create(title, start, end, priority, description)
    except TaskValidationError as e:
        logger.error("Add failed: %s", e)
        return f"Error: {e}"

    res = await state.scheduler.add_task(task)
    if res.success:
        return "Task added successfully. No conflicts."
    return f"Error: {res.message}"


async def cmd_view(state: AppState, args: list[str], ask: CommandAsker, emit: CommandEmitter) -> str:
    """
    view          -> all tasks, sorted
    view:<prio>   -> tasks with that priority
    """
    if not args:
        tasks = state.scheduler.list_tasks()
        if not tasks:
            return "No tasks scheduled for the day."
        lines = ["", "Scheduled tasks:"]
        for t in tasks:
            lines.append(_task_line(t))
            if t.description:
                lines.append(f"    -> {t.description}")
        return "\n".join(lines)

    if len(args) != 1:
        return "Usage: view:<priority>"

    prio = args[0].strip()
    filtered = state.scheduler.list_tasks_by_priority(prio)
    if not filtered:
        return f"No tasks with priority {prio}."
    return "\n".join(_task_line(t) for t in filtered)


async def cmd_remove(state: AppState, args: list[str], ask: CommandAsker, emit: CommandEmitter) -> str:
    q = await ask("Enter task id or exact title to remove: ")

    by_id = state.scheduler.find_task_by_id(q)
    if by_id is not None:
        return (await state.scheduler.remove_task_by_id(by_id.id)).message

    matches = state.scheduler.find_tasks_by_title(q)
    if not matches:
        return "Error: Task not found."
    if len(matches) == 1:
        return (await state.scheduler.remove_task_by_id(matches[0].id)).message

    emit("Multiple tasks match that title:")
    for i, m in enumerate(matches, start=1):
        emit(f"{i}) {_task_line(m)}")

    sel = await ask("Enter number of task to remove: ")
    try:
        idx = int(sel) - 1
    except ValueError:
        return "Invalid selection."
    if not 0 <= idx < len(matches):
        return "Invalid selection."
    return (await state.scheduler.remove_task_by_id(matches[idx].id)).message


async def cmd_edit(state: AppState, args: list[str], ask: CommandAsker, emit: CommandEmitter) -> str:
    task_id = await ask("Enter task id to edit: ")
    task = state.scheduler.find_task_by_id(task_id)
    if task is None:
        return "Task not found."

    emit(f"Editing {task.to_display_string()}")
    title = await ask(f"Title [{task.title}]: ")
    description = await ask(f"Description [{task.description or ''}]: ")
    start = await ask(f"Start (HH:mm) [{task.start_hhmm}]: ")
    end = await ask(f"End (HH:mm) [{task.end_hhmm}]: ")
    priority = await ask(f"Priority (Low/Medium/High) [{task.priority.value}]: ")

    # Blank answers keep the current value.
    try:
        updates = TaskUpdates(
            title=title or None,
            description=description or None,
            start_minutes=parse_time_to_minutes(start) if start else None,
            end_minutes=parse_time_to_minutes(end) if end else None,
            priority=parse_priority(priority) if priority else None,
        )
    except TaskValidationError as e:
        return f"Error: {e}"

    return (await state.scheduler.edit_task(task_id, updates)).message


async def cmd_complete(state: AppState, args: list[str], ask: CommandAsker, emit: CommandEmitter) -> str:
    task_id = await ask("Enter task id to mark completed: ")
    return (await state.scheduler.mark_completed(task_id)).message


registry.register("add", cmd_add, help_text="Add a task")
registry.register("remove", cmd_remove, help_text="Remove a task (by id or title)")
registry.register("view", cmd_view, help_text="View all tasks (sorted)", takes_args=True)
registry.describe("view:<prio>", "View tasks by priority (Low/Medium/High)")
registry.register("edit", cmd_edit, help_text="Edit a task (by id)")
registry.register("complete", cmd_complete, help_text="Mark task as completed (by id)")
registry.register("help", cmd_help, help_text="Show this menu", aliases=["h", "?"])
