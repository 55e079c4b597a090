"""Actions that edit and evaluate the command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from moded.keymaps import ResolutionMatch
from moded.modes.base_mode import ModeContext, ModeResult
from moded.modes.command_mode import command_text, set_command_text
from moded.modes.command_pipeline import CommandPipeline, CommandStep, SetCommand
from moded.runtime import telemetry
from moded.search import search_for

from .search import jump_to_next_match


@dataclass(slots=True)
class Evaluation:
    """Outcome accumulated while running the steps of one command line."""

    switch_to: str = "normal"
    status: str = "command_done"
    stop: bool = False


StepHandler = Callable[[ModeContext, CommandStep, Evaluation], None]
SetHandler = Callable[[ModeContext, str], None]

_PIPELINE = CommandPipeline()


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text = command_text(context)
    context.bus.emit("command.submit", text)
    try:
        with telemetry.span(
            "command::evaluate",
            logger_name="moded.commands",
            component="commands",
            metadata={"text": text},
        ):
            outcome = evaluate(context, text)
    finally:
        set_command_text(context, "")
    return ModeResult(
        consumed=True,
        switch_to=outcome.switch_to,
        status=outcome.status,
        message=text,
    )


def cancel_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    set_command_text(context, "")
    return ModeResult(consumed=True, switch_to="normal", message="command_cancel")


def erase_command_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    remaining = command_text(context)[:-1]
    set_command_text(context, remaining)
    if not remaining:
        return ModeResult(consumed=True, switch_to="normal", message="command_cancel")
    return ModeResult(consumed=True, status="editing")


def evaluate(context: ModeContext, text: str) -> Evaluation:
    outcome = Evaluation()
    parsed = _PIPELINE.parse(text)
    if isinstance(parsed, SetCommand):
        handler = _SET_HANDLERS.get(parsed.option)
        if handler is not None:
            handler(context, parsed.value)
            outcome.status = f"set_{parsed.option}"
        return outcome
    for step in parsed or ():
        handler = _STEP_HANDLERS.get(step.command)
        if handler is None:
            continue
        handler(context, step, outcome)
        if outcome.stop:
            break
    return outcome


def _quit(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step
    buffer = context.buffer
    if buffer.name or not buffer.modified:
        outcome.status = "quit"
        outcome.stop = True
        context.bus.emit("command.quit", {"force": False})
    else:
        outcome.status = "quit_refused"
        context.bus.emit("command.error", "unsaved changes in unnamed buffer")


def _force_quit(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step
    outcome.status = "force_quit"
    outcome.stop = True
    context.bus.emit("command.quit", {"force": True})


def _first_line(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step, outcome
    context.viewport.goto_line(0)


def _last_line(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step, outcome
    context.viewport.goto_line(len(context.buffer.document) - 1)


def _line_start(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step, outcome
    context.viewport.line_start()


def _line_end(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step, outcome
    context.viewport.line_end()


def _append(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del step
    context.viewport.line_end()
    outcome.switch_to = "insert"


def _insert(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del context, step
    outcome.switch_to = "insert"


def _next_word(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del outcome
    for _ in range(step.count):
        context.viewport.next_word()


def _prev_word(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del outcome
    for _ in range(step.count):
        context.viewport.prev_word()


def _delete_lines(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del outcome
    first = context.viewport.absolute_row
    for row in range(first, first + step.count):
        if not context.buffer.clear_row(row):
            break
    context.viewport.line_start()


def _undo(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    del outcome
    for _ in range(step.count):
        node = context.buffer.undo()
        if node is None:
            break
        last = node.start + len(node.rows) - 1
        context.viewport.fit_to_document()
        context.viewport.place(last, context.buffer.document.row_length(last))


def _search(context: ModeContext, step: CommandStep, outcome: Evaluation) -> None:
    pattern = step.argument or ""
    context.search = search_for(context.buffer.document, pattern)
    outcome.stop = True
    context.bus.emit(
        "command.search", {"pattern": pattern, "total": context.search.total}
    )
    if jump_to_next_match(context):
        outcome.switch_to = "search"
        outcome.status = "search"
    else:
        context.buffer.document.clear_matches()
        outcome.status = "search_empty"


def _set_line(context: ModeContext, value: str) -> None:
    line = _parse_int(value)
    if line is not None:
        context.viewport.goto_line(line - 1)


def _set_filename(context: ModeContext, value: str) -> None:
    context.buffer.rename(value)
    context.bus.emit("command.rename", value)


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


_STEP_HANDLERS: Dict[str, StepHandler] = {
    "q": _quit,
    "x": _force_quit,
    "g": _first_line,
    "G": _last_line,
    "a": _line_start,
    "e": _line_end,
    "A": _append,
    "i": _insert,
    "w": _next_word,
    "b": _prev_word,
    "d": _delete_lines,
    "u": _undo,
    "/": _search,
}

_SET_HANDLERS: Dict[str, SetHandler] = {
    "line": _set_line,
    "filename": _set_filename,
}


__all__ = [
    "Evaluation",
    "cancel_command_line",
    "erase_command_char",
    "evaluate",
    "submit_command_line",
]
