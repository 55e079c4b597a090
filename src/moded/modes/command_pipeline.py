"""Parsing for the command-line language.

A command line such as ``:3dw/foo`` is read as a stack of characters.
Each letter is one command, optionally preceded by a decimal repeat count;
``/`` swallows the remainder of the line as a search pattern. Lines
beginning with ``set`` are configuration and are split on whitespace
instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from moded.runtime import telemetry

SEARCH_PREFIX = "/"
SET_KEYWORD = "set"


@dataclass(slots=True)
class CommandStep:
    command: str
    count: int = 1
    argument: Optional[str] = None


@dataclass(slots=True)
class SetCommand:
    option: str
    value: str


@dataclass(slots=True)
class CommandDraft:
    steps: List[CommandStep] = field(default_factory=list)
    digits: List[str] = field(default_factory=list)

    def take_count(self) -> int:
        count = int("".join(self.digits)) if self.digits else 1
        self.digits.clear()
        return count


ParsedCommand = Union[SetCommand, List[CommandStep], None]


class CountParser:
    def parse(self, stack: List[str], draft: CommandDraft) -> None:
        while stack and stack[-1].isascii() and stack[-1].isdigit():
            draft.digits.append(stack.pop())


class StepParser:
    def parse(self, stack: List[str], draft: CommandDraft) -> None:
        if not stack:
            return
        char = stack.pop()
        if char.isspace():
            return
        if char == SEARCH_PREFIX:
            pattern = "".join(reversed(stack))
            stack.clear()
            draft.steps.append(
                CommandStep(SEARCH_PREFIX, draft.take_count(), argument=pattern)
            )
            return
        draft.steps.append(CommandStep(char, draft.take_count()))


class CommandPipeline:
    """Turns raw command-line text into steps or a ``set`` action."""

    def __init__(self) -> None:
        self.count_parser = CountParser()
        self.step_parser = StepParser()

    def parse(self, text: str) -> ParsedCommand:
        body = text[1:] if text.startswith(":") else text
        with telemetry.span(
            "command::parse",
            logger_name="moded.commands",
            component="commands",
            metadata={"text": text},
        ):
            tokens = body.split()
            if tokens and tokens[0] == SET_KEYWORD:
                return self._parse_set(tokens[1:])

            stack = list(reversed(body))
            draft = CommandDraft()
            while stack:
                self.count_parser.parse(stack, draft)
                self.step_parser.parse(stack, draft)
            return draft.steps

    def _parse_set(self, tokens: List[str]) -> Optional[SetCommand]:
        if len(tokens) < 2:
            return None
        return SetCommand(option=tokens[0], value=" ".join(tokens[1:]))


__all__ = [
    "CommandPipeline",
    "CommandStep",
    "ParsedCommand",
    "SetCommand",
]
