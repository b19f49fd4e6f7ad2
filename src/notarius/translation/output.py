# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import abc
import logging
import sys

from .actions import Command
from .diff import Correction

logger = logging.getLogger(__name__)


class Dispatcher(abc.ABC):
    """Turns corrections into key presses on the output device."""

    @abc.abstractmethod
    def dispatch(self, correction: Correction): ...


class CommandExecutor(abc.ABC):
    @abc.abstractmethod
    def execute(self, command: Command): ...


class TextBuffer(Dispatcher):
    """Applies corrections to an in-memory string, as a text field would."""

    def __init__(self, text: str = ""):
        self.text = text
        self.keys: list[str] = []

    def dispatch(self, correction: Correction):
        if correction.backspaces > len(self.text):
            raise ValueError(f"Cannot erase {correction.backspaces} characters from {len(self.text)}")
        if correction.backspaces:
            self.text = self.text[: -correction.backspaces]
        self.text += correction.insert
        self.keys.extend(correction.raw_keys)


class PrintingDispatcher(TextBuffer):
    """Prints each correction along with the text it leaves behind."""

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout

    def dispatch(self, correction: Correction):
        super().dispatch(correction)
        parts = []
        if correction.backspaces:
            parts.append(f"<{correction.backspaces} backspaces>")
        if correction.insert:
            parts.append(repr(correction.insert))
        parts.extend(f"[{keys}]" for keys in correction.raw_keys)
        print(f"{' '.join(parts):<40} | {self.text}", file=self.stream)


class RecordingExecutor(CommandExecutor):
    def __init__(self):
        self.executed: list[Command] = []

    def execute(self, command: Command):
        self.executed.append(command)


class LoggingExecutor(CommandExecutor):
    def execute(self, command: Command):
        logger.info("Command %s %s", command.name, " ".join(command.args))
