# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

from ..steno.stroke import Stroke, format_strokes


class CaseDirective(enum.Enum):
    NONE = enum.auto()
    CAPITALIZE_NEXT = enum.auto()
    LOWERCASE_NEXT = enum.auto()
    CAPITALIZE_PREV = enum.auto()
    FORCE_UPPER = enum.auto()
    FORCE_LOWER = enum.auto()


class RetroKind(enum.Enum):
    ADD_SPACE = enum.auto()
    REMOVE_SPACE = enum.auto()
    CAPITALIZE_PREV_WORD = enum.auto()
    TOGGLE_CASE = enum.auto()


class Text(msgspec.Struct, frozen=True, kw_only=True):
    literal: str = ""
    attach_before: bool = False
    attach_after: bool = False
    case_directive: CaseDirective = CaseDirective.NONE
    # suffix continuation: joined to the previous word through the orthography rules
    orthography: bool = False
    carry_case: bool = False

    @property
    def attaches(self):
        return self.attach_before or self.attach_after


class Glued(msgspec.Struct, frozen=True):
    literal: str


class Command(msgspec.Struct, frozen=True):
    name: str
    args: tuple[str, ...] = ()

    @property
    def is_keys(self):
        return self.name == KEYS_COMMAND


KEYS_COMMAND = "keys"


class RetroAction(msgspec.Struct, frozen=True):
    kind: RetroKind
    target_offset: int = 1

    def __post_init__(self):
        if self.target_offset < 1:
            raise ValueError("Retroactive actions can only target earlier strokes")


class ClearFormatting(msgspec.Struct, frozen=True):
    pass


class Unsupported(msgspec.Struct, frozen=True):
    meta: str


Action = typing.Union[Text, Glued, Command, RetroAction, ClearFormatting, Unsupported]
FormattingAction = typing.Union[Text, Glued, ClearFormatting]


class DictionaryEntry(msgspec.Struct, frozen=True):
    strokes: tuple[Stroke, ...]
    actions: tuple[Action, ...]

    def __str__(self):
        return format_strokes(self.strokes)


class TranslatedUnit(msgspec.Struct, frozen=True, kw_only=True):
    strokes: tuple[Stroke, ...]
    actions: tuple[FormattingAction, ...] = ()
    retro: tuple[RetroAction, ...] = ()
    commands: tuple[Command, ...] = ()

    @property
    def undo_transparent(self):
        """True for a unit that types no characters of its own, such as a bare command."""
        if self.retro:
            return False
        for action in self.actions:
            match action:
                case Text(literal=literal) if literal:
                    return False
                case Glued():
                    return False
        return True

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(arg for command in self.commands if command.is_keys for arg in command.args)

    @property
    def executable_commands(self) -> tuple[Command, ...]:
        return tuple(command for command in self.commands if not command.is_keys)
