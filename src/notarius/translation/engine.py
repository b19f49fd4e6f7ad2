# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import re
import typing

import msgspec

from ..commontypes import SettingsError
from ..steno.stroke import Stroke, format_strokes, parse_stroke
from .actions import (
    Action,
    CaseDirective,
    ClearFormatting,
    Command,
    DictionaryEntry,
    Glued,
    RetroAction,
    RetroKind,
    Text,
    TranslatedUnit,
    Unsupported,
)
from .diff import Correction, correct
from .dictionary import Dictionary
from .formatting import Formatter
from .history import History
from .orthography import Orthography, load_word_list
from .retro import RetroactiveResolver

if typing.TYPE_CHECKING:
    from ..settings import Settings

logger = logging.getLogger(__name__)

DIGITS_ONLY = re.compile(r"\d+")
DEFAULT_UNDO_STROKES = frozenset({parse_stroke("*")})


class TranslationOutput(msgspec.Struct, frozen=True, kw_only=True):
    correction: Correction = msgspec.field(default_factory=Correction)
    commands: tuple[Command, ...] = ()

    @property
    def is_empty(self):
        return self.correction.is_empty and not self.commands


def fallback_entry(stroke: Stroke) -> DictionaryEntry:
    """What an untranslatable stroke turns into: its own steno, glued to its neighbours."""
    literal = stroke.digits if stroke.is_number else stroke.rtfcre
    return DictionaryEntry(strokes=(stroke,), actions=(Glued(literal),))


def make_unit(strokes: tuple[Stroke, ...], actions: collections.abc.Iterable[Action]) -> TranslatedUnit:
    formatting = []
    retro = []
    commands = []
    for action in actions:
        match action:
            case RetroAction():
                retro.append(action)
            case Command():
                commands.append(action)
            case Text(case_directive=CaseDirective.CAPITALIZE_PREV):
                retro.append(RetroAction(kind=RetroKind.CAPITALIZE_PREV_WORD, target_offset=1))
                if action.literal or action.attaches:
                    formatting.append(msgspec.structs.replace(action, case_directive=CaseDirective.NONE))
            case Text(literal=literal) if DIGITS_ONLY.fullmatch(literal) and not (action.attaches or action.carry_case):
                formatting.append(Glued(literal))
            case Text() | Glued() | ClearFormatting():
                formatting.append(action)
            case Unsupported(meta=meta):
                logger.warning("Skipping unsupported action {%s} for %s", meta, format_strokes(strokes))
            case _:
                logger.warning("Skipping unknown action %r for %s", action, format_strokes(strokes))
    return TranslatedUnit(strokes=strokes, actions=tuple(formatting), retro=tuple(retro), commands=tuple(commands))


class TranslationEngine:
    def __init__(
        self,
        dictionary: Dictionary,
        *,
        orthography: typing.Optional[Orthography] = None,
        max_phrase_length: int = 10,
        history_size: int = 50,
        context_chars: int = 100,
        undo_strokes: collections.abc.Iterable[Stroke] = DEFAULT_UNDO_STROKES,
    ):
        if max_phrase_length < 1:
            raise SettingsError("max_phrase_length must be at least 1")
        if history_size < max_phrase_length:
            raise SettingsError("history_size must be at least max_phrase_length")
        self.dictionary = dictionary
        self.max_phrase_length = max_phrase_length
        self.undo_strokes = frozenset(undo_strokes)
        self.history = History(history_size, context_chars=context_chars)
        self.formatter = Formatter(orthography if orthography is not None else Orthography())
        self.resolver = RetroactiveResolver()

    @classmethod
    def from_settings(cls, settings: Settings, dictionary: Dictionary):
        words = load_word_list(settings.orthography_words_path) if settings.validate_orthography else None
        return cls(
            dictionary,
            orthography=Orthography(settings.orthography_rules, words=words),
            max_phrase_length=settings.max_phrase_length,
            history_size=settings.history_size,
            context_chars=settings.context_chars,
            undo_strokes=settings.undo_strokes,
        )

    @property
    def text(self):
        return self.history.text

    @property
    def state(self):
        return self.history.state

    def process(self, stroke: Stroke) -> TranslationOutput:
        if stroke in self.undo_strokes:
            return self.undo()
        return self.translate(stroke)

    def translate(self, stroke: Stroke) -> TranslationOutput:
        self.history.trim_context()
        before = self.history.text

        trailing = self.history.trailing(self.max_phrase_length - 1)
        window = tuple(s for entry in trailing for s in entry.strokes) + (stroke,)
        lengths = [1]
        for entry in reversed(trailing):
            lengths.append(lengths[-1] + len(entry.strokes))
        found = self.dictionary.lookup(window, lengths)
        if found is None:
            logger.debug("No translation for %s", stroke)
            found = fallback_entry(stroke)
        replaced = self.history.absorb(len(found.strokes) - 1)
        unit = make_unit(found.strokes, found.actions)
        entry = self.history.push(unit, replaced)
        logger.debug("Translated %s as entry %d", format_strokes(found.strokes), entry.serial)

        after = self.render()
        return TranslationOutput(
            correction=correct(before, after, raw_keys=unit.keys),
            commands=unit.executable_commands,
        )

    def undo(self) -> TranslationOutput:
        self.history.trim_context()
        before = self.history.text
        removed = self.history.undo()
        if removed is None:
            logger.debug("Nothing to undo")
            return TranslationOutput()
        logger.debug("Undid history entry %d", removed.serial)
        if removed.unit.undo_transparent and not removed.replaced:
            return TranslationOutput()
        return TranslationOutput(correction=correct(before, self.render()))

    def render(self) -> str:
        """Re-render every entry in history from its unit and active directives."""
        self.resolver.resolve(self.history)
        text = self.history.context
        state = self.history.initial_state
        for entry in self.history:
            text, state = self.formatter.render_entry(entry, text, state)
        return text
