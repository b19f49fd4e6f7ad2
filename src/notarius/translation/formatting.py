# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import logging
import os.path
import re
import typing

import msgspec

from .actions import CaseDirective, ClearFormatting, FormattingAction, Glued, RetroKind, Text
from .orthography import Orthography

if typing.TYPE_CHECKING:
    from .history import HistoryEntry

logger = logging.getLogger(__name__)

WORD_RUN = re.compile(r"[\w-]+")
LAST_WORD = re.compile(r"\S+$")


class SpaceMode(enum.Enum):
    DEFAULT = enum.auto()
    SUPPRESSED = enum.auto()


class CaseMode(enum.Enum):
    NONE = enum.auto()
    CAPITALIZE = enum.auto()
    LOWERCASE = enum.auto()
    UPPER = enum.auto()
    LOWER = enum.auto()
    CARRY = enum.auto()


class LeadingSpace(enum.Enum):
    ADD = enum.auto()
    REMOVE = enum.auto()


NEXT_CASE = {
    CaseDirective.NONE: CaseMode.NONE,
    CaseDirective.CAPITALIZE_NEXT: CaseMode.CAPITALIZE,
    CaseDirective.LOWERCASE_NEXT: CaseMode.LOWERCASE,
    CaseDirective.FORCE_UPPER: CaseMode.UPPER,
    CaseDirective.FORCE_LOWER: CaseMode.LOWER,
    # handled retroactively
    CaseDirective.CAPITALIZE_PREV: CaseMode.NONE,
}

CLEAR_FORMATTING = Text(attach_before=True)


class FormattingState(msgspec.Struct, frozen=True, kw_only=True):
    """Directives left behind by one unit for whatever comes next."""

    pending_space: SpaceMode = SpaceMode.DEFAULT
    pending_case: CaseMode = CaseMode.NONE
    carried_case: CaseMode = CaseMode.NONE
    glue_open: bool = False

    @property
    def effective_case(self) -> CaseMode:
        if self.pending_case is CaseMode.CARRY:
            return self.carried_case
        return self.pending_case


class RenderedSpan(msgspec.Struct, frozen=True):
    """What a unit did to the text before it: erase some characters, then type some."""

    erase: int = 0
    text: str = ""

    def apply(self, before: str) -> str:
        kept = before[: len(before) - self.erase] if self.erase else before
        return kept + self.text

    @classmethod
    def between(cls, before: str, after: str):
        shared = len(os.path.commonprefix([before, after]))
        return cls(erase=len(before) - shared, text=after[shared:])


def apply_case(text: str, mode: CaseMode) -> str:
    match mode:
        case CaseMode.CAPITALIZE:
            return text[:1].upper() + text[1:]
        case CaseMode.LOWERCASE:
            return text[:1].lower() + text[1:]
        case CaseMode.UPPER:
            return text.upper()
        case CaseMode.LOWER:
            return text.lower()
    return text


def retro_case(text: str, start: int, kind: RetroKind) -> str:
    """Recase the last word-like run that ends after position start."""
    runs = [run for run in WORD_RUN.finditer(text) if run.end() > start]
    if not runs:
        logger.debug("No word to recase after position %d", start)
        return text
    run = runs[-1]
    word = run.group()
    if kind is RetroKind.CAPITALIZE_PREV_WORD:
        word = word[:1].upper() + word[1:]
    elif kind is RetroKind.TOGGLE_CASE:
        word = word.swapcase()
    return text[: run.start()] + word + text[run.end() :]


class Formatter:
    def __init__(self, orthography: Orthography):
        self.orthography = orthography

    def render_entry(self, entry: HistoryEntry, text: str, state: FormattingState) -> tuple[str, FormattingState]:
        """Render one history entry onto the end of text.

        The entry's span and trailing state are updated; the new text and state are
        returned so the caller can thread them into the next entry.
        """
        before = text
        leading = entry.leading_space
        for action in entry.unit.actions:
            text, state, emitted = self.apply(action, text, state, leading)
            if emitted:
                leading = None
        start = len(os.path.commonprefix([before, text]))
        for kind in entry.case_directives:
            text = retro_case(text, start, kind)
        entry.span = RenderedSpan.between(before, text)
        entry.state_after = state
        return text, state

    def apply(
        self,
        action: FormattingAction,
        text: str,
        state: FormattingState,
        leading: typing.Optional[LeadingSpace] = None,
    ) -> tuple[str, FormattingState, bool]:
        """Apply one formatting action; the flag says whether it typed any characters."""
        match action:
            case ClearFormatting():
                # an attach-before with no text
                return text, self.directive_state(CLEAR_FORMATTING, state), False
            case Glued(literal=literal):
                if not literal:
                    return text, state, False
                if leading is not None:
                    space = leading is LeadingSpace.ADD
                elif state.glue_open:
                    space = False
                else:
                    space = self.wants_space(state, attach_before=False)
                literal = apply_case(literal, state.effective_case)
                return self.join(text, literal, space), FormattingState(glue_open=True), True
            case Text(literal=""):
                return text, self.directive_state(action, state), False
            case Text():
                return self.apply_text(action, text, state, leading)
        raise TypeError(f"Cannot format {action!r}")

    @staticmethod
    def wants_space(state: FormattingState, attach_before: bool) -> bool:
        return not (state.pending_space is SpaceMode.SUPPRESSED or attach_before)

    @staticmethod
    def join(text: str, literal: str, space: bool) -> str:
        return f"{text} {literal}" if space else text + literal

    @staticmethod
    def directive_state(action: Text, state: FormattingState) -> FormattingState:
        if not action.attaches:
            # a bare directive like {-|} leaves spacing and glue alone
            case = NEXT_CASE[action.case_directive]
            if case is CaseMode.NONE:
                return state
            return msgspec.structs.replace(state, pending_case=case, carried_case=CaseMode.NONE)
        if action.attach_after:
            space = SpaceMode.SUPPRESSED
        elif action.attach_before:
            space = SpaceMode.DEFAULT
        else:
            space = state.pending_space
        if action.carry_case:
            return FormattingState(
                pending_space=space,
                pending_case=CaseMode.CARRY if state.effective_case is not CaseMode.NONE else CaseMode.NONE,
                carried_case=state.effective_case,
                glue_open=state.glue_open,
            )
        return FormattingState(
            pending_space=space,
            pending_case=NEXT_CASE[action.case_directive],
            glue_open=state.glue_open,
        )

    def apply_text(
        self,
        action: Text,
        text: str,
        state: FormattingState,
        leading: typing.Optional[LeadingSpace],
    ) -> tuple[str, FormattingState, bool]:
        if leading is not None:
            space = leading is LeadingSpace.ADD
        else:
            space = self.wants_space(state, action.attach_before)
        previous_word = LAST_WORD.search(text)
        fold = (
            action.orthography
            and action.attach_before
            and not space
            and previous_word is not None
        )
        if fold:
            joined = self.orthography.join(previous_word.group(), action.literal)
            text = text[: previous_word.start()] + joined
        elif action.carry_case:
            text = self.join(text, action.literal, space)
        else:
            text = self.join(text, apply_case(action.literal, state.effective_case), space)

        if action.carry_case:
            carried = state.effective_case
            next_state = FormattingState(
                pending_case=CaseMode.CARRY if carried is not CaseMode.NONE else CaseMode.NONE,
                carried_case=carried,
            )
        else:
            next_state = FormattingState(pending_case=NEXT_CASE[action.case_directive])
        if action.attach_after:
            next_state = msgspec.structs.replace(next_state, pending_space=SpaceMode.SUPPRESSED)
        return text, next_state, True
