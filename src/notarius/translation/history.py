# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections
import dataclasses
import functools
import itertools
import logging
import re
import typing

from .actions import RetroKind, TranslatedUnit
from .formatting import FormattingState, LeadingSpace, RenderedSpan

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s")

SPACE_DIRECTIVES = {
    RetroKind.ADD_SPACE: LeadingSpace.ADD,
    RetroKind.REMOVE_SPACE: LeadingSpace.REMOVE,
}


@dataclasses.dataclass(kw_only=True, eq=False)
class HistoryEntry:
    serial: int
    unit: TranslatedUnit
    # entries absorbed into this one by a longer match; put back on undo
    replaced: tuple[HistoryEntry, ...] = ()
    # (origin serial, index within origin) -> kind; written by the retroactive resolver only
    directives: dict[tuple[int, int], RetroKind] = dataclasses.field(default_factory=dict)
    span: RenderedSpan = dataclasses.field(default_factory=RenderedSpan)
    state_after: FormattingState = dataclasses.field(default_factory=FormattingState)

    @property
    def strokes(self):
        return self.unit.strokes

    @property
    def leading_space(self) -> typing.Optional[LeadingSpace]:
        leading = None
        for origin in sorted(self.directives):
            kind = self.directives[origin]
            if kind in SPACE_DIRECTIVES:
                leading = SPACE_DIRECTIVES[kind]
        return leading

    @property
    def case_directives(self) -> list[RetroKind]:
        return [self.directives[origin] for origin in sorted(self.directives) if self.directives[origin] not in SPACE_DIRECTIVES]


class History:
    """The most recent translated entries, oldest first.

    Entries pushed beyond capacity are evicted; their rendered text is kept as a context
    tail so later suffixes can still fold into it, but they can no longer change.
    """

    def __init__(self, capacity: int, context_chars: int = 100):
        if capacity < 1:
            raise ValueError("History needs room for at least one entry")
        self.capacity = capacity
        self.context_chars = context_chars
        self.entries: collections.deque[HistoryEntry] = collections.deque()
        self.context = ""
        self.initial_state = FormattingState()
        self._serials = itertools.count(1)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    @property
    def stroke_count(self):
        return sum(len(entry.strokes) for entry in self.entries)

    @property
    def text(self) -> str:
        return functools.reduce(lambda text, entry: entry.span.apply(text), self.entries, self.context)

    @property
    def state(self) -> FormattingState:
        if self.entries:
            return self.entries[-1].state_after
        return self.initial_state

    def trailing(self, max_strokes: int) -> list[HistoryEntry]:
        """The newest whole entries holding at most max_strokes strokes, oldest first."""
        found = []
        total = 0
        for entry in reversed(self.entries):
            total += len(entry.strokes)
            if total > max_strokes:
                break
            found.append(entry)
        found.reverse()
        return found

    def push(self, unit: TranslatedUnit, replaced: tuple[HistoryEntry, ...] = ()) -> HistoryEntry:
        entry = HistoryEntry(serial=next(self._serials), unit=unit, replaced=replaced)
        self.entries.append(entry)
        while len(self.entries) > self.capacity:
            self.evict()
        return entry

    def evict(self):
        oldest = self.entries.popleft()
        self.context = oldest.span.apply(self.context)
        self.initial_state = oldest.state_after
        logger.debug("Evicted history entry %d", oldest.serial)

    def trim_context(self):
        """Keep at most context_chars of context, never starting inside a word."""
        if len(self.context) <= self.context_chars:
            return
        cut = len(self.context) - self.context_chars
        if not self.context[cut - 1].isspace():
            boundary = WHITESPACE.search(self.context, cut)
            cut = boundary.start() if boundary is not None else len(self.context)
        self.context = self.context[cut:]

    def absorb(self, stroke_count: int) -> tuple[HistoryEntry, ...]:
        """Remove trailing entries holding exactly stroke_count strokes."""
        absorbed = []
        while stroke_count > 0:
            entry = self.entries.pop()
            stroke_count -= len(entry.strokes)
            absorbed.append(entry)
        if stroke_count < 0:
            raise ValueError("Absorbed strokes do not line up with history entries")
        absorbed.reverse()
        return tuple(absorbed)

    def pop(self) -> HistoryEntry:
        """Remove the newest entry and put back whatever it had absorbed."""
        entry = self.entries.pop()
        self.entries.extend(entry.replaced)
        return entry

    def undo(self) -> typing.Optional[HistoryEntry]:
        """Take back the newest stroke's entry, if there is one."""
        if not self.entries:
            return None
        return self.pop()

    def locate(self, origin_index: int, offset: int) -> typing.Optional[HistoryEntry]:
        """The entry holding the stroke offset strokes before the entry at origin_index."""
        remaining = offset
        for index in range(origin_index - 1, -1, -1):
            entry = self.entries[index]
            remaining -= len(entry.strokes)
            if remaining <= 0:
                return entry
        return None
