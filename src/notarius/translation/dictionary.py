# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import pygtrie

from ..steno.keys import StenoKey
from ..steno.stroke import Stroke
from .actions import DictionaryEntry

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX_KEYS = (StenoKey.Z_RIGHT, StenoKey.D_RIGHT, StenoKey.S_RIGHT, StenoKey.G_RIGHT)


class Dictionary:
    """Maps stroke sequences to dictionary entries.

    Entries live in a trie keyed by stroke sequence, so a lookup can cheaply rule out
    any window whose leading strokes do not begin an entry.
    """

    def __init__(
        self,
        entries: collections.abc.Iterable[DictionaryEntry] = (),
        suffix_keys: collections.abc.Sequence[StenoKey] = DEFAULT_SUFFIX_KEYS,
    ):
        self._trie = pygtrie.Trie()
        self.suffix_keys = tuple(suffix_keys)
        self.longest_key = 0
        self.update(entries)

    def update(self, entries: collections.abc.Iterable[DictionaryEntry]):
        """Add entries; an entry replaces any earlier entry for the same strokes."""
        for entry in entries:
            if not entry.strokes:
                raise ValueError("A dictionary entry needs at least one stroke")
            self._trie[entry.strokes] = entry
            self.longest_key = max(self.longest_key, len(entry.strokes))

    def __len__(self):
        return len(self._trie)

    def __iter__(self):
        return iter(self._trie.values())

    def __contains__(self, strokes: collections.abc.Sequence[Stroke]):
        return bool(strokes) and self._trie.has_key(tuple(strokes))

    def get(self, strokes: collections.abc.Sequence[Stroke]) -> typing.Optional[DictionaryEntry]:
        if not strokes:
            return None
        return self._trie.get(tuple(strokes))

    def could_begin(self, strokes: collections.abc.Sequence[Stroke]) -> bool:
        """True when some entry starts with these strokes."""
        return bool(self._trie.has_node(tuple(strokes)))

    def lookup(
        self,
        window: collections.abc.Sequence[Stroke],
        lengths: typing.Optional[collections.abc.Iterable[int]] = None,
    ) -> typing.Optional[DictionaryEntry]:
        """Find the longest entry matching a suffix of the window.

        Only the given suffix lengths are tried, longest first; by default every length
        from the whole window down to one stroke. For each length the exact strokes are
        tried before folding a suffix key off the final stroke.
        """
        window = tuple(window)
        limit = min(len(window), self.longest_key)
        if lengths is None:
            lengths = range(1, limit + 1)
        for length in sorted({n for n in lengths if 0 < n <= limit}, reverse=True):
            strokes = window[-length:]
            if length > 1 and not self.could_begin(strokes[:-1]):
                continue
            entry = self.get(strokes)
            if entry is not None:
                return entry
            entry = self.fold_suffix(strokes)
            if entry is not None:
                return entry
        return None

    def fold_suffix(self, strokes: tuple[Stroke, ...]) -> typing.Optional[DictionaryEntry]:
        """Split a suffix key off the last stroke, e.g. RAEUSZ as RAEUS + -Z."""
        last = strokes[-1]
        for key in self.suffix_keys:
            if key not in last or len(last.keys) == 1:
                continue
            base = self.get(strokes[:-1] + (last.without(key),))
            if base is None:
                continue
            suffix = self.get((Stroke.from_keys([key]),))
            if suffix is None:
                continue
            logger.debug("Folded %s into %s + %s", last, base, suffix)
            return DictionaryEntry(strokes=strokes, actions=base.actions + suffix.actions)
        return None
