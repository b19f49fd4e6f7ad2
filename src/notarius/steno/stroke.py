# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc

import msgspec

from ..commontypes import NotariusError
from .keys import RIGHT_BANK_START, STENO_ORDER, StenoKey


class StrokeError(NotariusError, ValueError):
    pass


class Stroke(msgspec.Struct, frozen=True):
    keys: frozenset[StenoKey]

    @classmethod
    def from_keys(cls, keys: collections.abc.Iterable[StenoKey]):
        keys = frozenset(keys)
        if not keys:
            raise StrokeError("A stroke must have at least one key")
        return cls(keys=keys)

    @classmethod
    def from_steno(cls, text: str):
        return parse_stroke(text)

    @property
    def sorted_keys(self) -> tuple[StenoKey, ...]:
        return tuple(sorted(self.keys, key=lambda k: k.order))

    @property
    def is_numeral(self):
        return StenoKey.NUMBER_BAR in self.keys and any(k.digit is not None for k in self.keys)

    @property
    def is_number(self):
        """True when the stroke renders as digits only, like 123 or 1-8."""
        return self.is_numeral and all(k.digit is not None for k in self.keys if k is not StenoKey.NUMBER_BAR)

    @property
    def digits(self) -> str:
        if not self.is_number:
            raise StrokeError(f"{self} is not a number stroke")
        return self.rtfcre.replace("-", "")

    @property
    def rtfcre(self) -> str:
        return canonicalize(self.sorted_keys)

    def without(self, key: StenoKey) -> Stroke:
        return Stroke.from_keys(self.keys - {key})

    def __contains__(self, key):
        return key in self.keys

    def __str__(self):
        return self.rtfcre


def canonicalize(keys: collections.abc.Sequence[StenoKey]) -> str:
    numeral = StenoKey.NUMBER_BAR in keys and any(k.digit is not None for k in keys)
    labels = []
    for key in keys:
        if numeral:
            if key is StenoKey.NUMBER_BAR:
                continue
            labels.append(key.numeral_label())
        else:
            labels.append(key.value)
    if any(label in IMPLICIT_HYPHEN_LABELS for label in labels):
        return "".join(label.strip("-") for label in labels)
    left = "".join(label.strip("-") for label in labels if not label.startswith("-"))
    right = "".join(label.strip("-") for label in labels if label.startswith("-"))
    if right:
        return f"{left}-{right}"
    return left


IMPLICIT_HYPHEN_LABELS = frozenset({"A-", "O-", "5-", "0-", "*", "-E", "-U"})


def parse_stroke(text: str) -> Stroke:
    """Parse a single stroke written in steno order, e.g. "STKPW", "-T", "1-8" or "#S"."""
    if not text or text == "-":
        raise StrokeError(f"Empty stroke {text!r}")
    keys = set()
    position = 0
    for char in text:
        if char == "#":
            keys.add(StenoKey.NUMBER_BAR)
            position = max(position, 1)
            continue
        if char == "-":
            if position > RIGHT_BANK_START:
                raise StrokeError(f"Misplaced hyphen in stroke {text!r}")
            position = RIGHT_BANK_START
            continue
        for key in STENO_ORDER[position:]:
            if key is StenoKey.NUMBER_BAR:
                continue
            if char == key.letter:
                break
            if char == key.digit:
                keys.add(StenoKey.NUMBER_BAR)
                break
        else:
            raise StrokeError(f"Cannot parse {char!r} in stroke {text!r}")
        keys.add(key)
        position = key.order + 1
    return Stroke.from_keys(keys)


def parse_strokes(text: str) -> tuple[Stroke, ...]:
    """Parse a slash-separated stroke outline, e.g. "H-L/WORLD"."""
    return tuple(parse_stroke(part) for part in text.split("/"))


def format_strokes(strokes: collections.abc.Iterable[Stroke]) -> str:
    return "/".join(stroke.rtfcre for stroke in strokes)

