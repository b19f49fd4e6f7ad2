# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import pathlib

import msgspec

from ..commontypes import NotariusError
from ..steno.keys import StenoKey
from ..steno.stroke import StrokeError, parse_strokes
from .actions import (
    KEYS_COMMAND,
    Action,
    CaseDirective,
    ClearFormatting,
    Command,
    DictionaryEntry,
    Glued,
    RetroAction,
    RetroKind,
    Text,
    Unsupported,
)
from .dictionary import DEFAULT_SUFFIX_KEYS, Dictionary

logger = logging.getLogger(__name__)


class DictionaryError(NotariusError):
    pass


SENTENCE_PUNCTUATION = frozenset(".?!")
CLAUSE_PUNCTUATION = frozenset(",:;")

SIMPLE_METAS = {
    "-|": Text(case_directive=CaseDirective.CAPITALIZE_NEXT),
    ">": Text(case_directive=CaseDirective.LOWERCASE_NEXT),
    "<": Text(case_directive=CaseDirective.FORCE_UPPER),
    ">>": Text(case_directive=CaseDirective.FORCE_LOWER),
    "*-|": Text(case_directive=CaseDirective.CAPITALIZE_PREV),
    "*~": RetroAction(kind=RetroKind.TOGGLE_CASE),
    "*?": RetroAction(kind=RetroKind.ADD_SPACE),
    "*!": RetroAction(kind=RetroKind.REMOVE_SPACE),
    "^": Text(attach_before=True, attach_after=True),
    "^^": Text(attach_before=True, attach_after=True),
    "": ClearFormatting(),
    "bracketleft": Text(literal="{"),
    "bracketright": Text(literal="}"),
}


def parse_meta(meta: str) -> Action:
    """Parse the inside of one {meta} block."""
    if meta in SIMPLE_METAS:
        return SIMPLE_METAS[meta]
    if len(meta) == 1 and meta in SENTENCE_PUNCTUATION:
        return Text(literal=meta, attach_before=True, case_directive=CaseDirective.CAPITALIZE_NEXT)
    if len(meta) == 1 and meta in CLAUSE_PUNCTUATION:
        return Text(literal=meta, attach_before=True)
    if meta.startswith("&"):
        return Glued(meta[1:])
    if meta.startswith("#"):
        combos = tuple(meta[1:].split())
        if not combos:
            raise DictionaryError(f"Empty key combination in {{{meta}}}")
        return Command(name=KEYS_COMMAND, args=combos)
    if meta.startswith(":"):
        name, *args = meta[1:].split(":")
        if not name:
            raise DictionaryError(f"Command without a name in {{{meta}}}")
        return Command(name=name, args=tuple(args))

    attach_before = meta.startswith("^")
    attach_after = meta.endswith("^")
    inner = meta[1 if attach_before else 0 : len(meta) - 1 if attach_after else len(meta)]
    if inner.startswith("~|"):
        return Text(literal=inner[2:], attach_before=attach_before, attach_after=attach_after, carry_case=True)
    if attach_before or attach_after:
        return Text(
            literal=inner,
            attach_before=attach_before,
            attach_after=attach_after,
            orthography=attach_before and inner[:1].isalpha(),
        )
    return Unsupported(meta=meta)


def parse_translation(translation: str) -> tuple[Action, ...]:
    """Split a translation like "{^}hello {-|}" into actions.

    Braces can be escaped with a backslash to appear literally.
    """
    actions: list[Action] = []
    text: list[str] = []
    meta: list[str] | None = None

    def flush_text():
        literal = "".join(text).strip()
        text.clear()
        if literal:
            actions.append(Text(literal=literal))

    chars = iter(translation)
    for char in chars:
        if char == "\\":
            escaped = next(chars, "\\")
            (text if meta is None else meta).append(escaped)
        elif char == "{":
            if meta is not None:
                raise DictionaryError(f"Nested brace in {translation!r}")
            flush_text()
            meta = []
        elif char == "}":
            if meta is None:
                raise DictionaryError(f"Unbalanced brace in {translation!r}")
            action = parse_meta("".join(meta))
            if isinstance(action, Unsupported):
                logger.debug("Unsupported meta %r in %r", action.meta, translation)
            actions.append(action)
            meta = None
        elif meta is not None:
            meta.append(char)
        else:
            text.append(char)
    if meta is not None:
        raise DictionaryError(f"Unbalanced brace in {translation!r}")
    flush_text()
    return tuple(actions)


def parse_entries(raw: collections.abc.Mapping[str, str]) -> list[DictionaryEntry]:
    entries = []
    for outline, translation in raw.items():
        try:
            strokes = parse_strokes(outline)
        except StrokeError as exc:
            raise DictionaryError(f"Invalid outline {outline!r}") from exc
        entries.append(DictionaryEntry(strokes=strokes, actions=parse_translation(translation)))
    return entries


def load_dictionary(path: pathlib.Path) -> list[DictionaryEntry]:
    try:
        raw = msgspec.json.decode(path.read_bytes(), type=dict[str, str])
    except OSError as exc:
        raise DictionaryError(f"Cannot read dictionary {path}") from exc
    except msgspec.DecodeError as exc:
        raise DictionaryError(f"Malformed dictionary {path}: {exc}") from exc
    entries = parse_entries(raw)
    logger.info("Loaded %d entries from %s", len(entries), path)
    return entries


def load_dictionaries(
    paths: collections.abc.Iterable[pathlib.Path],
    suffix_keys: collections.abc.Sequence[StenoKey] = DEFAULT_SUFFIX_KEYS,
) -> Dictionary:
    """Load dictionaries in order; entries in later dictionaries win."""
    dictionary = Dictionary(suffix_keys=suffix_keys)
    for path in paths:
        dictionary.update(load_dictionary(path))
    if not len(dictionary):
        raise DictionaryError("No dictionary entries were loaded")
    return dictionary
