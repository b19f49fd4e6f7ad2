# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import importlib.resources
import logging
import pathlib
import re
import typing

import msgspec

logger = logging.getLogger(__name__)


class OrthographyRule(msgspec.Struct, frozen=True, kw_only=True):
    """A spelling rule for joining a stem and a suffix.

    The pattern is matched case-insensitively against "<stem> ^ <suffix>"; on a match,
    the replacement template (re.Match.expand syntax) produces the joined word.
    """

    name: str
    pattern: str
    replacement: str

    def apply(self, stem: str, suffix: str) -> typing.Optional[str]:
        match = re.match(self.pattern, f"{stem} ^ {suffix}", re.IGNORECASE)
        if match is None:
            return None
        return match.expand(self.replacement)


ORTHOGRAPHY_RULES = (
    # artistic + ly = artistically
    OrthographyRule(name="ic-ly", pattern=r"^(.*[aeiou]c) \^ ly$", replacement=r"\1ally"),
    # statute + ry = statutory
    OrthographyRule(name="te-ry", pattern=r"^(.*t)e \^ ry$", replacement=r"\1ory"),
    # frequent + cy = frequency
    OrthographyRule(name="t-cy", pattern=r"^(.*[naeiou])te? \^ cy$", replacement=r"\1cy"),
    # establish + s = establishes
    OrthographyRule(name="sibilant-s", pattern=r"^(.*(?:s|sh|x|z|zh)) \^ s$", replacement=r"\1es"),
    # speech + s = speeches
    OrthographyRule(
        name="soft-ch-s",
        pattern=r"^(.*(?:oa|ea|i|ee|oo|au|ou|l|n|(?<![gin]a)r|t)ch) \^ s$",
        replacement=r"\1es",
    ),
    # cherry + s = cherries
    OrthographyRule(name="consonant-y-s", pattern=r"^(.+[bcdfghjklmnpqrstvwxz])y \^ s$", replacement=r"\1ies"),
    # die + ing = dying
    OrthographyRule(name="ie-ing", pattern=r"^(.+)ie \^ ing$", replacement=r"\1ying"),
    # metallurgy + ist = metallurgist
    OrthographyRule(name="y-ist", pattern=r"^(.+[cdfghlmnpr])y \^ ist$", replacement=r"\1ist"),
    # beauty + ful = beautiful
    OrthographyRule(
        name="consonant-y-to-i",
        pattern=r"^(.+[bcdfghjklmnpqrstvwxz])y \^ ([a-hj-xz].*)$",
        replacement=r"\1i\2",
    ),
    # write + en = written
    OrthographyRule(name="te-en", pattern=r"^(.+)te \^ en$", replacement=r"\1tten"),
    # free + ed = freed
    OrthographyRule(name="ee-e", pattern=r"^(.+e)e \^ (e.+)$", replacement=r"\1\2"),
    # narrate + ing = narrating
    OrthographyRule(
        name="silent-e",
        pattern=r"^(.+[bcdfghjklmnpqrstuvwxz])e \^ ([aeiouy].*)$",
        replacement=r"\1\2",
    ),
    # defer + ed = deferred; stress is not known, so monitor + ed needs the word list
    OrthographyRule(
        name="consonant-doubling",
        pattern=r"^(.*(?:[bcdfghjklmnprstvwxyz]|qu)[aeiou])([bcdfgklmnprtvz]) \^ ([aeiouy].*)$",
        replacement=r"\1\2\2\3",
    ),
)


BUNDLED_WORDS = importlib.resources.files(__package__).joinpath("data").joinpath("orthography_words.txt")


def load_word_list(path: typing.Optional[pathlib.Path] = None) -> frozenset[str]:
    """Load a word list, one word per line. With no path, the bundled list is used."""
    if path is None:
        text = BUNDLED_WORDS.read_text(encoding="utf-8")
    else:
        text = path.read_text(encoding="utf-8")
    words = frozenset(line.strip().lower() for line in text.splitlines() if line.strip() and not line.startswith("#"))
    logger.info("Loaded %d orthography words", len(words))
    return words


class Orthography:
    """Joins stems and suffixes.

    With a word list, a plain join that is a known word wins; otherwise the first rule
    whose result is a known word; otherwise the first matching rule. Without a word
    list, the first matching rule always wins, so shiver + ing gives shiverring.
    """

    def __init__(
        self,
        rules: collections.abc.Sequence[OrthographyRule] = ORTHOGRAPHY_RULES,
        words: typing.Optional[collections.abc.Set[str]] = None,
    ):
        self.rules = tuple(rules)
        self.words = words

    def candidates(self, stem: str, suffix: str) -> collections.abc.Iterator[str]:
        for rule in self.rules:
            joined = rule.apply(stem, suffix)
            if joined is not None:
                yield joined

    def join(self, stem: str, suffix: str) -> str:
        simple = stem + suffix
        if self.words is None:
            return next(self.candidates(stem, suffix), simple)
        if simple.lower() in self.words:
            return simple
        first = None
        for joined in self.candidates(stem, suffix):
            if joined.lower() in self.words:
                return joined
            if first is None:
                first = joined
        return simple if first is None else first
