# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import argparse
import logging
import pathlib
import sys

import trio

from .commontypes import NotariusError
from .settings import Settings
from .steno.keystreams import dispatch_all, make_strokestream
from .steno.stroke import parse_strokes
from .translation.engine import TranslationEngine
from .translation.loader import load_dictionaries
from .translation.orthography import Orthography, load_word_list
from .translation.output import LoggingExecutor, PrintingDispatcher


async def translate_stdin(engine: TranslationEngine):
    dispatcher = PrintingDispatcher()
    stdin = trio.wrap_file(sys.stdin)
    async with make_strokestream(stdin, engine) as outputs:
        await dispatch_all(outputs, dispatcher, LoggingExecutor())


def make_engine(args) -> TranslationEngine:
    if args.settings is not None:
        settings = Settings.load(args.settings)
        dictionary = load_dictionaries(settings.dictionary_paths, suffix_keys=settings.suffix_keys)
        return TranslationEngine.from_settings(settings, dictionary)
    dictionary = load_dictionaries(args.dictionary)
    return TranslationEngine(dictionary, orthography=Orthography(words=load_word_list()))


translate_parser = argparse.ArgumentParser(description="Translate steno strokes read from stdin, one or more per line.")
translate_config_group = translate_parser.add_mutually_exclusive_group(required=True)
translate_config_group.add_argument("--settings", type=pathlib.Path)
translate_config_group.add_argument("--dictionary", type=pathlib.Path, action="append")
translate_parser.add_argument("--verbose", action="store_true")


def translate_cli():
    args = translate_parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)
    try:
        engine = make_engine(args)
    except (NotariusError, OSError) as exc:
        translate_parser.exit(1, f"{translate_parser.prog}: {exc}\n")
    trio.run(translate_stdin, engine)


lookup_parser = argparse.ArgumentParser(description="Show the dictionary entry for a stroke outline.")
lookup_parser.add_argument("outline")
lookup_config_group = lookup_parser.add_mutually_exclusive_group(required=True)
lookup_config_group.add_argument("--settings", type=pathlib.Path)
lookup_config_group.add_argument("--dictionary", type=pathlib.Path, action="append")


def lookup_cli():
    args = lookup_parser.parse_args()
    try:
        engine = make_engine(args)
        strokes = parse_strokes(args.outline)
    except (NotariusError, OSError) as exc:
        lookup_parser.exit(1, f"{lookup_parser.prog}: {exc}\n")
    entry = engine.dictionary.lookup(strokes, [len(strokes)])
    if entry is None:
        lookup_parser.exit(1, f"{args.outline} is not in the dictionary\n")
    for action in entry.actions:
        print(action)
