import pytest

from notarius.steno.stroke import parse_strokes
from notarius.translation.actions import Command, RetroAction, RetroKind, Text, TranslatedUnit
from notarius.translation.diff import Correction, correct
from notarius.translation.formatting import Formatter, RenderedSpan
from notarius.translation.history import History
from notarius.translation.orthography import Orthography
from notarius.translation.retro import RetroactiveResolver


def text_unit(outline: str, literal: str) -> TranslatedUnit:
    return TranslatedUnit(strokes=parse_strokes(outline), actions=(Text(literal=literal),))


def command_unit(outline: str) -> TranslatedUnit:
    return TranslatedUnit(strokes=parse_strokes(outline), commands=(Command(name="mute"),))


def retro_unit(outline: str, kind: RetroKind, offset: int = 1) -> TranslatedUnit:
    return TranslatedUnit(strokes=parse_strokes(outline), retro=(RetroAction(kind=kind, target_offset=offset),))


def render(history: History) -> str:
    formatter = Formatter(Orthography())
    RetroactiveResolver().resolve(history)
    text = history.context
    state = history.initial_state
    for entry in history:
        text, state = formatter.render_entry(entry, text, state)
    return text


def test_trailing_takes_whole_entries():
    history = History(10)
    history.push(text_unit("H-L/WORLD", "hello world"))
    history.push(text_unit("-T", "the"))
    assert [e.serial for e in history.trailing(1)] == [2]
    assert [e.serial for e in history.trailing(2)] == [2]
    assert [e.serial for e in history.trailing(3)] == [1, 2]


def test_absorb_and_pop_restore():
    history = History(10)
    first = history.push(text_unit("H-L", "hello"))
    replaced = history.absorb(1)
    assert replaced == (first,)
    phrase = history.push(text_unit("H-L/WORLD", "hello world"), replaced)
    assert list(history) == [phrase]
    assert history.pop() is phrase
    assert list(history) == [first]


def test_absorb_must_line_up():
    history = History(10)
    history.push(text_unit("H-L/WORLD", "hello world"))
    with pytest.raises(ValueError):
        history.absorb(1)


def test_undo_takes_one_entry_at_a_time():
    history = History(10)
    history.push(text_unit("H-L", "hello"))
    history.push(text_unit("WORLD", "world"))
    history.push(command_unit("TP"))
    history.push(command_unit("TKOUPB"))
    assert history.undo().serial == 4
    assert history.undo().serial == 3
    assert [e.serial for e in history] == [1, 2]


def test_undo_restores_absorbed_entries():
    history = History(10)
    first = history.push(text_unit("H-L", "hello"))
    phrase = history.push(text_unit("H-L/WORLD", "hello world"), history.absorb(1))
    assert history.undo() is phrase
    assert list(history) == [first]


def test_undo_retro_entry_is_one_step():
    history = History(10)
    history.push(text_unit("KAT", "cat"))
    history.push(retro_unit("KPA*D", RetroKind.CAPITALIZE_PREV_WORD))
    assert history.undo().serial == 2
    assert [e.serial for e in history] == [1]


def test_undo_on_empty_history():
    assert History(3).undo() is None


@pytest.mark.parametrize(
    "unit,transparent",
    (
        (command_unit("TP"), True),
        (TranslatedUnit(strokes=parse_strokes("KHRAOER"), actions=(Text(attach_before=True),)), True),
        (text_unit("KAT", "cat"), False),
        (retro_unit("KPA*D", RetroKind.CAPITALIZE_PREV_WORD), False),
    ),
)
def test_undo_transparent(unit: TranslatedUnit, transparent: bool):
    assert unit.undo_transparent is transparent


def test_locate_counts_strokes():
    history = History(10)
    history.push(text_unit("H-L/WORLD", "hello world"))
    history.push(text_unit("-T", "the"))
    history.push(text_unit("KAT", "cat"))
    assert history.locate(2, 1).serial == 2
    assert history.locate(2, 2).serial == 1
    assert history.locate(2, 3).serial == 1
    assert history.locate(2, 4) is None
    assert history.locate(0, 1) is None


def test_eviction_bakes_text_into_context():
    history = History(2, context_chars=5)
    history.push(text_unit("H-L", "hello"))
    history.push(text_unit("WORLD", "world"))
    assert render(history) == " hello world"
    history.push(text_unit("-T", "the"))
    assert len(history) == 2
    assert history.context == " hello"
    assert render(history) == " hello world the"
    history.trim_context()
    assert history.context == "hello"
    assert history.text == "hello world the"


@pytest.mark.parametrize(
    "context,context_chars,expected",
    (
        (" the summit", 8, " summit"),
        (" the summit", 7, " summit"),
        (" the summit", 6, "summit"),
        (" the summit", 5, ""),
        (" the summit", 20, " the summit"),
        (" the summit", 0, ""),
    ),
)
def test_trim_context_keeps_whole_words(context: str, context_chars: int, expected: str):
    history = History(2, context_chars=context_chars)
    history.context = context
    history.trim_context()
    assert history.context == expected


def test_retro_directives_are_recomputed():
    history = History(10)
    history.push(text_unit("KAT", "cat"))
    history.push(text_unit("TKOG", "dog"))
    origin = history.push(retro_unit("TK-LS", RetroKind.REMOVE_SPACE))
    assert render(history) == " catdog"
    assert render(history) == " catdog"
    assert history[1].directives == {(origin.serial, 0): RetroKind.REMOVE_SPACE}
    history.undo()
    assert render(history) == " cat dog"
    assert history[1].directives == {}


def test_retro_offset_reaches_further_back():
    history = History(10)
    history.push(text_unit("KAT", "cat"))
    history.push(text_unit("TKOG", "dog"))
    history.push(retro_unit("KPA*D", RetroKind.CAPITALIZE_PREV_WORD, offset=2))
    assert render(history) == " Cat dog"


def test_spans_track_rendering():
    history = History(10)
    history.push(text_unit("KAER", "carry"))
    history.push(TranslatedUnit(strokes=parse_strokes("-S"), actions=(Text(literal="s", attach_before=True, orthography=True),)))
    assert render(history) == " carries"
    assert history[1].span == RenderedSpan(erase=1, text="ies")


@pytest.mark.parametrize(
    "old,new,expected",
    (
        ("hello world", "hello there", Correction(backspaces=5, insert="there")),
        ("", " hello", Correction(insert=" hello")),
        (" hello", "", Correction(backspaces=6)),
        (" carry", " carries", Correction(backspaces=1, insert="ies")),
        (" same", " same", Correction()),
    ),
)
def test_correction_is_minimal(old: str, new: str, expected: Correction):
    assert correct(old, new) == expected


def test_empty_correction():
    assert Correction().is_empty
    assert not Correction(raw_keys=("Return",)).is_empty
