import pytest

from notarius.steno.keys import StenoKey
from notarius.steno.stroke import parse_strokes
from notarius.translation.actions import DictionaryEntry, Text
from notarius.translation.dictionary import Dictionary
from notarius.translation.loader import parse_entries


@pytest.fixture
def dictionary():
    return Dictionary(
        parse_entries(
            {
                "H-L": "hello",
                "WORLD": "world",
                "H-L/WORLD": "hello world",
                "H-L/WORLD/-T": "hello world the",
                "RAEUS": "race",
                "TPRAOEUS": "fries",
                "TPRAOEU": "fry",
                "-Z": "{^s}",
                "-D": "{^ed}",
                "-G": "{^ing}",
                "-S": "{^s}",
            }
        )
    )


def outline(entry):
    return str(entry) if entry is not None else None


@pytest.mark.parametrize(
    "window,expected",
    (
        ("H-L", "H-L"),
        ("WORLD", "WORLD"),
        ("H-L/WORLD", "H-L/WORLD"),
        ("H-L/WORLD/-T", "H-L/WORLD/-T"),
        ("WORLD/H-L/WORLD", "H-L/WORLD"),
        ("-T/H-L", "H-L"),
        ("KAT", None),
    ),
)
def test_longest_suffix_wins(dictionary: Dictionary, window: str, expected):
    assert outline(dictionary.lookup(parse_strokes(window))) == expected


def test_lookup_only_tries_given_lengths(dictionary: Dictionary):
    window = parse_strokes("H-L/WORLD")
    assert outline(dictionary.lookup(window, [1])) == "WORLD"
    assert outline(dictionary.lookup(window, [2, 1])) == "H-L/WORLD"
    assert dictionary.lookup(window, [5]) is None


def test_longest_key(dictionary: Dictionary):
    assert dictionary.longest_key == 3


def test_suffix_folding(dictionary: Dictionary):
    entry = dictionary.lookup(parse_strokes("RAEUSZ"))
    assert entry.strokes == parse_strokes("RAEUSZ")
    assert entry.actions == (Text(literal="race"), Text(literal="s", attach_before=True, orthography=True))


def test_exact_entry_beats_folding(dictionary: Dictionary):
    entry = dictionary.lookup(parse_strokes("TPRAOEUS"))
    assert entry.actions == (Text(literal="fries"),)


def test_fold_order(dictionary: Dictionary):
    entry = dictionary.lookup(parse_strokes("RAEUSD"))
    assert entry.actions[-1] == Text(literal="ed", attach_before=True, orthography=True)


def test_fold_in_phrase(dictionary: Dictionary):
    entry = dictionary.lookup(parse_strokes("H-L/WORLD/-TS"))
    assert outline(entry) == "H-L/WORLD/-TS"
    assert entry.actions[-1] == Text(literal="s", attach_before=True, orthography=True)


def test_no_fold_without_suffix_entry():
    dictionary = Dictionary(parse_entries({"RAEUS": "race"}))
    assert dictionary.lookup(parse_strokes("RAEUSZ")) is None


def test_custom_suffix_keys():
    dictionary = Dictionary(parse_entries({"RAEUS": "race", "-Z": "{^s}"}), suffix_keys=[StenoKey.D_RIGHT])
    assert dictionary.lookup(parse_strokes("RAEUSZ")) is None


def test_later_entries_override(dictionary: Dictionary):
    dictionary.update([DictionaryEntry(strokes=parse_strokes("H-L"), actions=(Text(literal="hi"),))])
    assert dictionary.get(parse_strokes("H-L")).actions == (Text(literal="hi"),)


def test_membership(dictionary: Dictionary):
    assert parse_strokes("H-L/WORLD") in dictionary
    assert parse_strokes("H-L/-T") not in dictionary
    assert dictionary.could_begin(parse_strokes("H-L/WORLD"))
    assert not dictionary.could_begin(parse_strokes("WORLD/H-L"))


def test_lookup_is_pure(dictionary: Dictionary):
    window = parse_strokes("H-L/WORLD")
    first = dictionary.lookup(window)
    assert dictionary.lookup(window) == first
    assert len(dictionary) == 11
