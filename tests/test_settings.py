import json
import pathlib

import pytest

from notarius.commontypes import SettingsError
from notarius.settings import Settings
from notarius.steno.keys import StenoKey
from notarius.steno.stroke import parse_stroke
from notarius.translation.engine import TranslationEngine
from notarius.translation.loader import load_dictionaries
from notarius.translation.orthography import ORTHOGRAPHY_RULES
from notarius.translation.output import TextBuffer


def test_for_test_defaults():
    settings = Settings.for_test()
    assert settings.max_phrase_length == 10
    assert settings.history_size == 50
    assert settings.undo_strokes == [parse_stroke("*")]
    assert settings.suffix_keys == [StenoKey.Z_RIGHT, StenoKey.D_RIGHT, StenoKey.S_RIGHT, StenoKey.G_RIGHT]
    assert settings.orthography_rules == list(ORTHOGRAPHY_RULES)
    assert settings.orthography_words is None


def test_round_trip(tmp_path: pathlib.Path):
    path = tmp_path / "settings.json"
    settings = Settings.for_test()
    settings.undo_strokes = [parse_stroke("*"), parse_stroke("PWA*BG")]
    settings.save(path)
    raw = json.loads(path.read_text())
    assert raw["undo_strokes"] == ["*", "PWA*BG"]
    assert raw["suffix_keys"] == ["-Z", "-D", "-S", "-G"]
    assert "_path" not in raw
    loaded = Settings.load(path)
    assert loaded.undo_strokes == settings.undo_strokes
    assert loaded.orthography_rules == settings.orthography_rules
    assert loaded.dictionaries == settings.dictionaries


def test_load_minimal(tmp_path: pathlib.Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"dictionaries": ["main.json"], "max_phrase_length": 4, "history_size": 8}))
    settings = Settings.load(path)
    assert settings.max_phrase_length == 4
    assert settings.dictionary_paths == [tmp_path / "main.json"]
    assert settings.orthography_words_path is None


def test_history_must_hold_a_phrase():
    with pytest.raises(SettingsError):
        Settings(_path=pathlib.Path("settings.json"), dictionaries=[], max_phrase_length=10, history_size=5)


def test_engine_from_settings(tmp_path: pathlib.Path):
    (tmp_path / "main.json").write_text(json.dumps({"SHEUFR": "shiver", "-G": "{^ing}", "-Z": "{^s}", "KAT": "cat"}))
    (tmp_path / "settings.json").write_text(
        json.dumps({"dictionaries": ["main.json"], "suffix_keys": ["-G"], "undo_strokes": ["PWA*BG"]})
    )
    settings = Settings.load(tmp_path / "settings.json")
    engine = TranslationEngine.from_settings(settings, load_dictionaries(settings.dictionary_paths, suffix_keys=settings.suffix_keys))
    buffer = TextBuffer()
    for steno in ("SHEUFRG", "KATZ", "PWA*BG"):
        buffer.dispatch(engine.process(parse_stroke(steno)).correction)
    # -Z is not a suffix key here, so KATZ stays untranslated
    assert buffer.text == " shivering"
