# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import operator
import pathlib
import typing

import cattrs
import msgspec

from .commontypes import SettingsError
from .steno.keys import StenoKey
from .steno.stroke import Stroke, parse_stroke
from .translation.orthography import ORTHOGRAPHY_RULES, OrthographyRule

settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))
settings_converter.register_unstructure_hook(Stroke, operator.attrgetter("rtfcre"))
settings_converter.register_structure_hook(Stroke, lambda v, _: parse_stroke(v))
settings_converter.register_unstructure_hook(StenoKey, operator.attrgetter("value"))
settings_converter.register_structure_hook(StenoKey, lambda v, _: StenoKey.from_label(v))
settings_converter.register_unstructure_hook(OrthographyRule, msgspec.structs.asdict)
settings_converter.register_structure_hook(OrthographyRule, lambda v, _: msgspec.convert(v, OrthographyRule))


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    dictionaries: list[pathlib.Path]
    max_phrase_length: int = 10
    history_size: int = 50
    context_chars: int = 100
    undo_strokes: list[Stroke] = dataclasses.field(default_factory=lambda: [parse_stroke("*")])
    suffix_keys: list[StenoKey] = dataclasses.field(
        default_factory=lambda: [StenoKey.Z_RIGHT, StenoKey.D_RIGHT, StenoKey.S_RIGHT, StenoKey.G_RIGHT]
    )
    orthography_rules: list[OrthographyRule] = dataclasses.field(default_factory=lambda: list(ORTHOGRAPHY_RULES))
    # None means the bundled word list
    orthography_words: typing.Optional[pathlib.Path] = None
    validate_orthography: bool = True

    def __post_init__(self):
        if self.max_phrase_length < 1:
            raise SettingsError("max_phrase_length must be at least 1")
        if self.history_size < self.max_phrase_length:
            raise SettingsError(
                f"history_size ({self.history_size}) must be at least max_phrase_length ({self.max_phrase_length})"
            )
        if self.context_chars < 0:
            raise SettingsError("context_chars cannot be negative")

    def resolve(self, path: pathlib.Path) -> pathlib.Path:
        """Relative paths in the settings file are relative to the file itself."""
        if path.is_absolute():
            return path
        return self._path.parent / path

    @property
    def dictionary_paths(self) -> list[pathlib.Path]:
        return [self.resolve(path) for path in self.dictionaries]

    @property
    def orthography_words_path(self) -> typing.Optional[pathlib.Path]:
        if self.orthography_words is None:
            return None
        return self.resolve(self.orthography_words)

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as out:
            json.dump(raw, out, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as f:
            raw = json.load(f)
        raw["_path"] = src
        return settings_converter.structure(raw, cls)

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "dictionaries": ["test_dictionary.json"],
                "max_phrase_length": 10,
                "history_size": 50,
                "context_chars": 100,
                "undo_strokes": ["*"],
                "suffix_keys": ["-Z", "-D", "-S", "-G"],
                "orthography_words": None,
                "validate_orthography": True,
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
