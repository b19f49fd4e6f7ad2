# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import os.path

import msgspec


class Correction(msgspec.Struct, frozen=True, kw_only=True):
    backspaces: int = 0
    insert: str = ""
    raw_keys: tuple[str, ...] = ()

    @property
    def is_empty(self):
        return not (self.backspaces or self.insert or self.raw_keys)


def correct(old: str, new: str, raw_keys: tuple[str, ...] = ()) -> Correction:
    """The smallest edit turning old into new: erase back to the shared prefix, then type the rest."""
    shared = len(os.path.commonprefix([old, new]))
    return Correction(backspaces=len(old) - shared, insert=new[shared:], raw_keys=raw_keys)
