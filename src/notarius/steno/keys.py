# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum
import typing


class Side(enum.Enum):
    LEFT = enum.auto()
    CENTER = enum.auto()
    RIGHT = enum.auto()


class StenoKey(enum.Enum):
    """Keys of the English stenotype layout, declared in steno order.

    The value is the key's label; left-bank keys carry a trailing dash and right-bank
    keys a leading one, so that S- and -S can be told apart.
    """

    NUMBER_BAR = "#"
    S_LEFT = "S-"
    T_LEFT = "T-"
    K_LEFT = "K-"
    P_LEFT = "P-"
    W_LEFT = "W-"
    H_LEFT = "H-"
    R_LEFT = "R-"
    A = "A-"
    O = "O-"
    STAR = "*"
    E = "-E"
    U = "-U"
    F_RIGHT = "-F"
    R_RIGHT = "-R"
    P_RIGHT = "-P"
    B_RIGHT = "-B"
    L_RIGHT = "-L"
    G_RIGHT = "-G"
    T_RIGHT = "-T"
    S_RIGHT = "-S"
    D_RIGHT = "-D"
    Z_RIGHT = "-Z"

    @property
    def letter(self) -> str:
        return self.value.strip("-")

    @property
    def order(self) -> int:
        return KEY_ORDER[self]

    @property
    def side(self) -> Side:
        if self.value.endswith("-"):
            return Side.LEFT
        if self.value.startswith("-"):
            return Side.RIGHT
        # the number bar sorts with the left bank
        return Side.LEFT if self is StenoKey.NUMBER_BAR else Side.CENTER

    @property
    def digit(self) -> typing.Optional[str]:
        return DIGITS.get(self)

    def numeral_label(self) -> str:
        """The label this key has when the number bar is held."""
        digit = self.digit
        if digit is None:
            return self.value
        return f"-{digit}" if self.side is Side.RIGHT else f"{digit}-"

    @classmethod
    def from_label(cls, label: str) -> "StenoKey":
        try:
            return cls(label)
        except ValueError:
            pass
        for key in cls:
            if key.digit is not None and key.numeral_label() == label:
                return key
        raise ValueError(f"{label!r} is not a steno key")


KEY_ORDER = {key: index for index, key in enumerate(StenoKey)}
STENO_ORDER = tuple(StenoKey)
# first key that can only be reached after a hyphen
RIGHT_BANK_START = StenoKey.E.order

DIGITS = {
    StenoKey.S_LEFT: "1",
    StenoKey.T_LEFT: "2",
    StenoKey.P_LEFT: "3",
    StenoKey.H_LEFT: "4",
    StenoKey.A: "5",
    StenoKey.O: "0",
    StenoKey.F_RIGHT: "6",
    StenoKey.P_RIGHT: "7",
    StenoKey.L_RIGHT: "8",
    StenoKey.T_RIGHT: "9",
}
