# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging

from .history import History

logger = logging.getLogger(__name__)


class RetroactiveResolver:
    """Turns the retroactive actions in history into directives on their target entries.

    Every pass starts from scratch, so resolving twice gives the same directives and an
    origin removed by undo leaves nothing behind.
    """

    def resolve(self, history: History):
        for entry in history:
            entry.directives.clear()
        for origin_index in range(len(history) - 1, -1, -1):
            origin = history[origin_index]
            for index, retro in enumerate(origin.unit.retro):
                target = history.locate(origin_index, retro.target_offset)
                if target is None:
                    logger.debug("%s from entry %d reaches past history; ignoring", retro.kind.name, origin.serial)
                    continue
                target.directives[(origin.serial, index)] = retro.kind
