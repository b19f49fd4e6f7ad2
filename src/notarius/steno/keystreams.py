# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import logging
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, cast

import trio

from .stroke import Stroke, StrokeError, parse_stroke

if TYPE_CHECKING:
    from ..translation.engine import TranslationEngine, TranslationOutput
    from ..translation.output import CommandExecutor, Dispatcher

logger = logging.getLogger(__name__)


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: split raw lines into strokes and parse them, dropping anything unparseable
class ParseStrokes(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[str], sink: trio.MemorySendChannel[Stroke]):
        async with aclosing(source), aclosing(sink):
            async for raw in source:
                for part in raw.strip().split("/"):
                    if not part:
                        continue
                    try:
                        stroke = parse_stroke(part)
                    except StrokeError:
                        logger.warning("Ignoring invalid stroke %r", part)
                        continue
                    await sink.send(stroke)


# stage 2-4: translate each stroke to completion before taking the next
class Translate(Section):
    def __init__(self, engine: TranslationEngine):
        self.engine = engine

    async def pump(self, source: trio.MemoryReceiveChannel[Stroke], sink: trio.MemorySendChannel[TranslationOutput]):
        async with aclosing(source), aclosing(sink):
            async for stroke in source:
                await sink.send(self.engine.process(stroke))


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_strokestream(raw_source: AsyncIterable[str], engine: TranslationEngine):
    async with pump_all(raw_source, ParseStrokes(), Translate(engine)) as outputs:
        yield cast(trio.MemoryReceiveChannel["TranslationOutput"], outputs)


async def dispatch_all(
    outputs: AsyncIterable[TranslationOutput],
    dispatcher: Dispatcher,
    executor: CommandExecutor,
):
    async for output in outputs:
        if not output.correction.is_empty:
            dispatcher.dispatch(output.correction)
        for command in output.commands:
            executor.execute(command)
