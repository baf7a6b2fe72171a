"""Decoder for framed serial commands and dispatcher to their handlers.

Commands arrive as ``#KEY:CONTENT;;`` followed by CR or LF. Each decoded
command is handed to the handler registered for its key, and a non-empty
reply is sent back as ``@KEY:REPLY;;\\r\\n``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Protocol

from robocar.ringqueue import RingQueue

RX_QUEUE_SLOTS = 255
PARSE_BUFFER_SIZE = 256
RESPONSE_LIMIT = 127
FRAME_LIMIT = 255

_FRAME = re.compile(r"#([^:]+):([^;]+)")

CommandHandler = Callable[[str], str]


class SerialPort(Protocol):
    """Anything bytes can be written to."""

    def write(self, data: bytes) -> object: ...


class SerialMonitor:
    """Collects received characters, decodes command frames and answers them."""

    def __init__(self, port: SerialPort, subscribers: Mapping[str, CommandHandler]) -> None:
        self.port = port
        self.subscribers: dict[str, CommandHandler] = dict(subscribers)
        self._rx: RingQueue[str] = RingQueue(RX_QUEUE_SLOTS)
        self._parse: list[str] = []

    def receive(self, data: bytes | str) -> int:
        """Queue received characters; return how many fitted in the receive buffer."""
        text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
        accepted = 0
        for char in text:
            if not self._rx.push(char):
                break
            accepted += 1
        return accepted

    @property
    def pending(self) -> int:
        """Number of received characters not yet processed."""
        return len(self._rx)

    def run(self) -> bool:
        """Process one received character; return False if there was none."""
        if self._rx.is_empty():
            return False
        char = self._rx.pop()

        if char == "#":
            self._parse = [char]
            return True

        if len(self._parse) >= PARSE_BUFFER_SIZE:
            self._parse = []
            return True

        if char in "\r\n" and len(self._parse) >= 2 and self._parse[-2:] == [";", ";"]:
            self._dispatch("".join(self._parse))
            self._parse = []
            return True

        self._parse.append(char)
        return True

    def _dispatch(self, frame: str) -> None:
        match = _FRAME.match(frame)
        if match is None:
            return
        key, content = match.groups()
        handler = self.subscribers.get(key)
        if handler is None:
            return
        reply = (handler(content) or "")[:RESPONSE_LIMIT]
        if reply:
            message = f"@{key}:{reply};;\r\n"[:FRAME_LIMIT]
            self.port.write(message.encode("latin-1"))