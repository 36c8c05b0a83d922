"""Console speech adapters: typed lines in, printed announcements out.

Stand-ins for a microphone and a speaker so the voice client runs in a
terminal. Each typed line is one finalized recognition result.
"""

import asyncio
import logging
import sys
import threading
from collections.abc import Awaitable, Callable
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from vocaflash.domain.constants import SPEECH_RATE
from vocaflash.domain.value_objects.recognition import RecognitionErrorKind
from vocaflash.domain.value_objects.transcript import RecognitionResult
from vocaflash.ports.speech import RecognitionError, RecognitionListener

logger = logging.getLogger(__name__)

# Seconds per word at SPEECH_RATE 1.0 when simulating utterance length
SECONDS_PER_WORD = 0.3


class ConsoleSpeechRecognizer:
    """
    SpeechRecognizer reading typed lines from a text stream.

    A daemon thread reads the stream so a pending readline never blocks
    interpreter exit. While recognition is off, typed lines go to
    `on_idle_line` (if set) instead of the listener.

    - empty line: reported as a no-speech error
    - end of input: reported as the end of recognition, then `closed` is set
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        on_idle_line: Callable[[str], Awaitable[None]] | None = None,
    ) -> None:
        self._stream = stream or sys.stdin
        self.on_idle_line = on_idle_line
        self._listener: RecognitionListener | None = None
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._reader: threading.Thread | None = None
        self._pump_task: asyncio.Task | None = None
        self._active = False
        self.closed = asyncio.Event()

    def attach(self, listener: RecognitionListener) -> None:
        self._listener = listener

    @property
    def is_active(self) -> bool:
        return self._active

    async def start(self) -> None:
        if self.closed.is_set():
            raise RecognitionError(RecognitionErrorKind.AUDIO_CAPTURE, "Input stream is closed")
        self._ensure_reader()
        self._active = True

    async def stop(self) -> None:
        self._active = False

    async def close(self) -> None:
        self._active = False
        if self._pump_task is not None and not self._pump_task.done():
            self._pump_task.cancel()
        self.closed.set()

    def _ensure_reader(self) -> None:
        if self._pump_task is not None:
            return
        loop = asyncio.get_running_loop()
        self._reader = threading.Thread(
            target=self._read_lines, args=(loop, self._queue), name="console-recognizer", daemon=True
        )
        self._reader.start()
        self._pump_task = loop.create_task(self._pump(), name="console-recognizer-pump")

    def _read_lines(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
        try:
            for line in iter(self._stream.readline, ""):
                loop.call_soon_threadsafe(queue.put_nowait, line)
            loop.call_soon_threadsafe(queue.put_nowait, None)
        except RuntimeError:
            # Event loop already closed
            return

    async def _pump(self) -> None:
        while True:
            line = await self._queue.get()
            if line is None:
                self._active = False
                if self._listener is not None:
                    await self._listener.on_end()
                self.closed.set()
                return

            text = line.strip()
            if not self._active:
                if self.on_idle_line is not None:
                    await self.on_idle_line(text)
                continue
            if self._listener is None:
                continue

            if not text:
                self._active = False
                await self._listener.on_error(RecognitionErrorKind.NO_SPEECH)
            else:
                await self._listener.on_result(RecognitionResult.final(text))


class ConsoleSpeechSynthesizer:
    """
    SpeechSynthesizer printing each utterance to a rich console.

    With `simulate_duration`, speak() also waits roughly as long as the
    sentence would take to say, so cancellation by a newer utterance can be
    observed.
    """

    def __init__(self, console: Console | None = None, simulate_duration: bool = False) -> None:
        self._console = console or Console()
        self._simulate_duration = simulate_duration
        self._speaking = False

    async def speak(self, text: str) -> None:
        self._speaking = True
        try:
            self._console.print(f"[bold cyan]🔊 {escape(text)}[/bold cyan]")
            if self._simulate_duration:
                words = len(text.split())
                await asyncio.sleep(words * SECONDS_PER_WORD / SPEECH_RATE)
        finally:
            self._speaking = False

    def cancel(self) -> None:
        if self._speaking:
            logger.debug("Utterance interrupted")
