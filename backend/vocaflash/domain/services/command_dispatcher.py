"""
Voice Command Dispatcher.

Mediates between the continuous speech-recognition stream and whichever
view currently interprets commands.

States:
- IDLE → LISTENING on start_listening
- LISTENING → IDLE on stop_listening, a fatal recognition error, or the
  recognizer ending on its own
- transient errors (no-speech, network) loop back to LISTENING through a
  delayed restart

Handler slot:
- exactly one command handler is active; registering replaces the previous
  one and returns a HandlerRegistration token
- a token only clears the slot while its handler is still the active one
- handler invocations are serialized and the handler is looked up at
  delivery time, so a handler registered while event N is being handled
  receives event N+1
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

from vocaflash.domain.constants import RECOGNITION_RESTART_DELAY_SECONDS, SpokenMessages
from vocaflash.domain.value_objects.recognition import ListeningState, RecognitionErrorKind
from vocaflash.domain.value_objects.transcript import RecognitionResult
from vocaflash.ports.speech import RecognitionError, SpeechRecognizer, SpeechSynthesizer

logger = logging.getLogger(__name__)

CommandHandler = Callable[[str], Awaitable[None]]


class HandlerRegistration:
    """Deregistration token returned by register_command_handler."""

    def __init__(self, dispatcher: "CommandDispatcher", handler: CommandHandler) -> None:
        self._dispatcher = dispatcher
        self.handler = handler

    @property
    def is_active(self) -> bool:
        """True while this registration owns the handler slot."""
        return self._dispatcher._registration is self

    def cancel(self) -> None:
        """Release the slot if this registration still holds it."""
        self._dispatcher._release(self)


class CommandDispatcher:
    """
    Owns the voice session state for one client.

    Holds the listening state, the current transcript, the speaking flag and
    the single command-handler slot. Implements RecognitionListener so the
    recognizer can deliver events to it directly.
    """

    def __init__(
        self,
        recognizer: SpeechRecognizer,
        synthesizer: SpeechSynthesizer,
        restart_delay: float = RECOGNITION_RESTART_DELAY_SECONDS,
    ) -> None:
        self._recognizer = recognizer
        self._synthesizer = synthesizer
        self._restart_delay = restart_delay

        self._state = ListeningState.IDLE
        self._registration: HandlerRegistration | None = None
        self._delivery_lock = asyncio.Lock()
        self._speech_task: asyncio.Task | None = None
        self._restart_task: asyncio.Task | None = None
        self._speaking = False

        self.transcript = ""
        self.final_transcript = ""
        self.last_spoken: str | None = None

        recognizer.attach(self)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> ListeningState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state is ListeningState.LISTENING

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    @property
    def has_command_handler(self) -> bool:
        return self._registration is not None

    @property
    def restart_pending(self) -> bool:
        return self._restart_task is not None and not self._restart_task.done()

    # =========================================================================
    # Listening
    # =========================================================================

    async def start_listening(self) -> None:
        """Begin continuous recognition (no-op if already listening)."""
        if self.is_listening:
            return

        self._cancel_restart()
        try:
            await self._recognizer.start()
        except RecognitionError as e:
            logger.warning(f"Recognition failed to start: {e}")
            # A requested start that fails transiently is retried like a dropped session
            self._handle_error(e.kind, restartable=True)
            return

        self._state = ListeningState.LISTENING
        self.transcript = ""
        logger.info("Listening started")
        self.speak(SpokenMessages.LISTENING)

    async def stop_listening(self) -> None:
        """End recognition (no-op if not listening).

        A pending automatic restart is cancelled either way. Results already
        in flight are not discarded.
        """
        self._cancel_restart()
        if not self.is_listening:
            return

        self._state = ListeningState.IDLE
        await self._recognizer.stop()
        logger.info("Listening stopped")

    async def toggle_listening(self) -> None:
        """Microphone-button behaviour: flip listening and announce it."""
        if self.is_listening:
            await self.stop_listening()
            self.speak(SpokenMessages.RECOGNITION_STOPPED)
        else:
            await self.start_listening()
            if self.is_listening:
                self.speak(SpokenMessages.RECOGNITION_STARTED)

    # =========================================================================
    # Speech output
    # =========================================================================

    def speak(self, text: str) -> None:
        """Speak text, cancelling whatever is being said (last call wins)."""
        self._synthesizer.cancel()
        if self._speech_task is not None and not self._speech_task.done():
            self._speech_task.cancel()

        self.last_spoken = text
        self._speech_task = asyncio.get_running_loop().create_task(
            self._utter(text), name="speak"
        )

    async def _utter(self, text: str) -> None:
        self._speaking = True
        try:
            await self._synthesizer.speak(text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Speech synthesis failed: {e}")
        finally:
            # A newer utterance owns the flag once this task was replaced
            if self._speech_task is asyncio.current_task():
                self._speaking = False

    async def wait_until_quiet(self) -> None:
        """Wait for the current utterance (if any) to finish or be cancelled."""
        task = self._speech_task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def announce_help(self) -> None:
        """Speak the fixed help script."""
        self.speak(SpokenMessages.HELP)

    # =========================================================================
    # Handler slot
    # =========================================================================

    def register_command_handler(self, handler: CommandHandler) -> HandlerRegistration:
        """Make handler the only recipient of finalized transcripts."""
        if self._registration is not None:
            logger.debug(
                "Replacing command handler",
                extra={"previous": getattr(self._registration.handler, "__qualname__", None)},
            )
        registration = HandlerRegistration(self, handler)
        self._registration = registration
        return registration

    def unregister_command_handler(self) -> None:
        """Clear the handler slot; transcripts are dropped until a new registration."""
        self._registration = None

    def _release(self, registration: HandlerRegistration) -> None:
        if self._registration is registration:
            self._registration = None

    def clear_transcript(self) -> None:
        self.transcript = ""
        self.final_transcript = ""

    # =========================================================================
    # RecognitionListener
    # =========================================================================

    async def on_result(self, result: RecognitionResult) -> None:
        """Update the displayed transcript and forward finalized text."""
        self.transcript = result.display_text

        command_text = result.command_text
        if not command_text.strip():
            return

        async with self._delivery_lock:
            registration = self._registration
            if registration is None:
                logger.debug("Dropping transcript (no command handler)")
                return
            # Finalized text of the event being delivered, original casing
            self.final_transcript = result.final_text
            try:
                await registration.handler(command_text)
            except Exception:
                logger.exception("Command handler failed", extra={"transcript": command_text})

    async def on_error(self, kind: RecognitionErrorKind | str) -> None:
        """Force IDLE; restart after a delay if a transient error cut off listening.

        Errors arriving after stop_listening (results in flight) never restart.
        """
        self._handle_error(kind, restartable=self.is_listening)

    def _handle_error(self, kind: RecognitionErrorKind | str, restartable: bool) -> None:
        self._state = ListeningState.IDLE
        error_kind = RecognitionErrorKind.parse(kind)

        if not restartable:
            logger.debug("Recognition error while idle", extra={"error": str(kind)})
        elif error_kind is not None and error_kind.is_transient():
            logger.info(
                "Transient recognition error, restarting",
                extra={"error": str(kind), "delay_seconds": self._restart_delay},
            )
            self._schedule_restart()
        else:
            logger.warning("Recognition stopped after error", extra={"error": str(kind)})

    async def on_end(self) -> None:
        """Recognition ended on its own (e.g. silence timeout)."""
        if self.is_listening:
            logger.info("Recognition ended")
        self._state = ListeningState.IDLE

    # =========================================================================
    # Restart / teardown
    # =========================================================================

    def _schedule_restart(self) -> None:
        self._cancel_restart()
        self._restart_task = asyncio.get_running_loop().create_task(
            self._restart_after_delay(), name="recognition-restart"
        )

    async def _restart_after_delay(self) -> None:
        await asyncio.sleep(self._restart_delay)
        self._restart_task = None
        await self.start_listening()

    def _cancel_restart(self) -> None:
        if self._restart_task is not None and not self._restart_task.done():
            self._restart_task.cancel()
        self._restart_task = None

    async def close(self) -> None:
        """Stop listening and cancel background tasks."""
        await self.stop_listening()
        self._synthesizer.cancel()
        if self._speech_task is not None and not self._speech_task.done():
            self._speech_task.cancel()
        await self.wait_until_quiet()
        self._registration = None
