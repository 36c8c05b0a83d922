import asyncio
import io

from rich.console import Console

from vocaflash.adapters.console_speech import ConsoleSpeechRecognizer, ConsoleSpeechSynthesizer
from vocaflash.domain.constants import SpokenMessages
from vocaflash.domain.services.command_dispatcher import CommandDispatcher


def _console():
    return Console(file=io.StringIO(), force_terminal=False, width=120)


async def test_typed_lines_reach_handler_until_end_of_input():
    recognizer = ConsoleSpeechRecognizer(stream=io.StringIO("Next Card\nflip\n"))
    console = _console()
    dispatcher = CommandDispatcher(recognizer, ConsoleSpeechSynthesizer(console))
    received = []

    async def handler(text):
        received.append(text)

    dispatcher.register_command_handler(handler)
    await dispatcher.start_listening()
    await asyncio.wait_for(recognizer.closed.wait(), timeout=2)

    assert received == ["next card", "flip"]
    assert not dispatcher.is_listening
    await dispatcher.close()


async def test_empty_line_is_no_speech():
    recognizer = ConsoleSpeechRecognizer(stream=io.StringIO("\n"))
    errors = []

    class Listener:
        async def on_result(self, result):
            pass

        async def on_error(self, kind):
            errors.append(kind)

        async def on_end(self):
            pass

    recognizer.attach(Listener())
    await recognizer.start()
    await asyncio.wait_for(recognizer.closed.wait(), timeout=2)

    assert errors == ["no-speech"]


async def test_lines_while_idle_go_to_idle_callback():
    idle_lines = []

    async def on_idle_line(line):
        idle_lines.append(line)

    recognizer = ConsoleSpeechRecognizer(stream=io.StringIO("first\nsecond\n"), on_idle_line=on_idle_line)
    await recognizer.start()
    await recognizer.stop()
    await asyncio.wait_for(recognizer.closed.wait(), timeout=2)

    assert idle_lines == ["first", "second"]


async def test_synthesizer_prints_utterance():
    console = _console()
    synthesizer = ConsoleSpeechSynthesizer(console)
    await synthesizer.speak(SpokenMessages.DELETED)
    assert SpokenMessages.DELETED in console.file.getvalue()


async def test_restarting_reuses_single_reader():
    recognizer = ConsoleSpeechRecognizer(stream=io.StringIO("one\ntwo\n"))
    results = []

    class Listener:
        async def on_result(self, result):
            results.append(result.final_text)

        async def on_error(self, kind):
            pass

        async def on_end(self):
            pass

    recognizer.attach(Listener())
    await recognizer.start()
    await recognizer.stop()
    await recognizer.start()
    await asyncio.wait_for(recognizer.closed.wait(), timeout=2)

    assert results == ["one", "two"]
