import asyncio

from vocaflash.domain.constants import SpokenMessages
from vocaflash.domain.value_objects.recognition import ListeningState
from vocaflash.domain.value_objects.transcript import RecognitionResult, TranscriptSegment


# --- Listening ---


async def test_start_listening_acknowledges(dispatcher, recognizer, synthesizer):
    await dispatcher.start_listening()
    await dispatcher.wait_until_quiet()

    assert dispatcher.state is ListeningState.LISTENING
    assert recognizer.start_calls == 1
    assert synthesizer.spoken == [SpokenMessages.LISTENING]


async def test_start_listening_twice_is_noop(dispatcher, recognizer):
    await dispatcher.start_listening()
    await dispatcher.start_listening()
    assert recognizer.start_calls == 1


async def test_stop_listening(dispatcher, recognizer):
    await dispatcher.start_listening()
    await dispatcher.stop_listening()
    assert dispatcher.state is ListeningState.IDLE
    assert recognizer.stop_calls == 1


async def test_stop_listening_when_idle_is_noop(dispatcher, recognizer):
    await dispatcher.stop_listening()
    assert recognizer.stop_calls == 0


async def test_start_failure_is_treated_as_error(dispatcher, recognizer):
    recognizer.start_error = "not-allowed"
    await dispatcher.start_listening()

    assert not dispatcher.is_listening
    assert not dispatcher.restart_pending
    assert dispatcher.last_spoken is None


async def test_toggle_listening_announces(dispatcher):
    await dispatcher.toggle_listening()
    assert dispatcher.is_listening
    assert dispatcher.last_spoken == SpokenMessages.RECOGNITION_STARTED

    await dispatcher.toggle_listening()
    assert not dispatcher.is_listening
    assert dispatcher.last_spoken == SpokenMessages.RECOGNITION_STOPPED


# --- Recognition errors ---


async def test_no_speech_error_restarts_after_delay(dispatcher, recognizer):
    await dispatcher.start_listening()
    await recognizer.fail("no-speech")

    assert dispatcher.state is ListeningState.IDLE
    assert dispatcher.restart_pending

    await asyncio.sleep(0.05)
    assert dispatcher.is_listening
    assert recognizer.start_calls == 2


async def test_network_error_restarts(dispatcher, recognizer):
    await dispatcher.start_listening()
    await recognizer.fail("network")
    await asyncio.sleep(0.05)
    assert dispatcher.is_listening


async def test_fatal_error_stays_idle(dispatcher, recognizer):
    await dispatcher.start_listening()
    await recognizer.fail("not-allowed")
    await asyncio.sleep(0.05)

    assert dispatcher.state is ListeningState.IDLE
    assert recognizer.start_calls == 1


async def test_unknown_error_is_fatal(dispatcher, recognizer):
    await dispatcher.start_listening()
    await recognizer.fail("something-new")
    assert not dispatcher.restart_pending


async def test_stop_listening_cancels_pending_restart(dispatcher, recognizer):
    await dispatcher.start_listening()
    await recognizer.fail("no-speech")
    await dispatcher.stop_listening()
    await asyncio.sleep(0.05)

    assert not dispatcher.is_listening
    assert recognizer.start_calls == 1


async def test_error_after_stop_does_not_restart(dispatcher, recognizer):
    await dispatcher.start_listening()
    await dispatcher.stop_listening()
    await recognizer.fail("network")
    await asyncio.sleep(0.05)

    assert not dispatcher.is_listening
    assert not dispatcher.restart_pending
    assert recognizer.start_calls == 1


async def test_transient_start_failure_is_retried(dispatcher, recognizer):
    recognizer.start_error = "network"
    await dispatcher.start_listening()
    assert dispatcher.restart_pending

    recognizer.start_error = None
    await asyncio.sleep(0.05)
    assert dispatcher.is_listening
    assert recognizer.start_calls == 2


async def test_recognition_end_goes_idle(dispatcher, recognizer):
    await dispatcher.start_listening()
    await recognizer.listener.on_end()
    assert dispatcher.state is ListeningState.IDLE


# --- Speech output ---


async def test_speak_last_call_wins(dispatcher, synthesizer):
    dispatcher.speak("first")
    dispatcher.speak("second")
    await dispatcher.wait_until_quiet()

    assert synthesizer.spoken == ["second"]
    assert synthesizer.cancel_calls == 2
    assert dispatcher.last_spoken == "second"


async def test_speaking_flag_tracks_utterance(dispatcher, synthesizer):
    synthesizer.hold = asyncio.Event()
    dispatcher.speak("hello")
    await asyncio.sleep(0)
    assert dispatcher.is_speaking

    synthesizer.hold.set()
    await dispatcher.wait_until_quiet()
    assert not dispatcher.is_speaking


async def test_speak_interrupts_utterance_in_progress(dispatcher, synthesizer):
    synthesizer.hold = asyncio.Event()
    dispatcher.speak("a long sentence")
    await asyncio.sleep(0)

    synthesizer.hold = None
    dispatcher.speak("short")
    await dispatcher.wait_until_quiet()

    assert synthesizer.spoken == ["a long sentence", "short"]
    assert not dispatcher.is_speaking


async def test_announce_help_speaks_fixed_script(dispatcher):
    dispatcher.announce_help()
    assert dispatcher.last_spoken == SpokenMessages.HELP


# --- Transcript and handler slot ---


async def test_final_result_reaches_handler_lowercased(dispatcher, recognizer):
    received = []

    async def handler(text):
        received.append(text)

    dispatcher.register_command_handler(handler)
    await recognizer.say("Next Card")

    assert received == ["next card"]
    assert dispatcher.transcript == "Next Card"


async def test_interim_result_updates_transcript_only(dispatcher, recognizer):
    received = []

    async def handler(text):
        received.append(text)

    dispatcher.register_command_handler(handler)
    await recognizer.listener.on_result(RecognitionResult.interim("nex"))

    assert dispatcher.transcript == "nex"
    assert received == []


async def test_mixed_result_forwards_final_segments(dispatcher, recognizer):
    received = []

    async def handler(text):
        received.append(text)

    dispatcher.register_command_handler(handler)
    result = RecognitionResult(segments=(
        TranscriptSegment(text="Flip card", is_final=True),
        TranscriptSegment(text=" now", is_final=False),
    ))
    await recognizer.listener.on_result(result)

    assert dispatcher.transcript == "Flip card now"
    assert received == ["flip card"]


async def test_register_replaces_previous_handler(dispatcher, recognizer):
    received = []

    async def first(text):
        received.append(("first", text))

    async def second(text):
        received.append(("second", text))

    dispatcher.register_command_handler(first)
    dispatcher.register_command_handler(second)
    await recognizer.say("hello")

    assert received == [("second", "hello")]


async def test_stale_registration_cannot_clear_new_handler(dispatcher, recognizer):
    received = []

    async def first(text):
        received.append("first")

    async def second(text):
        received.append("second")

    old = dispatcher.register_command_handler(first)
    new = dispatcher.register_command_handler(second)
    old.cancel()

    assert not old.is_active
    assert new.is_active
    await recognizer.say("hello")
    assert received == ["second"]


async def test_unregistered_transcripts_are_dropped(dispatcher, recognizer):
    received = []

    async def handler(text):
        received.append(text)

    dispatcher.register_command_handler(handler)
    dispatcher.unregister_command_handler()
    await recognizer.say("next")

    assert received == []
    assert not dispatcher.has_command_handler


async def test_handler_registered_mid_burst_receives_next_event(dispatcher, recognizer):
    received = []

    async def replacement(text):
        received.append(("replacement", text))

    async def original(text):
        received.append(("original", text))
        dispatcher.register_command_handler(replacement)
        await asyncio.sleep(0)

    dispatcher.register_command_handler(original)
    await asyncio.gather(recognizer.say("delete"), recognizer.say("yes"))

    assert received == [("original", "delete"), ("replacement", "yes")]


async def test_handler_exception_does_not_propagate(dispatcher, recognizer):
    async def broken(text):
        raise ValueError("boom")

    dispatcher.register_command_handler(broken)
    await recognizer.say("next")
    assert dispatcher.has_command_handler


async def test_clear_transcript(dispatcher, recognizer):
    await recognizer.say("something")
    dispatcher.clear_transcript()
    assert dispatcher.transcript == ""


async def test_close_stops_everything(dispatcher, recognizer):
    await dispatcher.start_listening()
    await dispatcher.close()

    assert not dispatcher.is_listening
    assert not dispatcher.has_command_handler
