from vocaflash.domain.constants import SpokenMessages
from vocaflash.domain.value_objects.transcript import RecognitionResult, TranscriptSegment
from vocaflash.views.creator import CreatorField


async def _open_creator(navigator):
    await navigator.navigate("/")
    return await navigator.navigate("/create")


async def test_question_arms_front_field(dispatcher, navigator, recognizer):
    view = await _open_creator(navigator)
    await recognizer.say("question")

    assert view.active_field is CreatorField.FRONT
    assert dispatcher.last_spoken == SpokenMessages.SPEAK_FRONT


async def test_armed_field_captures_next_transcript_with_case(dispatcher, navigator, recognizer):
    view = await _open_creator(navigator)
    await recognizer.say("front")
    await recognizer.say("What is the Capital of France")

    assert view.front == "What is the Capital of France"
    assert view.active_field is None
    assert dispatcher.transcript == ""


async def test_capture_ignores_interim_words(navigator, recognizer):
    view = await _open_creator(navigator)
    await recognizer.say("question")
    await recognizer.listener.on_result(
        RecognitionResult(
            segments=(
                TranscriptSegment("What is Python", is_final=True),
                TranscriptSegment(" uh um", is_final=False),
            )
        )
    )

    assert view.front == "What is Python"
    assert view.active_field is None


async def test_captured_text_is_not_matched_as_command(navigator, recognizer):
    view = await _open_creator(navigator)
    await recognizer.say("answer")
    await recognizer.say("save the whales")

    assert view.back == "save the whales"
    assert navigator.current_route == "/create"


async def test_back_cancels_instead_of_arming(navigator, recognizer):
    view = await _open_creator(navigator)
    await recognizer.say("back")

    assert view.active_field is None
    assert navigator.current_route == "/"


async def test_category_command(dispatcher, navigator, recognizer):
    view = await _open_creator(navigator)
    await recognizer.say("science")

    assert view.category == "Science"
    assert dispatcher.last_spoken == "Category set to Science"


async def test_save_without_content_is_rejected(dispatcher, navigator, recognizer, store):
    view = await _open_creator(navigator)
    view.set_front("Only a question")
    await recognizer.say("save")

    assert dispatcher.last_spoken == SpokenMessages.MISSING_CONTENT
    assert navigator.current_route == "/create"
    assert len(store.flashcards) == 3


async def test_save_creates_card_and_goes_back(dispatcher, navigator, recognizer, store):
    await _open_creator(navigator)
    await recognizer.say("question")
    await recognizer.say("Capital of Peru")
    await recognizer.say("answer")
    await recognizer.say("Lima")
    await recognizer.say("history")
    await recognizer.say("save")

    created = store.flashcards[0]
    assert (created.front, created.back, created.category) == ("Capital of Peru", "Lima", "History")
    assert navigator.current_route == "/"
    assert dispatcher.last_spoken == SpokenMessages.CREATED


async def test_save_failure_stays_on_creator(dispatcher, navigator, recognizer, store):
    view = await _open_creator(navigator)
    view.set_front("Q")
    view.set_back("A")
    store.fail_with = "Failed to create flashcard"
    await recognizer.say("create")

    assert dispatcher.last_spoken == SpokenMessages.CREATE_FAILED
    assert navigator.current_route == "/create"
    assert view.front == "Q"


async def test_help(dispatcher, navigator, recognizer):
    await _open_creator(navigator)
    await recognizer.say("help")
    assert dispatcher.last_spoken == SpokenMessages.CREATOR_HELP
