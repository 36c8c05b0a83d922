"""
Shared Domain Constants.

Central location for timing values, defaults and spoken text used across
the dispatcher and the views.
"""

# =============================================================================
# Flashcard Defaults
# =============================================================================

DEFAULT_CATEGORY = "General"
DEFAULT_DIFFICULTY_LEVEL = 1

# Category filter value meaning "no filter"
ALL_CATEGORIES = "all"

# Categories offered by the creator (spoken names map 1:1, lower-cased)
CREATOR_CATEGORIES = ("General", "Language", "Science", "History", "Math")


# =============================================================================
# Recognition Timing
# =============================================================================

# Delay before restarting recognition after a transient error
RECOGNITION_RESTART_DELAY_SECONDS = 1.0


# =============================================================================
# Speech Output
# =============================================================================

SPEECH_RATE = 0.9


# =============================================================================
# Spoken Messages (Single Source of Truth)
# =============================================================================


class SpokenMessages:
    """Centralized announcements for TTS output.

    All fixed sentences the application speaks are defined here to keep
    the voice interface consistent.
    """

    # Dispatcher
    LISTENING = "Listening for voice commands"
    RECOGNITION_STARTED = 'Voice recognition started. Say "create new flashcard" to begin'
    RECOGNITION_STOPPED = "Voice recognition stopped"
    HELP = (
        "Voca-Flash help. "
        'On the dashboard say "create new flashcard", "view cards", "study", or "statistics". '
        'While viewing or studying say "next card", "previous card", "flip card", or "read card". '
        'In study mode say "start quiz", then "correct" or "incorrect" for each card, '
        'and "end quiz" for your score. Say "go home" to return to the dashboard '
        'and "stop listening" to turn off voice commands.'
    )

    # Navigation boundaries
    LAST_CARD = "This is the last card"
    FIRST_CARD = "This is the first card"
    NO_CARDS = "There are no flashcards to show"

    # Creator
    CREATOR_HELP = (
        'Say "front" or "question", then speak the question. '
        'Say "answer", then speak the answer. '
        'Say a category name like "science" to set the category. '
        'Say "save" to create the flashcard or "cancel" to go back.'
    )
    MISSING_CONTENT = "Please provide both front and back content"
    SPEAK_FRONT = "Speak the question now"
    SPEAK_BACK = "Speak the answer now"
    CREATED = "Flashcard created successfully"
    CREATE_FAILED = "Error creating flashcard"

    # Viewer
    VIEWER_HELP = "Voice commands: next card, previous card, flip card, read card, delete card, help"
    DELETE_CANCELLED = "Delete cancelled"
    DELETED = "Flashcard deleted successfully"
    DELETE_FAILED = "Error deleting flashcard"

    # Study mode
    STUDY_HELP = (
        "Voice commands: next card, previous card, flip card, read card, start quiz, "
        "correct, incorrect, end quiz"
    )
    QUIZ_STARTED = "Quiz mode started. Answer each card as correct or incorrect"
    MARKED_CORRECT = "Correct! Moving to next card"
    MARKED_INCORRECT = "Incorrect. Moving to next card"

    # Dashboard
    LOAD_FAILED = "Error loading flashcards"
    STATISTICS_FAILED = "Error loading statistics"
