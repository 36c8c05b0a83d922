"""Voice-driven screens and the navigator that mounts them."""

from vocaflash.views.base import HOME_ROUTE, View
from vocaflash.views.creator import CreatorField, FlashcardCreatorView
from vocaflash.views.dashboard import DashboardView
from vocaflash.views.deck import CardDeckView
from vocaflash.views.navigator import ROUTES, Navigator, UnknownRouteError
from vocaflash.views.study import StudyModeView
from vocaflash.views.viewer import FlashcardViewerView

__all__ = [
    "HOME_ROUTE",
    "ROUTES",
    "CardDeckView",
    "CreatorField",
    "DashboardView",
    "FlashcardCreatorView",
    "FlashcardViewerView",
    "Navigator",
    "StudyModeView",
    "UnknownRouteError",
    "View",
]
