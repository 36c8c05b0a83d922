"""Screen routing: one mounted view at a time."""

import logging

from vocaflash.domain.services.command_dispatcher import CommandDispatcher
from vocaflash.ports.flashcard_service import FlashcardService
from vocaflash.views.base import HOME_ROUTE, View
from vocaflash.views.creator import FlashcardCreatorView
from vocaflash.views.dashboard import DashboardView
from vocaflash.views.study import StudyModeView
from vocaflash.views.viewer import FlashcardViewerView

logger = logging.getLogger(__name__)

ROUTES: dict[str, type[View]] = {
    DashboardView.route: DashboardView,
    FlashcardCreatorView.route: FlashcardCreatorView,
    FlashcardViewerView.route: FlashcardViewerView,
    StudyModeView.route: StudyModeView,
}


class UnknownRouteError(ValueError):
    def __init__(self, route: str):
        self.route = route
        super().__init__(f"Unknown route: {route}")


class Navigator:
    """
    Mounts a fresh view per navigation and unmounts the previous one.

    Every navigation creates a new view instance, so view-local state
    (index, quiz score, form fields) starts over like a page load.
    """

    def __init__(self, dispatcher: CommandDispatcher, store: FlashcardService) -> None:
        self._dispatcher = dispatcher
        self._store = store
        self._history: list[str] = []
        self.current_view: View | None = None

    @property
    def current_route(self) -> str | None:
        return self.current_view.route if self.current_view is not None else None

    async def navigate(self, route: str) -> View:
        """Unmount the current view and mount the one for route."""
        view_class = ROUTES.get(route)
        if view_class is None:
            raise UnknownRouteError(route)

        if self.current_view is not None:
            self._history.append(self.current_view.route)
            await self.current_view.unmount()

        view = view_class(self._dispatcher, self._store, self)
        self.current_view = view
        logger.info(f"Navigated to {route}")
        await view.mount()
        return view

    async def back(self) -> View:
        """Return to the previous screen, or the dashboard without history."""
        route = self._history.pop() if self._history else HOME_ROUTE
        leaving = self.current_view is not None
        view = await self.navigate(route)
        # navigate() pushed the screen we just left; going back drops it
        if leaving:
            self._history.pop()
        return view

    async def close(self) -> None:
        if self.current_view is not None:
            await self.current_view.unmount()
            self.current_view = None
        self._history.clear()
