"""Qt bridge to compute hints in a worker thread."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesstutor.advisor.service import HintAdvisor
from chesstutor.core.errors import ChessError
from chesstutor.core.state import GameState
from chesstutor.settings import TutorSettings


class HintWorker(QObject):
    """Thread-affine worker that ranks hints on demand.

    Move it to a ``QThread`` and connect a queued signal to
    :meth:`request_hint`; results come back through :attr:`hint_ready`
    tagged with the caller's request id so stale answers can be dropped.
    """

    hint_ready = pyqtSignal(int, object)
    hint_error = pyqtSignal(int, str)

    __slots__ = ("_advisor",)

    def __init__(self, settings: TutorSettings | None = None) -> None:
        super().__init__()
        self._advisor = HintAdvisor(settings)

    @pyqtSlot(object, int)
    def request_hint(self, state_obj: object, request_id: int) -> None:
        """Rank hints for *state_obj* and emit the winner."""
        if not isinstance(state_obj, GameState):
            self.hint_error.emit(request_id, "Advisor received invalid game state")
            return

        try:
            hint = self._advisor.generate_hint(state_obj)
        except ChessError as exc:
            self.hint_error.emit(request_id, str(exc))
            return

        self.hint_ready.emit(request_id, hint)

    @pyqtSlot(object)
    def set_settings(self, settings: TutorSettings) -> None:
        """Replace advisor settings (takes effect on the next request)."""
        self._advisor = HintAdvisor(settings)
