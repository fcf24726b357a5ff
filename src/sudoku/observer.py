"""Cell change notifications: the observer protocol, per-cell notifier and the auto-solve listener."""

from typing import TYPE_CHECKING, Dict, List, Tuple

if TYPE_CHECKING:
    from .grid import Grid

Position = Tuple[int, int]


class CellObserver:
    """
    Receives change notifications from the cells it is subscribed to.
    Every hook is a no-op by default so observers only override what they need.
    """

    def on_single_candidate(self, row: int, col: int, candidate: int) -> None:
        pass

    def on_cell_solved(self, row: int, col: int, value: int) -> None:
        pass

    def on_candidate_eliminated(self, row: int, col: int, candidate: int, remaining_count: int) -> None:
        pass


class CellNotifier:
    """Ordered observer list owned by a single cell."""

    def __init__(self) -> None:
        self.observers: List[CellObserver] = []

    def add_observer(self, observer: CellObserver) -> None:
        if observer is None:
            return
        self.observers.append(observer)

    def remove_observer(self, observer: CellObserver) -> None:
        for i, obs in enumerate(self.observers):
            if obs is observer:
                del self.observers[i]
                return

    def has_observers(self) -> bool:
        return bool(self.observers)

    def clear_observers(self) -> None:
        self.observers = []

    # Iterate over a snapshot: an observer may subscribe or unsubscribe others mid-dispatch.
    def notify_single_candidate(self, row: int, col: int, candidate: int) -> None:
        for observer in list(self.observers):
            observer.on_single_candidate(row, col, candidate)

    def notify_cell_solved(self, row: int, col: int, value: int) -> None:
        for observer in list(self.observers):
            observer.on_cell_solved(row, col, value)

    def notify_candidate_eliminated(self, row: int, col: int, candidate: int, remaining_count: int) -> None:
        for observer in list(self.observers):
            observer.on_candidate_eliminated(row, col, candidate, remaining_count)


class AutoSolveObserver(CellObserver):
    """
    Queues cells that were reduced to a single candidate so a driver can place them.
    The observer never writes to the grid itself; `solve` drains the queue.
    """

    def __init__(self) -> None:
        self.enabled = True
        self.cells_to_solve: Dict[Position, int] = {}
        self.solution_count = 0

    def on_single_candidate(self, row: int, col: int, candidate: int) -> None:
        if not self.enabled:
            return
        self.cells_to_solve[(row, col)] = candidate

    def on_cell_solved(self, row: int, col: int, value: int) -> None:
        if not self.enabled:
            return
        self.solution_count += 1
        self.cells_to_solve.pop((row, col), None)

    def seed(self, grid: "Grid") -> int:
        """Queue every unsolved cell that already holds exactly one candidate."""
        if not self.enabled:
            return 0
        queued = 0
        for cell in grid.cells:
            if not cell.is_solved() and cell.candidate_count() == 1:
                self.cells_to_solve[(cell.row, cell.col)] = cell.candidates[0]
                queued += 1
        return queued

    def pop_pending(self) -> List[Tuple[Position, int]]:
        """Return queued placements in row-major order and empty the queue."""
        pending = sorted(self.cells_to_solve.items())
        self.cells_to_solve = {}
        return pending

    def clear(self) -> None:
        self.cells_to_solve = {}

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
