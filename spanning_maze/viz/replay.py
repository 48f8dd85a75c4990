from typing import Iterator, List

from spanning_maze.core.events import EVT_CARVE, EVT_FRONTIER, EVT_PATH_ADD, EVT_VISIT, Event, EventLog
from spanning_maze.core.grid import Cell, Grid

class EventAdapter:
    """
    Rebuilds maze state on a display grid from an EventLog.
    This is the only way the presentation layer learns what the core did.

    A CellVisited record for a cell the generator already visited is taken
    to be a solver visit, since solving only starts after generation.
    """
    def __init__(self, grid: Grid, events: EventLog):
        if grid.event_writer is events:
            raise ValueError("Display grid must not write into the log it replays")
        self.grid = grid
        self.events = events
        self.cursor = 0
        self.epoch = events.epoch

        # Mock Solver interface
        self.visited_count = 0
        self.path: List[Cell] = []

    def restart(self):
        self.grid.reset()
        self.cursor = 0
        self.epoch = self.events.epoch
        self.visited_count = 0
        self.path = []

    def apply(self, event: Event):
        type_code, data = event

        if type_code == EVT_VISIT:
            row, col = data
            idx = self.grid.get_index(row, col)
            if self.grid.cells[idx] & Grid.VISITED:
                self.grid.cells[idx] |= Grid.SOLVER_VISITED
                self.visited_count += 1
            else:
                self.grid.cells[idx] = (self.grid.cells[idx] | Grid.VISITED) & ~Grid.FRONTIER

        elif type_code == EVT_CARVE:
            row1, col1, row2, col2 = data
            self.grid.open_passage((row1, col1), (row2, col2))

        elif type_code == EVT_FRONTIER:
            row, col = data
            self.grid.set_frontier(row, col)

        elif type_code == EVT_PATH_ADD:
            row, col = data
            self.grid.mark_path(row, col)
            self.path.append((row, col))

        else:
            raise ValueError(f"Unknown event type {type_code:#x}")

    def apply_pending(self) -> int:
        """Applies every record logged since the last call. Returns how many."""
        if self.epoch != self.events.epoch:
            # The log was cleared by a new run
            self.restart()
        applied = 0
        for event in self.events.stream_events(self.cursor):
            self.apply(event)
            applied += 1
        self.cursor += applied
        return applied

    def run(self, batch: int = 1) -> Iterator[str]:
        """Replays the remaining records, yielding after every 'batch' of them."""
        count = 0
        for event in self.events.stream_events(self.cursor):
            self.apply(event)
            self.cursor += 1
            count += 1
            if count % batch == 0:
                yield "Replay"

        yield "Done"
