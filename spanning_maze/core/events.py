from typing import Iterator, List, Tuple

# Event Types
EVT_VISIT = 0x02        # CellVisited(row, col)
EVT_CARVE = 0x03        # PassageOpened(row1, col1, row2, col2)
EVT_PATH_ADD = 0x04     # PathStep(row, col)
EVT_FRONTIER = 0x06     # FrontierAdded(row, col)

EVENT_NAMES = {
    EVT_VISIT: "CellVisited",
    EVT_CARVE: "PassageOpened",
    EVT_PATH_ADD: "PathStep",
    EVT_FRONTIER: "FrontierAdded",
}

Event = Tuple[int, Tuple[int, ...]]

class EventLog:
    """
    Ordered, in-memory record of every observable state change.
    The grid writes to it; presentation code reads it back through
    stream_events(), optionally from a cursor so it can follow a live run.
    """
    def __init__(self):
        self.events: List[Event] = []
        # Bumped by clear() and truncate() so readers holding a cursor can tell the log restarted
        self.epoch = 0

    def log_visit(self, row: int, col: int):
        self.events.append((EVT_VISIT, (row, col)))

    def log_carve(self, row1: int, col1: int, row2: int, col2: int):
        self.events.append((EVT_CARVE, (row1, col1, row2, col2)))

    def log_frontier(self, row: int, col: int):
        self.events.append((EVT_FRONTIER, (row, col)))

    def log_path_add(self, row: int, col: int):
        self.events.append((EVT_PATH_ADD, (row, col)))

    def stream_events(self, start: int = 0) -> Iterator[Event]:
        # Index-based so records appended while iterating are still delivered
        i = start
        while i < len(self.events):
            yield self.events[i]
            i += 1

    def count(self, type_code: int) -> int:
        return sum(1 for code, _ in self.events if code == type_code)

    def clear(self):
        self.events.clear()
        self.epoch += 1

    def truncate(self, length: int):
        """Drops every record after the first 'length'. Readers restart if anything went."""
        if length < len(self.events):
            del self.events[length:]
            self.epoch += 1

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
