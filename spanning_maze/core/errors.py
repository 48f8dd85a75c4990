class MazeError(Exception):
    """Base class for every error raised by spanning_maze."""


class InvalidSize(MazeError, ValueError):
    """Requested grid is not a positive perfect square."""


class NotAdjacent(MazeError, ValueError):
    """A passage was requested between cells that do not share a border."""


class InternalConsistencyError(MazeError, RuntimeError):
    """
    A generator or solver invariant was broken.
    These are programming errors and are never recovered from.
    """


class NoVisitedNeighbor(InternalConsistencyError):
    """A Prim's frontier cell had no visited neighbour to connect to."""


class DisconnectedMaze(InternalConsistencyError):
    """The exit cannot be reached from the entrance over open passages."""


class NotSolved(MazeError, RuntimeError):
    """The shortest path was queried before a solve run completed."""
