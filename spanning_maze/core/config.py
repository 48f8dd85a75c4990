from typing import Optional

# Generation algorithms accepted by Maze.generate and the CLI
ALGORITHMS = ("prim", "kruskal", "dfs")
DEFAULT_ALGORITHM = "prim"

# Grid sizes offered by the web page this tool grew out of, with the delay
# (seconds) between animation steps used for each one.
SIZE_PRESETS = {
    9: 0.5,
    25: 0.2,
    100: 0.04,
    625: 0.005,
}

def default_pace(cell_count: int, override: Optional[float] = None) -> float:
    """
    Seconds to wait between suspension points when animating.
    Unknown sizes fall back to the preset of the nearest smaller size.
    """
    if override is not None:
        if override < 0:
            raise ValueError(f"Pace must be >= 0, got {override}")
        return override
    if cell_count in SIZE_PRESETS:
        return SIZE_PRESETS[cell_count]
    smaller = [size for size in SIZE_PRESETS if size <= cell_count]
    if not smaller:
        return SIZE_PRESETS[min(SIZE_PRESETS)]
    return SIZE_PRESETS[max(smaller)]
