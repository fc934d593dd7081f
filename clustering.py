"""Connected-component counting of active cells for star detection."""

import logging
from typing import Any, Iterator, List, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

# Directions for 8-connectivity, (dx, dy); (0, 0) is the cell itself
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


class CoverageError(AssertionError):
    """Traversal left the visited grid different from the occupancy grid.

    Always a bug in neighbor enumeration or bounds handling, never bad input.
    """


def iter_neighbors(x: int, y: int, width: int, height: int) -> Iterator[Tuple[int, int]]:
    """Yield the in-bounds 8-connected neighbors of (x, y)."""
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        # Negative indices would silently wrap around on numpy arrays and lists
        if 0 <= nx < width and 0 <= ny < height:
            yield nx, ny


def _as_occupancy(occupancy: Any) -> np.ndarray:
    try:
        arr = np.asarray(occupancy)
    except ValueError as exc:
        raise ValueError(f"Occupancy grid rows must all have the same length: {exc}") from exc
    if arr.dtype == object or arr.ndim != 2:
        raise ValueError("Occupancy grid must be a 2D grid of booleans")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"Occupancy grid must not be empty, got shape {arr.shape}")
    return arr.astype(bool, copy=False)


def mark_cluster(
    start: Tuple[int, int],
    occupancy: List[List[bool]],
    visited: List[List[bool]],
) -> int:
    """Mark every active cell 8-connected to start as visited.

    Uses an explicit stack instead of recursion so large blobs cannot hit the
    interpreter's recursion limit. Cells are marked before being pushed, so
    each one enters the frontier at most once.

    Args:
        start: (x, y) of an active, not yet visited cell
        occupancy: Occupancy rows, indexed [y][x]
        visited: Visited rows, indexed [y][x]; updated in place

    Returns:
        Number of cells marked by this traversal
    """
    height = len(occupancy)
    width = len(occupancy[0])

    x, y = start
    visited[y][x] = True
    to_visit = [start]
    marked = 1

    while to_visit:
        cx, cy = to_visit.pop()
        for nx, ny in iter_neighbors(cx, cy, width, height):
            if occupancy[ny][nx] and not visited[ny][nx]:
                visited[ny][nx] = True
                to_visit.append((nx, ny))
                marked += 1

    return marked


def count_clusters(
    occupancy: Any,
    return_visited: bool = False,
) -> Union[int, Tuple[int, np.ndarray]]:
    """Count maximal 8-connected regions of active cells.

    Cells are scanned in row-major order; each active cell not yet reached
    by an earlier traversal starts a new cluster.

    Args:
        occupancy: 2D boolean grid indexed [y, x]
        return_visited: If True, also return the final visited grid

    Returns:
        The cluster count, or (count, visited) if return_visited is set

    Raises:
        ValueError: If the grid is ragged, not 2D or empty
        CoverageError: If any cell's visited flag disagrees with its occupancy
    """
    grid = _as_occupancy(occupancy)
    height, width = grid.shape

    # Plain lists index much faster than numpy scalars inside the traversal loop
    cells = grid.tolist()
    visited = [[False] * width for _ in range(height)]

    groups = 0
    # argwhere yields active cells in row-major order
    for y, x in np.argwhere(grid):
        y, x = int(y), int(x)
        if not visited[y][x]:
            groups += 1
            size = mark_cluster((x, y), cells, visited)
            logger.debug("Cluster %d at (%d, %d): %d cell(s)", groups, x, y, size)

    visited_grid = np.array(visited, dtype=bool)
    if not np.array_equal(visited_grid, grid):
        missed = int(np.count_nonzero(grid & ~visited_grid))
        extra = int(np.count_nonzero(visited_grid & ~grid))
        raise CoverageError(
            f"Traversal did not cover the occupancy grid: "
            f"{missed} active cell(s) unvisited, {extra} inactive cell(s) visited"
        )

    logger.debug("Counted %d cluster(s) in %dx%d grid", groups, width, height)
    if return_visited:
        return groups, visited_grid
    return groups
