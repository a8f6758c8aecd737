"""Maze generation by randomized depth-first backtracking.

Both players of a maze session build their maze locally from the seed in
``match-found``, so a seeded call must always yield the same walls. The
seeded generator reproduces the browser client's ``SeededRandom`` so that a
maze served here matches the one the client draws.
"""

import math
import random
from typing import Dict, List, Optional

WALLS = ('top', 'right', 'bottom', 'left')


class SeededRandom:
    def __init__(self, seed: int):
        self.seed = seed

    def random(self) -> float:
        x = math.sin(self.seed) * 10000
        self.seed += 1
        return x - math.floor(x)

    def randint(self, n: int) -> int:
        """Uniform-enough integer in ``[0, n)``."""
        return int(math.floor(self.random() * n))


class Cell:
    __slots__ = ('row', 'col', 'walls', 'visited')

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.walls: Dict[str, bool] = {w: True for w in WALLS}
        self.visited = False

    def to_dict(self):
        return {'row': self.row, 'col': self.col, 'walls': dict(self.walls)}

    def __repr__(self):
        return f"Cell({self.row}, {self.col})"


Maze = List[List[Cell]]


def generate_maze(rows: int, cols: int, seed: Optional[int] = None) -> Maze:
    if rows < 1 or cols < 1:
        raise ValueError(f"maze dimensions must be positive, got {rows}x{cols}")

    if seed is not None:
        pick = SeededRandom(seed).randint
    else:
        pick = random.randrange

    maze = [[Cell(r, c) for c in range(cols)] for r in range(rows)]

    start = maze[0][0]
    start.visited = True
    stack = [start]
    while stack:
        current = stack[-1]
        neighbors = _unvisited_neighbors(maze, current)
        if neighbors:
            nxt = neighbors[pick(len(neighbors))]
            _remove_wall_between(current, nxt)
            nxt.visited = True
            stack.append(nxt)
        else:
            stack.pop()
    return maze


def _unvisited_neighbors(maze: Maze, cell: Cell) -> List[Cell]:
    rows, cols = len(maze), len(maze[0])
    row, col = cell.row, cell.col
    found = []
    # up, right, down, left
    if row > 0 and not maze[row - 1][col].visited:
        found.append(maze[row - 1][col])
    if col < cols - 1 and not maze[row][col + 1].visited:
        found.append(maze[row][col + 1])
    if row < rows - 1 and not maze[row + 1][col].visited:
        found.append(maze[row + 1][col])
    if col > 0 and not maze[row][col - 1].visited:
        found.append(maze[row][col - 1])
    return found


def _remove_wall_between(current: Cell, nxt: Cell) -> None:
    row_diff = current.row - nxt.row
    col_diff = current.col - nxt.col
    if row_diff == 1:
        current.walls['top'] = False
        nxt.walls['bottom'] = False
    elif row_diff == -1:
        current.walls['bottom'] = False
        nxt.walls['top'] = False
    elif col_diff == 1:
        current.walls['left'] = False
        nxt.walls['right'] = False
    elif col_diff == -1:
        current.walls['right'] = False
        nxt.walls['left'] = False


def maze_to_dict(maze: Maze, seed: Optional[int] = None) -> dict:
    return {
        'rows': len(maze),
        'cols': len(maze[0]),
        'seed': seed,
        'cells': [[cell.to_dict() for cell in row] for row in maze],
    }


def render_ascii(maze: Maze) -> str:
    """Draw the maze with ``+``, ``-`` and ``|``; one text cell per maze cell."""
    cols = len(maze[0])
    lines = ['+' + '---+' * cols]
    for row in maze:
        middle = '|' if row[0].walls['left'] else ' '
        bottom = '+'
        for cell in row:
            middle += '   ' + ('|' if cell.walls['right'] else ' ')
            bottom += ('---' if cell.walls['bottom'] else '   ') + '+'
        lines.append(middle)
        lines.append(bottom)
    return '\n'.join(lines)
