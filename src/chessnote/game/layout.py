"""Grid layout of a game tree for diagram rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessnote.core.enums import Color
from chessnote.game.game import Game
from chessnote.game.node import GameNode


@dataclass(slots=True)
class TreeLayout:
    """Cells of the tree diagram.

    ``grid[row][col]`` holds the node drawn there (rows may be ragged);
    ``rows`` maps node id to its row.
    """

    grid: list[list[GameNode | None]] = field(default_factory=list)
    rows: dict[int, int] = field(default_factory=dict)

    @property
    def row_count(self) -> int:
        return len(self.grid)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    def node_at(self, row: int, col: int) -> GameNode | None:
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row]):
            return self.grid[row][col]
        return None


def layout_column(node: GameNode) -> int:
    """White and Black plies of one move sit in adjacent columns."""
    if node.is_root:
        return 0
    return 2 * node.move_number - (0 if node.mover == Color.BLACK else 1)


class _LayoutBuilder:
    __slots__ = ("layout", "_reserved")

    def __init__(self) -> None:
        self.layout = TreeLayout()
        self._reserved: set[tuple[int, int]] = set()

    def place(self, node: GameNode, start_row: int) -> int:
        """Put *node* in the first free row >= *start_row*; return that row."""
        grid = self.layout.grid
        col = layout_column(node)
        row = start_row
        while True:
            while len(grid) <= row:
                grid.append([])
            cells = grid[row]
            if len(cells) <= col:
                cells.extend([None] * (col + 1 - len(cells)))
            if cells[col] is None and (row, col) not in self._reserved:
                break
            row += 1

        grid[row][col] = node
        self.layout.rows[node.id] = row

        # Keep the connector from the parent down to this node clear.
        parent = node.parent
        parent_row = None if parent is None else self.layout.rows.get(parent.id)
        if parent_row is not None:
            for r in range(parent_row, row + 1):
                self._reserved.add((r, col - 1))
        return row

    def place_line(self, start: GameNode, start_row: int) -> int:
        """Lay out *start* and its mainline, then every side line; return the deepest row."""
        line: list[GameNode] = []
        row = start_row
        max_row = start_row
        node: GameNode | None = start
        while node is not None:
            line.append(node)
            row = self.place(node, row)
            max_row = max(max_row, row)
            node = node.main_child

        for branch in reversed(line):
            row = self.layout.rows[branch.id]
            for variation in branch.variations[1:]:
                row = self.place_line(variation, row + 1)
                max_row = max(max_row, row)
        return max_row


def layout_game(game: Game) -> TreeLayout:
    """Assign every node of *game* a (row, column) cell.

    The mainline runs along row 0; each side line starts at least one row
    below its branch point, and later side lines are pushed below earlier
    ones. The result is for drawing only.
    """
    builder = _LayoutBuilder()
    builder.place_line(game.root, 0)
    return builder.layout
