"""Tests for the tree diagram layout."""

from chessnote.game import Game, layout_column, layout_game, parse_pgn_games

AFTER_E4_FEN = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def _cells(game: Game) -> dict[str, tuple[int, int]]:
    layout = layout_game(game)
    cells = {}
    for node in game.root.iter_subtree():
        if node.move is not None:
            cells[node.move] = (layout.rows[node.id], layout_column(node))
    return cells


class TestColumns:
    def test_plies_in_adjacent_columns(self) -> None:
        game = parse_pgn_games("1. e4 e5 2. Nf3 *")[0]
        e4, e5, nf3 = game.mainline()
        assert layout_column(game.root) == 0
        assert [layout_column(n) for n in (e4, e5, nf3)] == [1, 2, 3]

    def test_black_to_move_start(self) -> None:
        game = Game({"SetUp": "1", "FEN": AFTER_E4_FEN})
        e5 = game.add_move(game.root, "e5")
        assert layout_column(game.root) == 0
        assert layout_column(e5) == 2
        layout = layout_game(game)
        assert layout.node_at(0, 2) is e5


class TestRows:
    def test_mainline_on_row_zero(self) -> None:
        game = parse_pgn_games("1. e4 e5 2. Nf3 *")[0]
        layout = layout_game(game)
        assert layout.row_count == 1
        assert layout.column_count == 4
        assert layout.node_at(0, 0) is game.root
        assert all(layout.rows[n.id] == 0 for n in game.mainline())

    def test_side_line_below_branch(self) -> None:
        game = parse_pgn_games("1. e4 e5 (1... c5 2. Nf3) 2. Nf3 *")[0]
        assert _cells(game)["c5"] == (1, 2)
        layout = layout_game(game)
        assert layout.node_at(1, 2).move == "c5"
        assert layout.node_at(1, 0) is None

    def test_sibling_lines_stack(self) -> None:
        game = parse_pgn_games("1. e4 (1. d4 d5) (1. c4) e5 *")[0]
        cells = _cells(game)
        assert cells["d4"] == (1, 1)
        assert cells["d5"] == (1, 2)
        assert cells["c4"] == (2, 1)

    def test_connector_cells_are_kept_clear(self) -> None:
        game = parse_pgn_games("1. e4 e5 2. Nf3 (2. Nc3) 2... Nc6 (2... d6) *")[0]
        cells = _cells(game)
        assert cells["d6"] == (1, 4)
        # (1, 3) carries the connector from Nf3 down to d6.
        assert cells["Nc3"] == (2, 3)

    def test_every_node_placed_once(self) -> None:
        game = parse_pgn_games(
            "1. e4 e5 (1... c5 2. Nf3 (2. Nc3 Nc6) d6) (1... e6) 2. Nf3 *"
        )[0]
        layout = layout_game(game)
        placed = [cell for row in layout.grid for cell in row if cell is not None]
        assert len(placed) == game.node_count
        assert len({node.id for node in placed}) == game.node_count

    def test_out_of_range_cell(self) -> None:
        layout = layout_game(Game())
        assert layout.node_at(5, 5) is None
        assert layout.node_at(-1, 0) is None
