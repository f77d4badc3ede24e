import pytest
try:
    from hypothesis import assume, given, strategies as st  # type: ignore
    HAS_HYP = True
except ModuleNotFoundError:  # pragma: no cover - test infra
    HAS_HYP = False
    import pytest as _pytest  # type: ignore
    _pytest.skip("Hypothesis not installed", allow_module_level=True)

from tictactoe_rules.board import Board, Mark, Position
from tictactoe_rules.game import Game
from tictactoe_rules.state import AwaitingMove, Player, apply_move, initial_state

cells = st.sampled_from([None, Mark.O, Mark.X])
boards = st.lists(cells, min_size=9, max_size=9).map(
    lambda c: Board.from_rows([c[0:3], c[3:6], c[6:9]])
)
positions = st.tuples(st.integers(0, 2), st.integers(0, 2)).map(lambda rc: Position.from_indices(*rc))


@given(boards, positions, st.sampled_from(list(Mark)))
def test_mark_changes_only_target_cell(board, pos, mark):
    after = board.mark(pos, mark)
    assert after[pos] is mark
    for p in Position.all():
        if p != pos:
            assert after[p] == board[p]


@given(boards, positions)
def test_occupied_attempts_are_idempotent(board, pos):
    assume(board.is_marked(pos))
    state = AwaitingMove(Player.O, board)
    for _ in range(3):
        state, events = apply_move(state, pos)
        assert state.board == board
        assert state.player is Player.O
        assert len(events) == 1


@given(st.permutations(list(Position.all())))
def test_turns_alternate_until_someone_wins(order):
    players = []
    winners = []
    game = Game(on_next_turn=lambda t: players.append(t.player), on_game_ended=winners.append)
    turn = game.start()
    for pos in order:
        if turn is None:
            break
        turn = turn.mark(pos)
    expected = [Player.O if i % 2 == 0 else Player.X for i in range(len(players))]
    assert players == expected
    assert len(winners) <= 1
    if winners:
        assert turn is None


@given(boards)
def test_initial_state_always_announces_board_first(board):
    _, events = initial_state(board)
    assert events[0].board == board
    assert len(events) == 2
