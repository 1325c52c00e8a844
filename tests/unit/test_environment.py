"""
Unit tests for the Gymnasium environment.
"""
import numpy as np
import pytest
from game import BoardConfig, GameOverError, MinesweeperEnv
from game.environment import ACTIONS


CLEAR, FLAG, QUESTION = range(3)


@pytest.fixture
def env() -> MinesweeperEnv:
    """Create a seeded 5x5 environment with 3 mines."""
    environment = MinesweeperEnv(BoardConfig(5, 5, 3), render_mode="ansi")
    environment.reset(seed=0)
    return environment


def safe_position(env: MinesweeperEnv, numbered: bool):
    """Find a safe cell, optionally one with a nonzero count."""
    board = env.board
    for y in range(board.height):
        for x in range(board.width):
            cell = board.get_cell(x, y)
            if cell.is_mine:
                continue
            if not numbered or cell.adjacent_mines > 0:
                return x, y
    raise AssertionError("no matching cell")


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_reset_observation(self, env: MinesweeperEnv) -> None:
        """Reset yields an all-hidden observation inside the space."""
        obs, info = env.reset(seed=1)
        assert obs.shape == (5, 5)
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "PLAYING"
        assert info["remaining_safe_cells"] == 22

    def test_action_space_shape(self, env: MinesweeperEnv) -> None:
        """Actions are (x, y, action index)."""
        assert list(env.action_space.nvec) == [5, 5, len(ACTIONS)]

    def test_seed_reproduces_layout(self) -> None:
        """Same reset seed gives the same mines."""
        first = MinesweeperEnv(BoardConfig(6, 6, 5))
        second = MinesweeperEnv(BoardConfig(6, 6, 5))
        first.reset(seed=42)
        second.reset(seed=42)
        assert first.board.mine_positions_list() == second.board.mine_positions_list()


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_clear_safe_cell_rewards(self, env: MinesweeperEnv) -> None:
        """Clearing a numbered safe cell gives +1."""
        x, y = safe_position(env, numbered=True)
        obs, reward, terminated, truncated, info = env.step([x, y, CLEAR])
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert obs[y, x] > 0
        assert info["result"] == "OK"

    def test_flag_is_neutral(self, env: MinesweeperEnv) -> None:
        """Flagging gives no reward."""
        _, reward, _, _, info = env.step([0, 0, FLAG])
        assert reward == 0.0
        assert info["steps"] == 1

    def test_marked_cell_overwritten_without_prompt(
        self, env: MinesweeperEnv
    ) -> None:
        """The environment confirms overwrites on the agent's behalf."""
        x, y = safe_position(env, numbered=True)
        env.step([x, y, QUESTION])
        _, reward, _, _, _ = env.step([x, y, CLEAR])
        assert reward == 1.0
        assert env.board.get_cell(x, y).is_revealed is True

    def test_rejected_move_penalized(self, env: MinesweeperEnv) -> None:
        """Re-clearing or going out of bounds costs a little."""
        x, y = safe_position(env, numbered=True)
        env.step([x, y, CLEAR])
        _, reward, _, _, info = env.step([x, y, FLAG])
        assert reward == pytest.approx(-0.1)
        assert info["result"] == "REJECT_ALREADY_REVEALED"
        _, reward, _, _, _ = env.step([7, 0, CLEAR])
        assert reward == pytest.approx(-0.1)

    def test_hitting_mine_terminates(self, env: MinesweeperEnv) -> None:
        """Clearing a mine gives -10 and ends the episode."""
        x, y = env.board.mine_positions_list()[0]
        _, reward, terminated, _, info = env.step([x, y, CLEAR])
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_winning_terminates(self) -> None:
        """Clearing an empty board wins immediately."""
        environment = MinesweeperEnv(BoardConfig(3, 3, 0))
        environment.reset(seed=0)
        _, reward, terminated, _, info = environment.step([1, 1, CLEAR])
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_step_after_loss_raises(self, env: MinesweeperEnv) -> None:
        """A finished episode must be reset before stepping again."""
        x, y = env.board.mine_positions_list()[0]
        env.step([x, y, CLEAR])
        with pytest.raises(GameOverError):
            env.step([x, y, FLAG])
        env.reset(seed=0)
        _, _, terminated, _, _ = env.step([x, y, FLAG])
        assert terminated is False

    def test_step_after_win_raises(self) -> None:
        """Rejected moves are not accepted after a win either."""
        environment = MinesweeperEnv(BoardConfig(1, 1, 0))
        environment.reset(seed=0)
        environment.step([0, 0, CLEAR])
        with pytest.raises(GameOverError):
            environment.step([0, 0, CLEAR])

    @pytest.mark.parametrize("index", [-1, len(ACTIONS)])
    def test_invalid_action_index_raises(
        self, env: MinesweeperEnv, index: int
    ) -> None:
        """Action indices outside ACTIONS are refused without a move."""
        with pytest.raises(ValueError, match="Invalid action index"):
            env.step([0, 0, index])
        assert env.board.get_cell(0, 0).is_hidden is True
        assert env._steps == 0


# ============================================================================
# Rendering and Mask Tests
# ============================================================================

class TestRenderAndMask:
    """Test text rendering and the action mask."""

    def test_ansi_render(self, env: MinesweeperEnv) -> None:
        """ANSI mode returns the board text."""
        text = env.render()
        assert "Mines: 3" in text.split("\n")[0]

    def test_mask_tracks_revealed_cells(self, env: MinesweeperEnv) -> None:
        """Revealed cells drop out of the mask."""
        mask = env.get_action_mask()
        assert mask.shape == (25,)
        assert mask.all()
        x, y = safe_position(env, numbered=True)
        env.step([x, y, CLEAR])
        mask = env.get_action_mask()
        assert not mask[y * 5 + x]
        assert mask.sum() == 24
