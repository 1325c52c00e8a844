"""
Gymnasium environment wrapper for Minesweeper.

Exposes the move API through a standard RL interface so scripted or
learning players can drive the same engine as the terminal game.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Action, Board, BoardConfig, GameOverError, MoveResult
from .renderer import render_board


# Index of each action in the last component of an env action.
ACTIONS = (Action.CLEAR, Action.FLAG, Action.QUESTION)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array of shape (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = questioned cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        MultiDiscrete([width, height, 3]): (x, y, index into ACTIONS).
        Marked cells are overwritten without asking.

    Rewards:
        - +1 for clearing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for flagging or questioning
        - -0.1 for a rejected move (out of bounds or already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.board = Board(self.config, rng=self.np_random)

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.MultiDiscrete(
            [self.config.width, self.config.height, len(ACTIONS)]
        )

        self._steps = 0
        self._last_result: Optional[MoveResult] = None

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a fresh board.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board = Board(self.config, rng=self.np_random)
        self._steps = 0
        self._last_result = None

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: Any
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one move.

        Args:
            action: Sequence of (x, y, action index).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).

        Raises:
            GameOverError: If the episode already terminated.
            ValueError: If the action index is not in ACTIONS.
        """
        if not self.board.is_playing:
            raise GameOverError("Episode has terminated; call reset()")
        x, y, index = (int(value) for value in action)
        if not 0 <= index < len(ACTIONS):
            raise ValueError(f"Invalid action index {index}")
        move = ACTIONS[index]
        self._steps += 1

        result = self.board.apply_move(x, y, move, confirmed=True)
        self._last_result = result
        reward = self._calculate_reward(result, move)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, self._get_info()

    @staticmethod
    def _calculate_reward(result: MoveResult, move: Action) -> float:
        """Map a move outcome to a reward."""
        if result == MoveResult.WIN:
            return 10.0
        if result == MoveResult.LOSE:
            return -10.0
        if result in (
            MoveResult.REJECT_OUT_OF_BOUNDS,
            MoveResult.REJECT_ALREADY_REVEALED,
        ):
            return -0.1
        if move == Action.CLEAR:
            return 1.0
        return 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "result": self._last_result.name if self._last_result else None,
            "remaining_safe_cells": self.board.remaining_safe_cells,
            "remaining_mines": self.board.remaining_mines,
            "game_state": self.board.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_board(self.board.snapshot())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of cells that can still be targeted.

        Returns:
            Flat boolean array indexed by y * width + x; True where the
            cell is not revealed.
        """
        return self.board.get_observation().flatten() < 0
