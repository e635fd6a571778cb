"""
Gymnasium environment wrapper for Diamond Sweeper.

Drives a GameSession through its public actions and exposes the board
as a standard RL interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import (
    FLAGGED_OBSERVATION,
    HIDDEN_OBSERVATION,
    ITEM_OBSERVATION,
    MINE_OBSERVATION,
)
from .scores import ScoreStore
from .session import GameSession


SAFE_REWARD = 1.0
ITEM_REWARD = 5.0
WIN_REWARD = 10.0
MINE_REWARD = -10.0
INVALID_REWARD = -0.1


# ============================================================================
# Diamond Sweeper Environment
# ============================================================================

class SweeperEnv(gym.Env):
    """
    Gymnasium environment for Diamond Sweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine
        - 10 = revealed diamond

    Actions:
        Discrete action space of size rows * cols.
        Action i opens the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing safe cells
        - +5 more when the move collected a diamond
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        store: Optional[ScoreStore] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9, 10 mines, 3 diamonds).
            render_mode: How to render the environment.
            store: Score persistence shared across episodes.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.session = GameSession(self.config, store=store)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=FLAGGED_OBSERVATION,
            high=ITEM_OBSERVATION,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # Placement follows the episode seed
        self.session.reset(
            rng=random.Random(int(self.np_random.integers(2**31)))
        )
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)

        observation = self.session.board.get_observation()
        terminated = not self.session.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """
        Open a cell and score the outcome.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        items_before = self.session.items_collected
        if not self.session.open(row, col):
            return INVALID_REWARD

        board = self.session.board
        if board.is_lost:
            return MINE_REWARD
        if board.is_won:
            return WIN_REWARD

        reward = SAFE_REWARD
        if self.session.items_collected > items_before:
            reward += ITEM_REWARD
        return reward

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "score": self.session.score,
            "high_score": self.session.high_score,
            "items_collected": self.session.items_collected,
            "status": self.session.status.name,
            "valid_actions": len(self.session.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {
            HIDDEN_OBSERVATION: ".",
            FLAGGED_OBSERVATION: "F",
            MINE_OBSERVATION: "*",
            ITEM_OBSERVATION: "D",
            0: " ",
        }
        obs = self.session.board.get_observation()
        lines = []
        for row in obs:
            lines.append(
                " ".join(symbols.get(int(val), str(int(val))) for val in row)
            )
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.session.board.get_valid_actions():
            mask[row * self.config.cols + col] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> SweeperEnv:
        return SweeperEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
