"""Environment configuration composition.

EnvConfig composes all subsystem configurations into a single dataclass
and validates them on construction.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidConfiguration
from ..systems.collision import RewardConfig
from ..systems.physics import PhysicsConfig, jump_apex
from ..systems.walls import WALL_HEIGHT, WallConfig


MIN_SIZE = 6


@dataclass
class EnvConfig:
    """Complete environment configuration.

    Attributes
    ----------
    size : int
        Board is a ``size x size`` grid; must be > 5 (default: 12)
    episode_length : int
        Truncation horizon in ticks, 0 disables truncation (default: 1000).
        Collision is the only termination signal of the environment itself.
    physics : PhysicsConfig
        Jump impulse and gravity
    walls : WallConfig
        Wall spacing and vertical offset ranges
    rewards : RewardConfig
        Clear and collision rewards

    Derived
    -------
    ground_height = size // 3, the floor row
    player_x = size // 3, the fixed player column
    rest_y = ground_height + 1, the row the player stands on

    Raises
    ------
    InvalidConfiguration
        If ``size <= 5`` or a subsystem value is out of range.

    Examples
    --------
    >>> cfg = EnvConfig(size=10)
    >>> cfg.ground_height, cfg.player_x, cfg.rest_y
    (3, 3, 4)

    >>> from jump_bench.systems.physics import PhysicsConfig
    >>> cfg = EnvConfig(size=16, physics=PhysicsConfig(jump_velocity=3))
    """

    size: int = 12
    episode_length: int = 1000

    # Subsystem configs
    physics: PhysicsConfig = None
    walls: WallConfig = None
    rewards: RewardConfig = None

    def __post_init__(self):
        """Initialize default sub-configs if not provided, then validate."""
        if self.physics is None:
            self.physics = PhysicsConfig()

        if self.walls is None:
            self.walls = WallConfig()

        if self.rewards is None:
            self.rewards = RewardConfig()

        self.validate()

    @property
    def ground_height(self) -> int:
        return self.size // 3

    @property
    def player_x(self) -> int:
        return self.size // 3

    @property
    def rest_y(self) -> int:
        return self.ground_height + 1

    def validate(self) -> None:
        """Check value ranges; raise InvalidConfiguration on the first failure."""
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise InvalidConfiguration(
                f"size must be an int, got {self.size!r} ({type(self.size).__name__})"
            )
        if self.size < MIN_SIZE:
            raise InvalidConfiguration(
                f"size must be > {MIN_SIZE - 1} to fit player, ground and walls, got {self.size}"
            )
        if self.episode_length < 0:
            raise InvalidConfiguration(
                f"episode_length must be >= 0, got {self.episode_length}"
            )

        if self.physics.jump_velocity <= 0:
            raise InvalidConfiguration(
                f"physics.jump_velocity must be > 0, got {self.physics.jump_velocity}"
            )
        if self.physics.gravity <= 0:
            raise InvalidConfiguration(
                f"physics.gravity must be > 0, got {self.physics.gravity}"
            )

        if self.walls.min_wall_spacing < 1:
            raise InvalidConfiguration(
                f"walls.min_wall_spacing must be >= 1, got {self.walls.min_wall_spacing}"
            )
        if self.walls.max_wall_spacing < self.walls.min_wall_spacing:
            raise InvalidConfiguration(
                "walls.max_wall_spacing must be >= walls.min_wall_spacing, got "
                f"{self.walls.max_wall_spacing} < {self.walls.min_wall_spacing}"
            )
        if self.walls.max_wall_offset is not None and self.walls.max_wall_offset < 0:
            raise InvalidConfiguration(
                f"walls.max_wall_offset must be >= 0, got {self.walls.max_wall_offset}"
            )

        # A grounded wall must be clearable on this board.
        reachable = min(jump_apex(self.physics), self.size - 1 - self.rest_y)
        if reachable < WALL_HEIGHT:
            raise InvalidConfiguration(
                f"jump reaches {reachable} rows above ground on a size {self.size} board, "
                f"walls are {WALL_HEIGHT} rows tall; increase physics.jump_velocity"
            )
