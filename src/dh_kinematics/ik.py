"""Position-only inverse kinematics by damped least squares.

Each iteration solves ``(Jp Jp^T + lambda^2 I) v = err`` and applies
``dq = Jp^T v``, then clamps the joints into their limits. The loop runs
inside ``jax.lax.while_loop`` and stops either when the end-effector is
within tolerance (CONVERGED) or after ``max_iterations`` updates
(EXHAUSTED). Orientation is not controlled.
"""

import enum
import logging
import numbers
from dataclasses import dataclass
from typing import Optional

import jax
import jax.numpy as jnp
from jax import Array
from flax import struct

from . import linalg
from .chain import forward_kinematics, jacobian_from_frames
from .core import RobotModel
from .errors import ConfigError
from .transforms import se3

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 200
DEFAULT_POSITION_TOLERANCE = 1e-3
DEFAULT_DAMPING_FACTOR = 0.5


class IKStatus(enum.Enum):
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class IKConfig:
    """Solver settings.

    Attributes:
        max_iterations: Upper bound on joint updates per solve.
        position_tolerance: Converged once the position error is below this.
        damping_factor: Lambda in the damped normal equations. Larger values
                        are slower but more stable near singularities.
    """
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    position_tolerance: float = DEFAULT_POSITION_TOLERANCE
    damping_factor: float = DEFAULT_DAMPING_FACTOR

    def __post_init__(self):
        if (
            not isinstance(self.max_iterations, numbers.Integral)
            or isinstance(self.max_iterations, bool)
            or self.max_iterations <= 0
        ):
            raise ConfigError(f"max_iterations must be a positive integer, got {self.max_iterations}")
        if not self.position_tolerance > 0:
            raise ConfigError(f"position_tolerance must be positive, got {self.position_tolerance}")
        if not self.damping_factor > 0:
            raise ConfigError(f"damping_factor must be positive, got {self.damping_factor}")


@struct.dataclass
class IKResult:
    """Outcome of one IK solve.

    Attributes:
        angles: Joint angles of shape (num_joints,), clamped into limits.
        converged: True if the target was reached within tolerance.
        error: Euclidean distance between target and end-effector at `angles`.
        iterations: Number of joint updates applied.
    """
    angles: Array
    converged: Array
    error: Array
    iterations: Array

    @property
    def status(self) -> IKStatus:
        return IKStatus.CONVERGED if bool(self.converged) else IKStatus.EXHAUSTED


@jax.jit
def _damped_least_squares(
    robot: RobotModel,
    target: Array,
    q0: Array,
    max_iterations: Array,
    position_tolerance: Array,
    damping_factor: Array,
) -> IKResult:
    """Run the DLS loop. One forward kinematics pass per iteration."""
    damping = damping_factor**2 * jnp.eye(3, dtype=q0.dtype)

    def position_error(frames):
        return target - se3.get_position(frames[-1])

    def cond_fun(state):
        i, _, frames = state
        error = jnp.linalg.norm(position_error(frames))
        return (i < max_iterations) & (error >= position_tolerance)

    def body_fun(state):
        i, q, frames = state
        Jp = jacobian_from_frames(frames).linear

        M = Jp @ Jp.T + damping
        v = linalg.solve(M, position_error(frames))
        q = robot.clamp_angles(q + Jp.T @ v)

        return i + 1, q, forward_kinematics(robot, q)

    init_state = (jnp.array(0, dtype=jnp.int32), q0, forward_kinematics(robot, q0))
    iterations, q, frames = jax.lax.while_loop(cond_fun, body_fun, init_state)

    error = jnp.linalg.norm(position_error(frames))
    # The final pose of an exhausted run is never tested for convergence
    converged = (iterations < max_iterations) & (error < position_tolerance)

    return IKResult(
        angles=robot.clamp_angles(q),
        converged=converged,
        error=error,
        iterations=iterations,
    )


def solve_inverse_kinematics(
    robot: RobotModel,
    target: Array,
    start_angles: Optional[Array] = None,
    config: Optional[IKConfig] = None,
) -> IKResult:
    """Find joint angles that place the end-effector at `target`.

    Args:
        robot: RobotModel to solve for
        target: Desired end-effector position of shape (3,)
        start_angles: Initial joint angles of shape (num_joints,). Defaults to
                      the robot's zero configuration. Need not respect limits.
        config: Solver settings; defaults to ``IKConfig()``

    Returns:
        IKResult. Non-convergence is reported through ``converged`` and
        ``status``, never raised.
    """
    if config is None:
        config = IKConfig()
    if start_angles is None:
        start_angles = robot.zero_configuration()

    dtype = robot.dh_params.dtype
    result = _damped_least_squares(
        robot,
        jnp.asarray(target, dtype=dtype),
        jnp.asarray(start_angles, dtype=dtype),
        config.max_iterations,
        config.position_tolerance,
        config.damping_factor,
    )

    logger.debug(
        "IK on '%s' %s after %d iterations (error %.6g)",
        robot.name,
        result.status.value,
        int(result.iterations),
        float(result.error),
    )
    return result
