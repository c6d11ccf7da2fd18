"""RobotModel PyTree data structure for DH-parameterised serial chains.

This module defines the immutable description of a robot: its DH table and
its joint limits. Joint angles are never stored on the model; callers own
their angle vectors and pass them into every kinematics call.
"""

import logging
from typing import Sequence, Tuple

import jax.numpy as jnp
import numpy as np
from jax import Array
from flax import struct

from dh_kinematics.errors import ConfigError

logger = logging.getLogger(__name__)


@struct.dataclass
class RobotModel:
    """Immutable PyTree representation of an all-revolute serial chain.

    Attributes:
        name: Human-readable robot name. Marked as a static field for JIT
              compilation.
        dh_params: Array of shape (num_joints, 3). Row i holds the fixed
                   DH parameters (d, a, alpha) of joint i; theta is the
                   joint variable.
        joint_limits: Array of shape (num_joints, 2). Row i holds the
                      (min, max) range of joint i in radians.
    """
    name: str = struct.field(pytree_node=False)
    dh_params: Array
    joint_limits: Array

    @classmethod
    def from_dh(
        cls,
        name: str,
        dh_params: Sequence[Tuple[float, float, float]],
        limits_deg: Sequence[Tuple[float, float]],
    ) -> "RobotModel":
        """Build a model from a DH table and joint limits given in degrees.

        Args:
            name: Robot name.
            dh_params: One (d, a, alpha) triple per joint.
            limits_deg: One (min, max) pair per joint, in degrees.

        Returns:
            RobotModel with limits converted to radians.

        Raises:
            ConfigError: If the table is empty, mis-shaped, or a limit has
                         min greater than max.
        """
        dh = np.asarray(dh_params, dtype=float)
        limits = np.asarray(limits_deg, dtype=float)

        if dh.ndim != 2 or dh.shape[1] != 3 or dh.shape[0] == 0:
            raise ConfigError(
                f"DH table for '{name}' must have shape (n, 3) with n > 0, got {dh.shape}"
            )
        if limits.shape != (dh.shape[0], 2):
            raise ConfigError(
                f"Joint limits for '{name}' must have shape {(dh.shape[0], 2)}, got {limits.shape}"
            )
        if not (np.isfinite(dh).all() and np.isfinite(limits).all()):
            raise ConfigError(f"DH table and limits for '{name}' must be finite")
        bad = np.nonzero(limits[:, 0] > limits[:, 1])[0]
        if bad.size:
            raise ConfigError(f"Joint {int(bad[0]) + 1} of '{name}' has min limit above max limit")

        logger.debug("Created robot '%s' with %d joints", name, dh.shape[0])
        return cls(
            name=name,
            dh_params=jnp.asarray(dh),
            joint_limits=jnp.deg2rad(jnp.asarray(limits)),
        )

    @property
    def num_joints(self) -> int:
        """Number of revolute joints in the chain."""
        return self.dh_params.shape[0]

    def zero_configuration(self) -> Array:
        """Default joint vector: every joint at zero."""
        return jnp.zeros(self.num_joints, dtype=self.dh_params.dtype)

    def clamp_angles(self, q: Array) -> Array:
        """Clamp each joint angle into its (min, max) range.

        Returns a new array; the input is left untouched. Clamping is
        idempotent.
        """
        q = jnp.asarray(q, dtype=self.joint_limits.dtype)
        return jnp.clip(q, self.joint_limits[:, 0], self.joint_limits[:, 1])
