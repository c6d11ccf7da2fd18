"""Core kinematics algorithms: Forward Kinematics and Jacobian computation.

Forward kinematics composes one DH transform per joint into a chain of
cumulative frame poses. The geometric Jacobian is read off that frame chain
analytically, treating every joint as revolute about its frame's Z axis.
"""

from typing import Optional

import jax
import jax.numpy as jnp
from jax import Array
from flax import struct

from .core import RobotModel
from .transforms import se3
from .transforms.dh import dh_transform


@struct.dataclass
class Jacobian:
    """Geometric Jacobian of the end-effector.

    Attributes:
        linear: Array of shape (3, num_joints); end-effector linear velocity
                per unit joint rate.
        angular: Array of shape (3, num_joints); end-effector angular
                 velocity per unit joint rate.
    """
    linear: Array
    angular: Array

    @property
    def full(self) -> Array:
        """6 x num_joints Jacobian with linear rows above angular rows."""
        return jnp.concatenate([self.linear, self.angular], axis=0)


def forward_kinematics(robot: RobotModel, q: Array) -> Array:
    """Compute the frame chain of the robot.

    Args:
        robot: RobotModel containing the robot's DH table
        q: Joint angles array of shape (num_joints,). Limits are not applied.

    Returns:
        Array of shape (num_joints + 1, 4, 4). Frame 0 is the base (identity),
        frame i is the pose after joint i, the last frame is the end-effector.
    """
    q = jnp.asarray(q, dtype=robot.dh_params.dtype)
    base = se3.identity(dtype=robot.dh_params.dtype)

    def scan_body(T_world_to_parent, joint):
        """Appends one joint's link transform to its parent's world pose."""
        theta, params = joint
        d, a, alpha = params[0], params[1], params[2]
        T_world_to_child = se3.multiply(T_world_to_parent, dh_transform(theta, d, a, alpha))
        return T_world_to_child, T_world_to_child

    _, frames = jax.lax.scan(scan_body, base, (q, robot.dh_params))

    return jnp.concatenate([base[None], frames], axis=0)


def end_effector_position(robot: RobotModel, q: Array, tool_point: Optional[Array] = None) -> Array:
    """World position of a point fixed in the end-effector frame.

    Args:
        robot: RobotModel containing the robot's DH table
        q: Joint angles array of shape (num_joints,)
        tool_point: (3,) offset expressed in the end-effector frame.
                    Defaults to the frame origin.

    Returns:
        (3,) position in the base frame
    """
    frames = forward_kinematics(robot, q)
    if tool_point is None:
        tool_point = jnp.zeros(3, dtype=frames.dtype)
    return se3.apply(frames[-1], jnp.asarray(tool_point, dtype=frames.dtype))


def jacobian_from_frames(frames: Array) -> Jacobian:
    """Geometric Jacobian from an already computed frame chain.

    Column i depends only on frame i and the end-effector position:
    linear_i = z_i x (p_e - p_i), angular_i = z_i.

    Args:
        frames: Frame chain of shape (num_joints + 1, 4, 4)

    Returns:
        Jacobian with (3, num_joints) linear and angular blocks
    """
    p_e = se3.get_position(frames[-1])

    # Joint i rotates about the Z axis of the frame it is attached to
    z = se3.get_z_axis(frames[:-1])        # (n, 3)
    p = se3.get_position(frames[:-1])      # (n, 3)

    linear = jnp.cross(z, p_e - p)
    return Jacobian(linear=linear.T, angular=z.T)


def jacobian(robot: RobotModel, q: Array) -> Jacobian:
    """Compute the geometric Jacobian of the end-effector w.r.t. joint angles.

    Args:
        robot: RobotModel containing the robot's DH table
        q: Joint angles array of shape (num_joints,)

    Returns:
        Jacobian with (3, num_joints) linear and angular blocks
    """
    return jacobian_from_frames(forward_kinematics(robot, q))
