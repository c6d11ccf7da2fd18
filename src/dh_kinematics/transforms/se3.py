"""SE(3) homogeneous transform primitives in JAX.

Poses are plain (..., 4, 4) arrays. Every function here is pure and returns
a new array, so frames produced by forward kinematics are only ever composed
into new frames, never modified in place.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def identity(dtype=float) -> Array:
    """Return the 4x4 identity pose."""
    return jnp.eye(4, dtype=dtype)


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct SE(3) transform from position and rotation.

    Args:
        p: (..., 3) position vector
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    p = jnp.asarray(p)
    R = jnp.asarray(R)

    # Ensure consistent batch shapes
    batch_shape = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    dtype = jnp.result_type(p, R)
    p = jnp.broadcast_to(p, batch_shape + (3,))
    R = jnp.broadcast_to(R, batch_shape + (3, 3))

    T = jnp.zeros(batch_shape + (4, 4), dtype=dtype)
    T = T.at[..., :3, :3].set(R)
    T = T.at[..., :3, 3].set(p)
    T = T.at[..., 3, 3].set(1.0)

    return T


def multiply(T1: Array, T2: Array) -> Array:
    """
    Compose two SE(3) transformation matrices.

    Args:
        T1: (..., 4, 4) first transformation matrix
        T2: (..., 4, 4) second transformation matrix

    Returns:
        (..., 4, 4) result of T1 @ T2 (apply T2 first, then T1)
    """
    return jnp.matmul(T1, T2)


def apply(T: Array, points: Array) -> Array:
    """
    Apply SE(3) transformation to points.

    Args:
        T: (..., 4, 4) transformation matrix
        points: (..., 3) points to transform

    Returns:
        (..., 3) transformed points
    """
    points = jnp.asarray(points)
    ones = jnp.ones_like(points[..., 0:1])
    points_h = jnp.concatenate([points, ones], axis=-1)

    transformed_h = jnp.einsum("...ij,...j->...i", T, points_h)

    # The homogeneous coordinate is always 1 for SE(3) transforms
    return transformed_h[..., :3]


def get_position(T: Array) -> Array:
    """
    Extract position (frame origin) from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3) position vector
    """
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    """
    Extract rotation matrix from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3, 3) rotation matrix
    """
    return T[..., :3, :3]


def get_axis(T: Array, axis: int) -> Array:
    """
    Extract one local axis direction of the frame, expressed in the parent frame.

    Args:
        T: (..., 4, 4) transformation matrix
        axis: 0, 1 or 2 for the local X, Y or Z axis

    Returns:
        (..., 3) unit direction vector
    """
    return T[..., :3, axis]


def get_z_axis(T: Array) -> Array:
    """Local Z axis of the frame; the rotation axis of a DH revolute joint."""
    return get_axis(T, 2)
