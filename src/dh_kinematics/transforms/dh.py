"""Denavit-Hartenberg link transforms in JAX."""

import jax
import jax.numpy as jnp

Array = jax.Array


def dh_transform(theta, d, a, alpha) -> Array:
    """
    Standard DH link transform.

    Equivalent to Rz(theta) @ Tz(d) @ Tx(a) @ Rx(alpha). All arguments may be
    scalars or arrays with a common broadcast shape.

    Args:
        theta: joint angle (radians), the variable of a revolute joint
        d: link offset along the previous Z axis
        a: link length along the new X axis
        alpha: link twist about the new X axis (radians)

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    theta, d, a, alpha = jnp.broadcast_arrays(
        *(jnp.asarray(x, dtype=float) for x in (theta, d, a, alpha))
    )

    ct, st = jnp.cos(theta), jnp.sin(theta)
    ca, sa = jnp.cos(alpha), jnp.sin(alpha)
    zeros = jnp.zeros_like(theta)
    ones = jnp.ones_like(theta)

    return jnp.stack([
        jnp.stack([ct, -st * ca, st * sa, a * ct], axis=-1),
        jnp.stack([st, ct * ca, -ct * sa, a * st], axis=-1),
        jnp.stack([zeros, sa, ca, d], axis=-1),
        jnp.stack([zeros, zeros, zeros, ones], axis=-1),
    ], axis=-2)
