"""Dense linear solves for the small systems that arise in IK.

Gaussian elimination with partial pivoting over a (n, n + 1) augmented
matrix. The size is static, so the Python loops unroll under ``jax.jit``.
"""

import jax
import jax.numpy as jnp

Array = jax.Array

# Pivots at or below this magnitude are treated as singular.
PIVOT_EPSILON = 1e-12


def solve(A: Array, b: Array) -> Array:
    """Solve ``A @ x = b`` for a square system.

    Near-singular directions do not raise: elimination is skipped for a
    column whose pivot is below ``PIVOT_EPSILON`` and the matching solution
    component is set to zero. The result is always finite for finite input.

    Args:
        A: (n, n) coefficient matrix
        b: (n,) right-hand side

    Returns:
        (n,) solution vector
    """
    A = jnp.asarray(A, dtype=float)
    b = jnp.asarray(b, dtype=float)
    n = b.shape[0]

    aug = jnp.concatenate([A, b[:, None]], axis=1)

    # Forward elimination
    for col in range(n):
        # argmax returns the first maximum, so ties keep the upper row
        pivot_row = col + jnp.argmax(jnp.abs(aug[col:, col]))
        row_col, row_pivot = aug[col], aug[pivot_row]
        aug = aug.at[col].set(row_pivot).at[pivot_row].set(row_col)

        pivot = aug[col, col]
        singular = jnp.abs(pivot) < PIVOT_EPSILON
        safe_pivot = jnp.where(singular, 1.0, pivot)
        factors = jnp.where(singular, 0.0, aug[col + 1:, col] / safe_pivot)
        aug = aug.at[col + 1:].add(-factors[:, None] * aug[col])

    # Back substitution
    x = jnp.zeros(n, dtype=aug.dtype)
    for i in reversed(range(n)):
        residual = aug[i, n] - jnp.dot(aug[i, i + 1:n], x[i + 1:])
        pivot = aug[i, i]
        usable = jnp.abs(pivot) > PIVOT_EPSILON
        x = x.at[i].set(jnp.where(usable, residual / jnp.where(usable, pivot, 1.0), 0.0))

    return x
