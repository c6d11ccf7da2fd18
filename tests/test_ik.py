"""Tests for the damped least-squares IK solver."""

import logging

import jax.numpy as jnp
import jax.random as jrandom
import numpy as np
import pytest

from dh_kinematics import ConfigError
from dh_kinematics.chain import end_effector_position
from dh_kinematics.core import create_robot
from dh_kinematics.ik import (
    DEFAULT_DAMPING_FACTOR,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_POSITION_TOLERANCE,
    IKConfig,
    IKStatus,
    solve_inverse_kinematics,
)


def test_config_defaults():
    """Default solver settings."""
    config = IKConfig()
    assert config.max_iterations == DEFAULT_MAX_ITERATIONS == 200
    assert config.position_tolerance == DEFAULT_POSITION_TOLERANCE == 0.001
    assert config.damping_factor == DEFAULT_DAMPING_FACTOR == 0.5


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"max_iterations": 0}, "max_iterations"),
        ({"max_iterations": 2.5}, "max_iterations"),
        ({"max_iterations": float("inf")}, "max_iterations"),
        ({"max_iterations": True}, "max_iterations"),
        ({"position_tolerance": 0.0}, "position_tolerance"),
        ({"position_tolerance": -1e-3}, "position_tolerance"),
        ({"damping_factor": 0.0}, "damping_factor"),
    ],
)
def test_config_validation(kwargs, message):
    """Non-positive settings are rejected up front."""
    with pytest.raises(ConfigError, match=message):
        IKConfig(**kwargs)


def test_immediate_convergence():
    """Start angles already on target converge without any update."""
    robot = create_robot("6dof")
    start = jnp.deg2rad(jnp.array([0.0, -45.0, 45.0, 0.0, 0.0, 0.0]))
    target = end_effector_position(robot, start)

    result = solve_inverse_kinematics(robot, target, start)

    assert result.converged
    assert result.status is IKStatus.CONVERGED
    assert int(result.iterations) == 0
    assert float(result.error) < DEFAULT_POSITION_TOLERANCE
    np.testing.assert_allclose(result.angles, start)


def test_converges_from_nearby_start():
    """A small offset from a well-conditioned pose converges within tolerance."""
    robot = create_robot("3link")
    q_true = jnp.array([0.3, 0.6, 0.4])
    target = end_effector_position(robot, q_true)

    result = solve_inverse_kinematics(robot, target, q_true + 0.1)

    assert result.converged
    assert 0 < int(result.iterations) < DEFAULT_MAX_ITERATIONS
    assert float(result.error) < DEFAULT_POSITION_TOLERANCE

    # The reported error is the distance at the returned angles
    reached = end_effector_position(robot, result.angles)
    np.testing.assert_allclose(
        float(jnp.linalg.norm(target - reached)), float(result.error), atol=1e-12
    )


@pytest.mark.parametrize(
    "q_true",
    [
        [0.9, 0.6, 0.3],
        [1.2, -0.9, 0.3],
        [-1.0, 0.8, 0.7],
    ],
)
def test_round_trip_planar_from_zero(q_true):
    """FK then IK from the zero pose recovers the target position."""
    robot = create_robot("3link")
    target = end_effector_position(robot, jnp.array(q_true))

    result = solve_inverse_kinematics(robot, target)

    recovered = end_effector_position(robot, result.angles)
    assert float(jnp.linalg.norm(target - recovered)) < 0.01


def test_round_trip_6dof_majority():
    """FK then IK from zero succeeds for most reachable 6-DOF configurations.

    Convergence is not guaranteed near singularities or joint-limit
    boundaries, so only a majority of samples is required to succeed.
    """
    robot = create_robot("6dof")
    config = IKConfig(max_iterations=300, position_tolerance=0.001, damping_factor=0.4)

    lows = jnp.deg2rad(jnp.array([-90.0, -90.0, 20.0, -90.0, -45.0, -90.0]))
    highs = jnp.deg2rad(jnp.array([90.0, -45.0, 60.0, 90.0, 45.0, 90.0]))
    samples = jrandom.uniform(jrandom.PRNGKey(0), shape=(10, 6), minval=lows, maxval=highs)

    successes = 0
    for q in samples:
        q = robot.clamp_angles(q)
        target = end_effector_position(robot, q)
        result = solve_inverse_kinematics(robot, target, robot.zero_configuration(), config)
        recovered = end_effector_position(robot, result.angles)
        if float(jnp.linalg.norm(target - recovered)) < 0.01:
            successes += 1

    assert successes > len(samples) // 2


def test_unreachable_target_exhausts():
    """Targets beyond the workspace are reported, not raised."""
    robot = create_robot("3link")
    target = jnp.array([0.0, 5.0, 0.0])

    result = solve_inverse_kinematics(robot, target)

    assert not result.converged
    assert result.status is IKStatus.EXHAUSTED
    assert int(result.iterations) == DEFAULT_MAX_ITERATIONS
    # Reach is 1.8, so the target stays at least 3.2 away
    assert float(result.error) > 3.0
    assert jnp.isfinite(result.angles).all()


def test_exhausted_error_measured_at_final_angles():
    """Error of an exhausted solve is recomputed from the final pose."""
    robot = create_robot("6dof")
    target = jnp.array([0.3, 0.8, 0.9])

    result = solve_inverse_kinematics(robot, target, config=IKConfig(max_iterations=1))

    assert not result.converged
    assert int(result.iterations) == 1
    reached = end_effector_position(robot, result.angles)
    np.testing.assert_allclose(
        float(result.error), float(jnp.linalg.norm(target - reached)), atol=1e-12
    )


def test_exhausted_on_last_update_within_tolerance():
    """A run that only reaches tolerance on its final update still reports exhaustion."""
    robot = create_robot("3link")
    q_true = jnp.array([0.3, 0.6, 0.4])
    target = end_effector_position(robot, q_true)
    start = q_true + 0.1

    free = solve_inverse_kinematics(robot, target, start)
    assert free.converged
    k = int(free.iterations)
    assert k > 0

    capped = solve_inverse_kinematics(robot, target, start, IKConfig(max_iterations=k))

    assert not capped.converged
    assert capped.status is IKStatus.EXHAUSTED
    assert int(capped.iterations) == k
    assert float(capped.error) < DEFAULT_POSITION_TOLERANCE
    np.testing.assert_allclose(capped.angles, free.angles)


def test_result_respects_joint_limits():
    """Returned angles are clamped even when the start is out of range."""
    robot = create_robot("3link")
    start = jnp.array([0.0, 3.0, -3.0])

    result = solve_inverse_kinematics(
        robot, jnp.array([0.0, 5.0, 0.0]), start, IKConfig(max_iterations=5)
    )

    assert jnp.all(result.angles >= robot.joint_limits[:, 0])
    assert jnp.all(result.angles <= robot.joint_limits[:, 1])


def test_default_start_is_zero_configuration():
    """Omitting start angles is the same as starting from zero."""
    robot = create_robot("scara")
    target = jnp.array([0.6, 0.5, 0.1])

    implicit = solve_inverse_kinematics(robot, target)
    explicit = solve_inverse_kinematics(robot, target, jnp.zeros(4))

    np.testing.assert_allclose(implicit.angles, explicit.angles)
    assert int(implicit.iterations) == int(explicit.iterations)


def test_solve_logs_outcome(caplog):
    """Each solve logs its outcome at DEBUG level."""
    robot = create_robot("3link")
    caplog.set_level(logging.DEBUG, logger="dh_kinematics.ik")

    solve_inverse_kinematics(robot, end_effector_position(robot, jnp.zeros(3)))

    assert "IK on '3-Link Planar' converged after 0 iterations" in caplog.text
