"""
DH Kinematics: forward and inverse kinematics for serial revolute manipulators.

Robots are described by Denavit-Hartenberg tables. This library provides
JIT-compilable forward kinematics, geometric Jacobians and a damped
least-squares position IK solver using JAX.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import linalg
from .chain import Jacobian, end_effector_position, forward_kinematics, jacobian
from .core import RobotModel, RobotPreset, create_robot
from .errors import ConfigError
from .ik import IKConfig, IKResult, IKStatus, solve_inverse_kinematics

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "linalg",
    "ConfigError",
    "RobotModel",
    "RobotPreset",
    "create_robot",
    "forward_kinematics",
    "end_effector_position",
    "jacobian",
    "Jacobian",
    "IKConfig",
    "IKResult",
    "IKStatus",
    "solve_inverse_kinematics",
]
