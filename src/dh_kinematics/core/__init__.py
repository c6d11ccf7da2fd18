"""Core robot model data structures for DH Kinematics.

This module provides the immutable robot description and the built-in
robot presets.
"""

from .robot_model import RobotModel
from .presets import RobotPreset, create_robot, preset_data

__all__ = ["RobotModel", "RobotPreset", "create_robot", "preset_data"]
