"""Built-in robot presets.

The preset table is a closed set: each ``RobotPreset`` member maps to static
DH data that is read once when a robot is created.
"""

import enum
import logging
import math
from typing import NamedTuple, Tuple, Union

from dh_kinematics.core.robot_model import RobotModel
from dh_kinematics.errors import ConfigError

logger = logging.getLogger(__name__)


class RobotPreset(str, enum.Enum):
    INDUSTRIAL_6DOF = "6dof"
    UR5 = "ur5"
    SCARA = "scara"
    PLANAR_3LINK = "3link"


class PresetData(NamedTuple):
    name: str
    dh_params: Tuple[Tuple[float, float, float], ...]  # (d, a, alpha) per joint
    limits_deg: Tuple[Tuple[float, float], ...]


_PRESETS = {
    RobotPreset.INDUSTRIAL_6DOF: PresetData(
        name="6-DOF Industrial",
        dh_params=(
            (0.40, 0.00, math.pi / 2),
            (0.00, 0.80, 0.0),
            (0.00, 0.55, 0.0),
            (0.00, 0.00, math.pi / 2),
            (0.38, 0.00, -math.pi / 2),
            (0.18, 0.00, 0.0),
        ),
        limits_deg=((-180, 180), (-135, 135), (-150, 150), (-180, 180), (-120, 120), (-180, 180)),
    ),
    RobotPreset.UR5: PresetData(
        name="UR5-like",
        dh_params=(
            (0.089, 0.00, math.pi / 2),
            (0.00, -0.425, 0.0),
            (0.00, -0.392, 0.0),
            (0.109, 0.00, math.pi / 2),
            (0.095, 0.00, -math.pi / 2),
            (0.082, 0.00, 0.0),
        ),
        limits_deg=((-360, 360),) * 6,
    ),
    RobotPreset.SCARA: PresetData(
        name="4-DOF SCARA",
        dh_params=(
            (0.35, 0.00, 0.0),
            (0.00, 0.70, 0.0),
            (0.00, 0.50, math.pi),
            (0.20, 0.00, 0.0),
        ),
        limits_deg=((-135, 135), (-135, 135), (-180, 180), (-180, 180)),
    ),
    RobotPreset.PLANAR_3LINK: PresetData(
        name="3-Link Planar",
        dh_params=(
            (0.00, 0.80, 0.0),
            (0.00, 0.60, 0.0),
            (0.00, 0.40, 0.0),
        ),
        limits_deg=((-180, 180), (-150, 150), (-150, 150)),
    ),
}


def preset_data(preset: RobotPreset) -> PresetData:
    """Static data for a preset member."""
    return _PRESETS[RobotPreset(preset)]


def create_robot(preset_key: Union[str, RobotPreset]) -> RobotModel:
    """Create a RobotModel from a named preset.

    Args:
        preset_key: A ``RobotPreset`` member or its key, e.g. ``"6dof"``.

    Returns:
        RobotModel for the preset.

    Raises:
        ConfigError: If ``preset_key`` does not name a known preset.
    """
    try:
        preset = RobotPreset(preset_key)
    except ValueError:
        known = ", ".join(p.value for p in RobotPreset)
        raise ConfigError(f"Unknown robot preset '{preset_key}' (known: {known})") from None

    data = _PRESETS[preset]
    logger.debug("Loading preset '%s' (%s)", preset.value, data.name)
    return RobotModel.from_dh(data.name, data.dh_params, data.limits_deg)
