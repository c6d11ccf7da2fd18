"""Exceptions raised by DH Kinematics."""


class ConfigError(ValueError):
    """Raised when a robot or solver configuration cannot be built.

    Covers unknown robot presets, malformed DH tables and invalid
    solver settings. Solver non-convergence is never reported this way.
    """
