"""
JAX-based transforms for serial-chain kinematics.

This module provides pure, JIT-compilable implementations of:
- SE(3) homogeneous transforms (se3 module)
- Denavit-Hartenberg link transforms (dh module)
"""

from . import se3
from . import dh
from .dh import dh_transform

__all__ = [
    "se3",
    "dh",
    "dh_transform",
]
