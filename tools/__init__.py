"""
CLI tools for GidroAtlas.
"""

from tools.seed_demo import seed, DEMO_OBJECTS

__all__ = [
    "seed",
    "DEMO_OBJECTS",
]
