"""
Pytest configuration and shared fixtures.
"""

import struct

import matplotlib

matplotlib.use("Agg")

import pytest


def _from_hex(words):
    return [struct.unpack(">d", bytes.fromhex(w))[0] for w in words]


# initialize(4, seed=1, alpha=0.1): exact IEEE-754 bit patterns, row-major
GOLDEN_F0 = _from_hex([
    "bfefffffffefdf78", "bfebffefbe7cffbb", "3fcb1e842f6e8628", "3fed553d40d55760",
    "3fa8307ec2416640", "3fedac14c0b954c6", "3fd123008475ded0", "3fe18b27f0453656",
    "bf960fe68b2c37c0", "bfb8b8d03d9b67b8", "bfe8cd4f8f1d6cf2", "3febeb593e0de6e6",
    "bfd8eaaf7834e9ce", "3fc0e459e5090240", "3fb30dbdbaa879a0", "3fe3e74f8179ab74",
])

# ... after advance(1)
GOLDEN_F1 = _from_hex([
    "bfe4294d07b95392", "bfdfdd5d3d015498", "3fc52f518138d965", "3fe2d28d99ddde69",
    "3fb2e0bd9e0b0cfe", "3fdf679895b48458", "3fd01ee98bd2df3a", "3fe14267d4b02768",
    "3f9f2fda2759031a", "bfa03865f2b2d83a", "bfd69b47a2279dd4", "3fe1f2799d0f8c72",
    "bfd0a9a186d59d52", "bfa9536b1f0d4b3c", "3fb050d1692d2fdd", "3fe0a8e1f37f2fbb",
])

GOLDEN_HASH_STEP0 = "2f5659195d37127e167b30031279d784be80b2d25ecbe423469d70a95d3d32f7"
GOLDEN_HASH_STEP1 = "5bfde53a37cb11ceae63179f8846f3ed952fda2f4c776a82bba8e8d81fde12b9"


@pytest.fixture
def engine():
    """A fresh, uninitialized engine."""
    from detfield.core import Engine
    return Engine()


@pytest.fixture
def small_engine():
    """Engine initialized with the golden 4x4 scenario."""
    from detfield.core import Engine
    e = Engine()
    e.initialize(4, 1, 0.1)
    return e


@pytest.fixture
def medium_engine():
    """Engine on a 32x32 grid."""
    from detfield.core import Engine
    e = Engine()
    e.initialize(32, 12345, 0.2)
    return e


@pytest.fixture
def golden():
    """Golden vectors for initialize(4, seed=1, alpha=0.1)."""
    return {
        "f0": list(GOLDEN_F0),
        "f1": list(GOLDEN_F1),
        "hash0": GOLDEN_HASH_STEP0,
        "hash1": GOLDEN_HASH_STEP1,
    }
