"""
State codec for the bridge/torch crossing puzzle.

Encodes a configuration into a single packed integer and derives legal
crossings from it.
"""

from .errors import (
    BridgeStateError,
    CrosserIndexOutOfRange,
    DuplicateCrosserIndices,
    PersonCountOutOfRange,
)
from .state import MAX_PEOPLE, MIN_PEOPLE, BridgeState, TorchSide, iter_set_bits

__all__ = [
    "BridgeState",
    "TorchSide",
    "iter_set_bits",
    "MIN_PEOPLE",
    "MAX_PEOPLE",
    "BridgeStateError",
    "PersonCountOutOfRange",
    "CrosserIndexOutOfRange",
    "DuplicateCrosserIndices",
]
