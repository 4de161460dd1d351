"""
Errors raised by the bridge state codec.

All of them are precondition violations on the caller's side, so they derive
from ValueError and are never caught inside the package.
"""


class BridgeStateError(ValueError):
    """Base class for invalid arguments passed to the state codec."""


class PersonCountOutOfRange(BridgeStateError):
    """Person count outside [MIN_PEOPLE, MAX_PEOPLE]."""

    def __init__(self, people_count: int, min_people: int, max_people: int):
        self.people_count = people_count
        super().__init__(
            f"people_count is out of range. is {people_count}. "
            f"should be in range [{min_people}, {max_people}]."
        )


class CrosserIndexOutOfRange(BridgeStateError):
    """Crosser index that is not a person represented by the state."""

    def __init__(self, crosser_index: int, people_count: int):
        self.crosser_index = crosser_index
        super().__init__(
            f"crosser_index is out of range. is {crosser_index}. "
            f"should be in range [0, {people_count - 1}]."
        )


class DuplicateCrosserIndices(BridgeStateError):
    """Same person given twice for a double crossing."""

    def __init__(self, crosser_index: int):
        self.crosser_index = crosser_index
        super().__init__(
            f"first and second crosser indices are equal. both are {crosser_index}. "
            "should be distinct."
        )
