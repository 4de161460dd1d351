"""
Packed encoding of a bridge/torch crossing configuration.

A configuration is a single unsigned integer of the form ``00..001pp..ppt``:

- ``t`` (bit 0) is the torch side, 0 on the start bank and 1 on the end bank.
- each ``p`` bit is one person, 0 still waiting and 1 already crossed. Person
  ``i`` lives at bit ``i + 1`` because of the torch bit.
- the leading ``1`` is a sentinel that marks where the person bits stop, so the
  value carries its own person count.

The sentinel has to fit in the word as well, which is why only
``INT_VALUE_BIT_COUNT - 2`` people can be represented.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence

from .errors import (
    BridgeStateError,
    CrosserIndexOutOfRange,
    DuplicateCrosserIndices,
    PersonCountOutOfRange,
)

INT_VALUE_BIT_COUNT = 32  # unsigned int
MIN_PEOPLE = 1
MAX_PEOPLE = INT_VALUE_BIT_COUNT - 2

TORCH_BIT = 1


class TorchSide(Enum):
    START = 0
    END = 1

    @property
    def arrow(self) -> str:
        return "<" if self is TorchSide.START else ">"


def get_leading_one_pos(value: int) -> int:
    """Index of the highest set bit. ``value`` must be positive."""
    return value.bit_length() - 1


def get_leading_one(value: int) -> int:
    return 1 << get_leading_one_pos(value)


def iter_set_bits(mask: int) -> Iterator[int]:
    """Yield the positions of the set bits in ``mask``, lowest first.

    Args:
        mask: Non-negative bitmask

    Returns:
        Iterator over bit positions

    Raises:
        ValueError: If ``mask`` is negative
    """
    if mask < 0:
        raise ValueError(f"mask must be non-negative, got {mask}")

    index = 0
    while mask != 0:
        if mask & 1:
            yield index
        index += 1
        mask >>= 1


@dataclass(frozen=True)
class BridgeState:
    state_repr: int

    def __post_init__(self):
        """Reject values with no sentinel above a person bit or wider than the word."""
        if self.state_repr <= 0 or not (
            MIN_PEOPLE <= self.people_count <= MAX_PEOPLE
        ):
            raise BridgeStateError(
                f"state_repr {self.state_repr:#x} is not a valid configuration. "
                f"needs a sentinel bit in range [{MIN_PEOPLE + 1}, "
                f"{INT_VALUE_BIT_COUNT - 1}]."
            )

    @classmethod
    def start(cls, people_count: int) -> "BridgeState":
        """Create the configuration with everyone and the torch on the start bank.

        Args:
            people_count: Number of people, in [MIN_PEOPLE, MAX_PEOPLE]

        Returns:
            Start configuration

        Raises:
            PersonCountOutOfRange: If ``people_count`` is out of range
        """
        cls._validate_people_count(people_count)
        return cls(state_repr=1 << (people_count + 1))

    @classmethod
    def end(cls, people_count: int) -> "BridgeState":
        """Create the configuration with everyone and the torch on the end bank.

        Args:
            people_count: Number of people, in [MIN_PEOPLE, MAX_PEOPLE]

        Returns:
            End configuration

        Raises:
            PersonCountOutOfRange: If ``people_count`` is out of range
        """
        cls._validate_people_count(people_count)
        return cls(state_repr=(1 << (people_count + 2)) - 1)

    @property
    def people_count(self) -> int:
        return get_leading_one_pos(self.state_repr) - 1

    def get_torch_crossed(self) -> bool:
        return (self.state_repr & TORCH_BIT) == 1

    @property
    def torch_side(self) -> TorchSide:
        return TorchSide.END if self.get_torch_crossed() else TorchSide.START

    def after_single_crossing(self, crosser_index: int) -> "BridgeState":
        """State after one person walks the torch across.

        Bank legality is not checked here; callers pick ``crosser_index`` from
        ``get_possible_crosser_indices``.

        Args:
            crosser_index: Index of the person crossing

        Returns:
            Configuration with the torch and that person on the other bank

        Raises:
            CrosserIndexOutOfRange: If the index is not a person in this state
        """
        self._validate_crosser_index(crosser_index)
        return BridgeState(
            state_repr=self.state_repr ^ TORCH_BIT ^ (1 << (crosser_index + 1))
        )

    def after_double_crossing(
        self, first_crosser_index: int, second_crosser_index: int
    ) -> "BridgeState":
        """State after two distinct people walk the torch across together.

        Args:
            first_crosser_index: Index of one crosser
            second_crosser_index: Index of the other crosser

        Returns:
            Configuration with the torch and both people on the other bank

        Raises:
            CrosserIndexOutOfRange: If either index is not a person in this state
            DuplicateCrosserIndices: If both indices are the same person
        """
        self._validate_crosser_index(first_crosser_index)
        self._validate_crosser_index(second_crosser_index)
        if first_crosser_index == second_crosser_index:
            raise DuplicateCrosserIndices(first_crosser_index)

        return BridgeState(
            state_repr=self.state_repr
            ^ TORCH_BIT
            ^ (1 << (first_crosser_index + 1))
            ^ (1 << (second_crosser_index + 1))
        )

    def get_possible_crosser_indices(self) -> int:
        """Get the people standing on the same bank as the torch.

        Returns:
            Bitmask with bit ``i`` set when person ``i`` may cross next
        """
        result = self.state_repr >> 1
        people_mask = get_leading_one(result) - 1
        result &= people_mask
        if not self.get_torch_crossed():
            result ^= people_mask

        return result

    def crossed_indices(self) -> List[int]:
        people_mask = (1 << self.people_count) - 1
        return list(iter_set_bits((self.state_repr >> 1) & people_mask))

    def waiting_indices(self) -> List[int]:
        people_mask = (1 << self.people_count) - 1
        return list(iter_set_bits(~(self.state_repr >> 1) & people_mask))

    def as_bits(self) -> str:
        """Person bits (highest index first), a space, then the torch bit."""
        leading_one_pos = get_leading_one_pos(self.state_repr)
        person_bits = "".join(
            "1" if self.state_repr & (1 << bit) else "0"
            for bit in range(leading_one_pos - 1, 0, -1)
        )
        return f"{person_bits} {self.state_repr & TORCH_BIT}"

    def describe(self, times_to_cross: Sequence[int]) -> str:
        """Render as ``([waiting], <|>, [crossed])`` using crossing times as names."""
        if len(times_to_cross) != self.people_count:
            raise ValueError(
                f"expected {self.people_count} crossing times, got {len(times_to_cross)}"
            )
        waiting = [times_to_cross[i] for i in self.waiting_indices()]
        crossed = [times_to_cross[i] for i in self.crossed_indices()]
        return f"({waiting}, {self.torch_side.arrow}, {crossed})"

    @staticmethod
    def _validate_people_count(people_count: int) -> None:
        if people_count < MIN_PEOPLE or people_count > MAX_PEOPLE:
            raise PersonCountOutOfRange(people_count, MIN_PEOPLE, MAX_PEOPLE)

    def _validate_crosser_index(self, crosser_index: int) -> None:
        people_count = self.people_count
        if crosser_index < 0 or crosser_index >= people_count:
            raise CrosserIndexOutOfRange(crosser_index, people_count)

    def __str__(self) -> str:
        return self.as_bits()
