from __future__ import annotations

from .common import GenericSlotsExhaustedError

GENERIC_SLOT_NAMES = ("T0", "T1", "T2", "T3", "T4", "T5")


class GenericSlots:
    """Fixed pool of type parameters owned by a single callable's emission."""

    def __init__(self, owner: str, names: tuple[str, ...] = GENERIC_SLOT_NAMES) -> None:
        self.owner = owner
        self._available = list(reversed(names))

    @property
    def remaining(self) -> int:
        return len(self._available)

    def take(self) -> str:
        if not self._available:
            raise GenericSlotsExhaustedError(
                f"{self.owner} ran out of generic slots "
                f"(at most {len(GENERIC_SLOT_NAMES)} protocol/generic positions are supported)"
            )
        return self._available.pop()

    def allocate(self, count: int) -> list[str]:
        # The last position gets T0, the one before it T1, and so on.
        taken = [self.take() for _ in range(count)]
        taken.reverse()
        return taken
