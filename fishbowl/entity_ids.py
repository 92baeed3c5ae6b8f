"""Entity id generation.

Pellets and bubbles draw from one shared counter so the two particle sets
can never hold the same id. Ids are never reused within a process.
"""

import itertools
from typing import Dict, Iterator


class IdGenerator:
    """Generates unique, monotonically increasing integer ids.

    Example:
        gen = IdGenerator()
        gen.next_particle()  # 1
        gen.next_particle()  # 2
        gen.next_fish()      # 1
    """

    def __init__(self, start_offset: int = 0) -> None:
        """Initialize the generator.

        Args:
            start_offset: Starting value for all counters (for testing)
        """
        self._particle_counter: Iterator[int] = itertools.count(start_offset + 1)
        self._fish_counter: Iterator[int] = itertools.count(start_offset + 1)
        self._last_particle = start_offset
        self._last_fish = start_offset

    def next_particle(self) -> int:
        """Generate the next particle id (pellet or bubble)."""
        self._last_particle = next(self._particle_counter)
        return self._last_particle

    def next_fish(self) -> int:
        """Generate the next fish id."""
        self._last_fish = next(self._fish_counter)
        return self._last_fish

    def get_stats(self) -> Dict[str, int]:
        """Get current counter values for debugging."""
        return {"particle": self._last_particle, "fish": self._last_fish}


# Process-wide generator used when a simulation is not given its own.
default_id_generator = IdGenerator()
