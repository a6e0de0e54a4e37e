"""Takeoff performance tables for the FK9 Mk VI.

Tables list ground roll and distance to a 50 ft obstacle against takeoff mass,
as published in the approved flight manual for each engine variant. Values
are for a paved runway at sea level in standard conditions.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np
import numpy.typing as npt

MIN_TABLE_POINTS = 3


class Engine(Enum):
    """Engine variants with published takeoff data."""

    ROTAX_912_UL = "rotax_912_ul"
    ROTAX_912_ULS = "rotax_912_uls"


def _frozen_array(values: npt.ArrayLike) -> npt.NDArray[np.float64]:
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class PerformanceTable:
    """Mass to distance table for one engine variant.

    Build tables with from_columns; the columns are stored as read-only
    float arrays.

    Attributes:
        mass: Takeoff mass (kg), strictly ascending
        ground_roll: Ground roll (m) per mass entry
        distance_50ft: Distance to clear 50 ft (m) per mass entry
    """

    mass: npt.NDArray[np.float64]
    ground_roll: npt.NDArray[np.float64]
    distance_50ft: npt.NDArray[np.float64]

    @classmethod
    def from_columns(
        cls,
        mass: Sequence[float],
        ground_roll: Sequence[float],
        distance_50ft: Sequence[float],
    ) -> "PerformanceTable":
        """Build a table from published columns.

        Raises:
            ValueError: If the columns differ in length, have fewer than
                three points, or the masses are not strictly ascending.
        """
        return cls(_frozen_array(mass), _frozen_array(ground_roll), _frozen_array(distance_50ft))

    def __post_init__(self) -> None:
        for name in ("mass", "ground_roll", "distance_50ft"):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))

        if not len(self.mass) == len(self.ground_roll) == len(self.distance_50ft):
            raise ValueError(
                f"Performance table columns differ in length: mass={len(self.mass)}, "
                f"ground_roll={len(self.ground_roll)}, distance_50ft={len(self.distance_50ft)}"
            )
        if len(self.mass) < MIN_TABLE_POINTS:
            raise ValueError(
                f"Performance table needs at least {MIN_TABLE_POINTS} points, got {len(self.mass)}"
            )
        if not np.all(np.diff(self.mass) > 0):
            raise ValueError("Performance table masses must be strictly ascending")

    @property
    def min_mass(self) -> float:
        """Lowest tabulated mass (kg)."""
        return float(self.mass[0])

    @property
    def max_mass(self) -> float:
        """Highest tabulated mass (kg)."""
        return float(self.mass[-1])

    def bracket(self, mass_kg: float) -> tuple[int, float]:
        """Find the table interval holding a mass.

        Args:
            mass_kg: Mass within [min_mass, max_mass].

        Returns:
            Tuple of (lower index, interpolation factor). The factor is 0 when
            the mass equals the lower entry and 1 only at the last entry.
        """
        index = int(np.searchsorted(self.mass, mass_kg, side="right")) - 1
        index = min(max(index, 0), len(self.mass) - 2)
        lower = float(self.mass[index])
        upper = float(self.mass[index + 1])
        return index, (mass_kg - lower) / (upper - lower)

    def interpolate(self, mass_kg: float, column: npt.NDArray[np.float64]) -> float:
        """Linearly interpolate a distance column at a mass.

        Args:
            mass_kg: Mass within [min_mass, max_mass].
            column: Either ground_roll or distance_50ft.

        Returns:
            Interpolated distance (m).
        """
        index, factor = self.bracket(mass_kg)
        lower = float(column[index])
        upper = float(column[index + 1])
        return lower + factor * (upper - lower)


PERFORMANCE_TABLES: dict[Engine, PerformanceTable] = {
    Engine.ROTAX_912_UL: PerformanceTable.from_columns(
        mass=(472.5, 525.0, 540.0),
        ground_roll=(106.0, 140.0, 147.0),
        distance_50ft=(265.0, 350.0, 367.0),
    ),
    Engine.ROTAX_912_ULS: PerformanceTable.from_columns(
        mass=(472.5, 525.0, 540.0, 570.0, 600.0),
        ground_roll=(100.0, 128.0, 136.0, 141.0, 153.0),
        distance_50ft=(225.0, 320.0, 338.0, 352.0, 375.0),
    ),
}


def performance_table(engine: Engine) -> PerformanceTable:
    """Get the performance table for an engine variant."""
    return PERFORMANCE_TABLES[engine]
