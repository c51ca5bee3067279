"""Planar polar state vector for solar sail trajectory propagation.

The state vector contains:
- r: radial distance from the central body [length]
- theta: polar angle [rad], accumulated without wrap-around
- v_r: radial velocity [length/time]
- v_t: tangential velocity [length/time]

Total: 4 state variables, always in this order.

Units are whatever the caller chooses as long as they are consistent with the
gravitational parameter. The reference setup uses canonical heliocentric units
(AU, mu = 1), in which a circular orbit at r = 1 has a period of 2*pi.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from solarsail._typecheck import StateLike, typecheck

STATE_SIZE = 4
STATE_COMPONENTS = ("r", "theta", "v_r", "v_t")


@typecheck
def as_state_array(y: StateLike) -> NDArray[np.float64]:
    """Copy ``y`` into a fresh float64 state array, checking its shape.

    Raises:
        ValueError: If ``y`` does not hold exactly four components.
    """
    arr = np.array(y, dtype=np.float64)
    if arr.shape != (STATE_SIZE,):
        raise ValueError(f"State must be shape ({STATE_SIZE},), got {arr.shape}")
    return arr


@typecheck
@dataclass(frozen=True)
class SailState:
    """Polar state of the sail at one instant.

    Attributes:
        r: Radial distance [length]
        theta: Polar angle [rad]
        v_r: Radial velocity [length/time]
        v_t: Tangential velocity [length/time]
    """
    r: float
    theta: float = 0.0
    v_r: float = 0.0
    v_t: float = 0.0

    @classmethod
    def circular(cls, radius: float = 1.0, mu: float = 1.0, theta: float = 0.0) -> "SailState":
        """Create the state of a circular orbit of the given radius.

        Args:
            radius: Orbit radius [length]
            mu: Gravitational parameter of the central body [length^3/time^2]
            theta: Starting polar angle [rad]
        """
        if radius <= 0:
            raise ValueError(f"Radius must be positive, got {radius}")
        if mu <= 0:
            raise ValueError(f"mu must be positive, got {mu}")
        return cls(r=radius, theta=theta, v_r=0.0, v_t=float(np.sqrt(mu / radius)))

    def to_array(self) -> NDArray[np.float64]:
        """Convert state to flat array for integration."""
        return np.array([self.r, self.theta, self.v_r, self.v_t], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: StateLike) -> "SailState":
        """Create state from flat array."""
        r, theta, v_r, v_t = as_state_array(arr)
        return cls(r=float(r), theta=float(theta), v_r=float(v_r), v_t=float(v_t))

    @property
    def speed(self) -> float:
        """Speed magnitude [length/time]."""
        return float(np.hypot(self.v_r, self.v_t))

    def specific_energy(self, mu: float) -> float:
        """Two-body specific orbital energy, ignoring radiation pressure."""
        return 0.5 * self.speed**2 - mu / self.r

    def angular_momentum(self) -> float:
        """Specific angular momentum about the central body."""
        return self.r * self.v_t
