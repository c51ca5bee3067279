"""Shared runtime type-checking configuration.

All public functions and dataclasses are decorated with ``typecheck`` instead
of a bare ``beartype`` so that integer literals satisfy ``float`` hints
(``mu=1``, ``y0=[1, 0, 0, 1]`` and integer arrays are valid inputs).
"""

from collections.abc import Sequence

import numpy as np
from beartype import BeartypeConf, beartype
from numpy.typing import NDArray

typecheck = beartype(conf=BeartypeConf(is_pep484_tower=True))

# Anything that converts cleanly to a 1D float64 state array
StateLike = NDArray[np.floating] | NDArray[np.integer] | Sequence[float]

# Ordered real values such as control angles or durations
FloatSequence = Sequence[float] | NDArray[np.floating] | NDArray[np.integer]
