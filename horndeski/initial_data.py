"""Initial configuration of the scalar field: a spherical Gaussian shell."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class InitialScalarParams:
    """Gaussian shell parameters.

    ``amplitude`` is the peak value, ``center`` the centre of the shell,
    ``width`` its width and ``r0`` the radius at which it peaks.
    """

    amplitude: float
    center: tuple[float, float, float]
    width: float
    r0: float


@dataclass(frozen=True)
class InitialScalarData:
    """Sets phi to a Gaussian in radius and its momentum Pi to zero."""

    params: InitialScalarParams

    def radius(self, position):
        """Distance of ``position`` (last axis: coordinates) from the centre."""
        center = np.asarray(self.params.center, dtype=float)
        offset = np.asarray(position, dtype=float)
        if offset.ndim == 0 or offset.shape[-1] != center.shape[0]:
            raise ValueError(
                f"position must have {center.shape[0]} coordinates along its last axis"
            )
        return np.sqrt(np.sum((offset - center) ** 2, axis=-1))

    def compute(self, position):
        """Return ``(phi, Pi)`` at ``position``."""
        p = self.params
        r = self.radius(position)
        phi = p.amplitude * np.exp(-(((r - p.r0) / p.width) ** 2))
        return phi, np.zeros_like(phi)