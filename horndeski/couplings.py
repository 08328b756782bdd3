"""Coupling functions and scalar potentials for scalar-tensor theories."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _zeros_like(value):
    """Zero of the same shape as ``value``: a float for scalars, an array otherwise."""
    return np.zeros_like(np.asarray(value, dtype=float))[()]


@dataclass
class DefaultCouplingParams:
    """Parameters of the default cubic Horndeski coupling.

    ``scalar_mass`` may be changed after construction, for example set to
    zero temporarily to switch the potential off.
    """

    scalar_mass: float
    g3: float
    g2: float


@dataclass
class DefaultCouplingAndPotential:
    """G2(phi, X) = g2 X^2 - (m phi)^2 / 2 and G3(phi, X) = g3 X.

    The mass term lives inside G2, so the separate potential V is zero.
    """

    params: DefaultCouplingParams

    def V(self, phi, X):
        """Separate potential; zero because the mass term is part of G2."""
        return _zeros_like(phi)

    def dV_dphi(self, phi, X):
        return _zeros_like(phi)

    def G2(self, phi, X):
        p = self.params
        return p.g2 * X * X - 0.5 * (p.scalar_mass * phi) ** 2

    def dG2_dphi(self, phi, X):
        m = self.params.scalar_mass
        return -m * m * phi

    def dG2_dX(self, phi, X):
        return 2.0 * self.params.g2 * X

    def d2G2_dXX(self, phi, X):
        return 2.0 * self.params.g2

    def d2G2_dXphi(self, phi, X):
        return _zeros_like(phi)

    def G3(self, phi, X):
        return self.params.g3 * X

    def dG3_dphi(self, phi, X):
        return _zeros_like(phi)

    def dG3_dX(self, phi, X):
        return self.params.g3

    def d2G3_dXX(self, phi, X):
        return _zeros_like(phi)

    def d2G3_dXphi(self, phi, X):
        return _zeros_like(phi)

    def d2G3_dphiphi(self, phi, X):
        return _zeros_like(phi)


@dataclass(frozen=True)
class GaussBonnetParams:
    """Parameters of the exponential Gauss-Bonnet coupling and the potential."""

    lambda_GB: float
    quadratic_factor: float
    quartic_factor: float
    cutoff_GB: float
    factor_GB: float
    scalar_mass: float


@dataclass(frozen=True)
class CouplingValues:
    """Coupling derivatives and potential evaluated at a point."""

    dfdphi: float
    d2fdphi2: float
    g2: float
    dg2dphi: float
    V_of_phi: float
    dVdphi: float


@dataclass(frozen=True)
class GaussBonnetCoupling:
    """Exponential Gauss-Bonnet coupling with a smooth cutoff inside the horizon.

    f(phi) = lambda / (2 beta) * (1 - exp(-beta phi^2 (1 + kappa phi^2))),
    switched off smoothly where the conformal factor chi drops below the cutoff.
    """

    params: GaussBonnetParams

    def compute(self, phi, chi) -> CouplingValues:
        p = self.params
        phi2 = phi * phi
        cutoff_factor = 1.0 + np.exp(-p.factor_GB * (chi - p.cutoff_GB))
        exponential = np.exp(
            -p.quadratic_factor * phi2 * (1.0 + p.quartic_factor * phi2)
        )
        quartic_term = 1.0 + 2.0 * p.quartic_factor * phi2
        prefactor = p.lambda_GB / cutoff_factor * exponential

        dfdphi = prefactor * phi * quartic_term
        d2fdphi2 = prefactor * (
            1.0
            + 3.0 * p.quartic_factor * phi2
            - 2.0 * p.quadratic_factor * phi2 * quartic_term * quartic_term
        )
        return CouplingValues(
            dfdphi=dfdphi,
            d2fdphi2=d2fdphi2,
            g2=0.0,
            dg2dphi=0.0,
            V_of_phi=0.5 * (p.scalar_mass * phi) ** 2,
            dVdphi=p.scalar_mass**2 * phi,
        )