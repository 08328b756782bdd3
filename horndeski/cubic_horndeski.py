"""Cubic Horndeski scalar-tensor theory in the CCZ4 3+1 formulation.

The theory comes from the action

    S = int d^4x ( R / (16 pi G) + X + G2(phi, X) + G3(phi, X) Box phi ),

with X = -1/2 nabla_mu phi nabla^mu phi. Any potential of the scalar field is
carried by G2 (or by the separate V of the coupling object). The evolved
theory fields are phi and its conjugate momentum Pi.

Tensors are numpy arrays on the three spatial dimensions. First derivatives
put the derivative index last: ``d1.h[i, j, k]`` is the k-th derivative of
``h[i, j]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

DIM = 3
_CHI_FLOOR = 1e-6


class CouplingAndPotential(Protocol):
    """The functions G2, G3, V and the derivatives the theory needs."""

    def V(self, phi, X): ...
    def dV_dphi(self, phi, X): ...
    def G2(self, phi, X): ...
    def dG2_dphi(self, phi, X): ...
    def dG2_dX(self, phi, X): ...
    def d2G2_dXX(self, phi, X): ...
    def d2G2_dXphi(self, phi, X): ...
    def dG3_dphi(self, phi, X): ...
    def dG3_dX(self, phi, X): ...
    def d2G3_dXX(self, phi, X): ...
    def d2G3_dXphi(self, phi, X): ...
    def d2G3_dphiphi(self, phi, X): ...


def _array(value, shape, name):
    arr = np.asarray(value, dtype=float)
    if arr.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
    return arr


@dataclass
class FieldVars:
    """Values at a point of the geometric and theory variables used here."""

    chi: float
    h: np.ndarray
    K: float
    A: np.ndarray
    lapse: float
    phi: float
    Pi: float

    def __post_init__(self):
        self.chi = float(self.chi)
        self.K = float(self.K)
        self.lapse = float(self.lapse)
        self.phi = float(self.phi)
        self.Pi = float(self.Pi)
        self.h = _array(self.h, (DIM, DIM), "h")
        self.A = _array(self.A, (DIM, DIM), "A")


@dataclass
class FirstDerivs:
    """First spatial derivatives; the derivative index is the last axis."""

    chi: np.ndarray
    h: np.ndarray
    lapse: np.ndarray
    phi: np.ndarray
    Pi: np.ndarray

    def __post_init__(self):
        self.chi = _array(self.chi, (DIM,), "d1.chi")
        self.h = _array(self.h, (DIM, DIM, DIM), "d1.h")
        self.lapse = _array(self.lapse, (DIM,), "d1.lapse")
        self.phi = _array(self.phi, (DIM,), "d1.phi")
        self.Pi = _array(self.Pi, (DIM,), "d1.Pi")


@dataclass
class SecondDerivs:
    """Second spatial derivatives of the scalar field."""

    phi: np.ndarray

    def __post_init__(self):
        self.phi = _array(self.phi, (DIM, DIM), "d2.phi")


@dataclass
class UsefulQuantities:
    """Gauge-independent intermediate quantities of the theory."""

    lie_deriv_Pi_no_lapse: float
    V: float
    g2: float
    dg2_dX: float
    dg3_dX: float
    dV_dphi: float
    dg2_dphi: float
    dg3_dphi: float
    d2g2_dXX: float
    d2g3_dXX: float
    d2g2_dXphi: float
    d2g3_dXphi: float
    d2g3_dphiphi: float
    tau: float
    tau_i: np.ndarray
    tau_ij: np.ndarray
    tau_i_dot_dphi: float
    tau_ij_dot_dphi: np.ndarray
    tau_ij_dot_dphi2: float


@dataclass(frozen=True)
class RhoAndSi:
    """Energy density rho = n^a n^b T_ab and momentum density S_i = -n^a T_ai."""

    rho: float
    Si: np.ndarray


@dataclass(frozen=True)
class SijTFAndS:
    """Trace-free spatial stress S_ij and its trace S."""

    Sij_TF: np.ndarray
    S: float


@dataclass(frozen=True)
class AllRhos:
    """Contributions to the energy density, kept as diagnostics."""

    phi: float
    g2: float
    g3: float
    GB: float


@dataclass(frozen=True)
class TheoryRHS:
    """Time derivatives of the theory fields."""

    phi: float
    Pi: float


def inverse_sym(h):
    """Inverse of a symmetric 3x3 matrix."""
    h = _array(h, (DIM, DIM), "h")
    return np.linalg.inv(h)


def christoffel_ULL(d1_h, h_UU):
    """Christoffel symbols Gamma^i_jk of the metric with derivatives ``d1_h``."""
    d1_h = _array(d1_h, (DIM, DIM, DIM), "d1_h")
    h_UU = _array(h_UU, (DIM, DIM), "h_UU")
    # LLL[i, j, k] = 1/2 (d_k h_ij + d_j h_ik - d_i h_jk)
    lll = 0.5 * (
        np.transpose(d1_h, (1, 0, 2))
        + np.transpose(d1_h, (1, 2, 0))
        - np.transpose(d1_h, (2, 0, 1))
    )
    return np.einsum("il,ljk->ijk", h_UU, lll)


def trace(tensor, h_UU):
    """Trace of a covariant rank-2 tensor with the inverse metric."""
    return float(np.einsum("ij,ij->", np.asarray(h_UU), np.asarray(tensor)))


def make_trace_free(tensor, h, h_UU):
    """Return the trace-free part of a covariant rank-2 tensor."""
    tensor = np.asarray(tensor, dtype=float)
    return tensor - np.asarray(h, dtype=float) * trace(tensor, h_UU) / DIM


def _kinetic_terms(vars: FieldVars, d1: FirstDerivs, h_UU):
    """Return (X, Xplus): the Lagrangian kinetic term and energy density one."""
    dphi_dot_dphi = vars.chi * float(d1.phi @ h_UU @ d1.phi)
    pi2 = vars.Pi * vars.Pi
    return 0.5 * (pi2 - dphi_dot_dphi), 0.5 * (pi2 + dphi_dot_dphi)


class CubicHorndeski:
    """Energy-momentum tensor and evolution of the cubic Horndeski scalar."""

    def __init__(self, coupling_and_potential: CouplingAndPotential):
        self.coupling_and_potential = coupling_and_potential

    def _geometry(self, vars: FieldVars, d1: FirstDerivs):
        h_UU = inverse_sym(vars.h)
        return h_UU, christoffel_ULL(d1.h, h_UU)

    def _quantities(self, vars, d1, d2):
        h_UU, chris = self._geometry(vars, d1)
        return h_UU, self.compute_useful_quantities(vars, d1, d2, h_UU, chris)

    def compute_useful_quantities(
        self, vars: FieldVars, d1: FirstDerivs, d2: SecondDerivs, h_UU, chris_ULL
    ) -> UsefulQuantities:
        """Couplings, the tau auxiliaries and the Lie derivative of Pi."""
        cp = self.coupling_and_potential
        h_UU = np.asarray(h_UU, dtype=float)
        chris_ULL = np.asarray(chris_ULL, dtype=float)
        chi, Pi, K = vars.chi, vars.Pi, vars.K
        dphi = d1.phi

        X, _ = _kinetic_terms(vars, d1, h_UU)
        phi = vars.phi

        V = cp.V(phi, X)
        g2 = cp.G2(phi, X)
        dV_dphi = cp.dV_dphi(phi, X)
        dg2_dphi = cp.dG2_dphi(phi, X)
        dg3_dphi = cp.dG3_dphi(phi, X)
        dg2_dX = cp.dG2_dX(phi, X)
        dg3_dX = cp.dG3_dX(phi, X)
        d2g2_dXX = cp.d2G2_dXX(phi, X)
        d2g2_dXphi = cp.d2G2_dXphi(phi, X)
        d2g3_dXX = cp.d2G3_dXX(phi, X)
        d2g3_dXphi = cp.d2G3_dXphi(phi, X)
        d2g3_dphiphi = cp.d2G3_dphiphi(phi, X)

        covd2phi = d2.phi - np.einsum("kij,k->ij", chris_ULL, dphi)
        dphi_dot_dchi = float(dphi @ h_UU @ d1.chi)

        tau_ij = (
            vars.A * Pi
            + K * Pi * vars.h / 3.0
            + 0.5
            * (
                -vars.h * dphi_dot_dchi
                + np.outer(dphi, d1.chi)
                + np.outer(d1.chi, dphi)
                + chi * (covd2phi + covd2phi.T)
            )
        )
        tau = trace(tau_ij, h_UU)
        tau_i = K * dphi / 3.0 + d1.Pi + vars.A @ h_UU @ dphi

        tau_ij_dot_dphi = tau_ij @ h_UU @ dphi
        tau_ij_dot_dphi2 = float(dphi @ h_UU @ tau_ij_dot_dphi)
        tau_i_dot_dphi = float(dphi @ h_UU @ tau_i)

        another = 2.0 * Pi * tau_i_dot_dphi - tau_ij_dot_dphi2

        denominator = (
            1.0
            + dg2_dX
            + 2.0 * dg3_dphi
            + 2.0 * tau * dg3_dX
            - X * X * dg3_dX * dg3_dX
            - tau_ij_dot_dphi2 * chi * d2g3_dXX
            - 2.0 * X * d2g3_dXphi
            + Pi
            * Pi
            * (
                2.0 * X * dg3_dX * dg3_dX
                + d2g2_dXX
                + tau * d2g3_dXX
                + 2.0 * d2g3_dXphi
            )
        )

        numerator = (
            tau * (1.0 + dg2_dX + 2.0 * dg3_dphi - 2.0 * X * d2g3_dXphi)
            - dg3_dX * dg3_dX * (tau * X - 2.0 * chi * another) * X
            + (d2g2_dXX + 2.0 * d2g3_dXphi) * another * chi
            - d2g3_dXX
            * chi
            * (-tau * another + chi * tau_i_dot_dphi * tau_i_dot_dphi)
            + dg2_dphi
            - dV_dphi
            - 2.0 * X * (d2g3_dphiphi + d2g2_dXphi)
            - dg3_dX
            * (-tau * tau + X * g2 + X * X * (2.0 + dg2_dX + 4.0 * dg3_dphi))
        )

        w = Pi * tau_i - tau_ij_dot_dphi
        numerator += d2g3_dXX * chi * float(w @ h_UU @ w)
        numerator += 2.0 * chi * dg3_dX * float(tau_i @ h_UU @ tau_i)
        numerator -= dg3_dX * float(
            np.einsum("ik,jl,ij,kl->", h_UU, h_UU, tau_ij, tau_ij)
        )

        return UsefulQuantities(
            lie_deriv_Pi_no_lapse=numerator / denominator,
            V=V,
            g2=g2,
            dg2_dX=dg2_dX,
            dg3_dX=dg3_dX,
            dV_dphi=dV_dphi,
            dg2_dphi=dg2_dphi,
            dg3_dphi=dg3_dphi,
            d2g2_dXX=d2g2_dXX,
            d2g3_dXX=d2g3_dXX,
            d2g2_dXphi=d2g2_dXphi,
            d2g3_dXphi=d2g3_dXphi,
            d2g3_dphiphi=d2g3_dphiphi,
            tau=tau,
            tau_i=tau_i,
            tau_ij=tau_ij,
            tau_i_dot_dphi=tau_i_dot_dphi,
            tau_ij_dot_dphi=tau_ij_dot_dphi,
            tau_ij_dot_dphi2=tau_ij_dot_dphi2,
        )

    def compute_rho_and_Si(
        self, vars: FieldVars, d1: FirstDerivs, d2: SecondDerivs
    ) -> RhoAndSi:
        """Energy and momentum densities; these need no gauge variables."""
        h_UU, q = self._quantities(vars, d1, d2)
        _, Xplus = _kinetic_terms(vars, d1, h_UU)
        Pi, chi, dphi = vars.Pi, vars.chi, d1.phi

        rho = (
            q.dg3_dX * (q.tau * Pi * Pi - q.tau_ij_dot_dphi2 * chi)
            + q.dg3_dphi * 2.0 * Xplus
            + q.dg2_dX * Pi * Pi
            - q.g2
            + Xplus
            + q.V
        )
        Si = q.dg3_dX * (
            -q.tau * Pi * dphi
            - Pi * Pi * q.tau_i
            + dphi * q.tau_i_dot_dphi * chi
            + Pi * q.tau_ij_dot_dphi
        ) - Pi * dphi * (1.0 + q.dg2_dX + 2.0 * q.dg3_dphi)
        return RhoAndSi(rho=rho, Si=Si)

    def compute_Sij_TF_and_S(
        self, vars: FieldVars, d1: FirstDerivs, d2: SecondDerivs, advec: FieldVars
    ) -> SijTFAndS:
        """Trace-free spatial stress and its trace."""
        h_UU, q = self._quantities(vars, d1, d2)
        X, _ = _kinetic_terms(vars, d1, h_UU)
        Pi, h, dphi = vars.Pi, vars.h, d1.phi
        chi_regularised = max(vars.chi, _CHI_FLOOR)

        dphi_dphi = np.outer(dphi, dphi)
        dphi_tau_i = np.outer(dphi, q.tau_i)
        dphi_tau_ij = np.outer(dphi, q.tau_ij_dot_dphi)

        Sij = (
            q.dg3_dX
            * (
                q.tau * dphi_dphi
                + Pi * (dphi_tau_i + dphi_tau_i.T)
                - (dphi_tau_ij + dphi_tau_ij.T)
                - h * (2.0 * Pi * q.tau_i_dot_dphi - q.tau_ij_dot_dphi2)
                + q.lie_deriv_Pi_no_lapse
                * (-dphi_dphi + h / chi_regularised * Pi * Pi)
            )
            + dphi_dphi * (1.0 + q.dg2_dX + 2.0 * q.dg3_dphi)
            + h / chi_regularised * (X + q.g2 - q.V + 2.0 * X * q.dg3_dphi)
        )
        S = vars.chi * trace(Sij, h_UU)
        return SijTFAndS(Sij_TF=make_trace_free(Sij, h, h_UU), S=S)

    def theory_rhs(
        self, vars: FieldVars, d1: FirstDerivs, d2: SecondDerivs, advec: FieldVars
    ) -> TheoryRHS:
        """Time derivatives of phi and Pi, advection included."""
        h_UU, q = self._quantities(vars, d1, d2)
        lie_deriv_Pi_times_lapse = vars.lapse * q.lie_deriv_Pi_no_lapse + vars.chi * float(
            d1.lapse @ h_UU @ d1.phi
        )
        return TheoryRHS(
            phi=advec.phi + vars.lapse * vars.Pi,
            Pi=advec.Pi + lie_deriv_Pi_times_lapse,
        )

    def compute_all_rhos(
        self, vars: FieldVars, d1: FirstDerivs, d2: SecondDerivs
    ) -> AllRhos:
        """Split of the energy density into scalar, G2, G3 and Gauss-Bonnet parts."""
        h_UU, q = self._quantities(vars, d1, d2)
        _, Xplus = _kinetic_terms(vars, d1, h_UU)
        Pi, chi = vars.Pi, vars.chi
        return AllRhos(
            phi=Xplus + q.V,
            g2=q.dg2_dX * Pi * Pi - q.g2,
            g3=q.dg3_dX * (q.tau * Pi * Pi - q.tau_ij_dot_dphi2 * chi)
            + q.dg3_dphi * 2.0 * Xplus,
            GB=0.0,
        )