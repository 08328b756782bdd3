# horndeski

This package evaluates a cubic Horndeski scalar-tensor theory at a single
point, in the conformal 3+1 (CCZ4) variables. You give it the metric and
scalar field variables at the point, together with their first and second
spatial derivatives. It computes:

- the matter sources of the Einstein equations: the energy density `rho`,
  the momentum density `S_i`, the trace-free stress `S_ij` and its trace `S`;
- the time derivatives of the scalar field `phi` and its conjugate momentum
  `Pi`;
- the separate parts of the energy density (`phi`, `G2`, `G3` and
  Gauss-Bonnet), which serve as diagnostics.

The theory comes from the action

    S = ∫ d^4x ( R / (16 π G) + X + G2(φ, X) + G3(φ, X) □φ ),

with `X = -½ ∇_μ φ ∇^μ φ`.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Coupling functions (`horndeski.couplings`)

A coupling object parametrises the theory. It provides the methods `V`,
`dV_dphi`, `G2`, `dG2_dphi`, `dG2_dX`, `d2G2_dXX`, `d2G2_dXphi`, `dG3_dphi`,
`dG3_dX`, `d2G3_dXX`, `d2G3_dXphi` and `d2G3_dphiphi`, and each one takes the
arguments `(phi, X)`.

`DefaultCouplingAndPotential` is configured with `DefaultCouplingParams`
(`scalar_mass`, `g3`, `g2`). It sets `G2 = g2 X² − ½ (m φ)²` and
`G3 = g3 X`. The mass term is part of `G2`, so `V` and `dV_dphi` return zero.

```python
from horndeski.couplings import DefaultCouplingAndPotential, DefaultCouplingParams

coupling = DefaultCouplingAndPotential(
    DefaultCouplingParams(scalar_mass=0.1, g3=0.2, g2=0.05)
)
coupling.G2(0.5, 0.3)
coupling.dG3_dX(0.5, 0.3)
```

You can use any object that has the same methods in its place.

`GaussBonnetCoupling` is for scalar Gauss-Bonnet models and is configured with
`GaussBonnetParams` (`lambda_GB`, `quadratic_factor`, `quartic_factor`,
`cutoff_GB`, `factor_GB`, `scalar_mass`). It evaluates the exponential
coupling `f(φ) = λ/(2β) (1 − exp(−β φ² (1 + κ φ²)))`, which is switched off
smoothly where the conformal factor `chi` falls below `cutoff_GB`. Its
`compute(phi, chi)` method returns a `CouplingValues` record with the fields
`dfdphi`, `d2fdphi2`, `g2`, `dg2dphi`, `V_of_phi` and `dVdphi`. In that record
`g2` and `dg2dphi` are zero and the potential is `½ (m φ)²`.

## The theory (`horndeski.cubic_horndeski`)

```python
from horndeski.cubic_horndeski import CubicHorndeski

theory = CubicHorndeski(coupling)
```

The inputs at a point are the following:

- `FieldVars`: `chi`, `h` (3×3), `K`, `A` (3×3), `lapse`, `phi`, `Pi`;
- `FirstDerivs`: `chi`, `h` (3×3×3), `lapse`, `phi`, `Pi`. The derivative
  index is the last axis, so `d1.h[i, j, k]` is `∂_k h_ij`;
- `SecondDerivs`: `phi` (3×3).

Arrays of the wrong shape raise `ValueError`.

The theory then gives these results:

- `theory.compute_rho_and_Si(vars, d1, d2)` returns `RhoAndSi`
  (`rho`, `Si`);
- `theory.compute_Sij_TF_and_S(vars, d1, d2, advec)` returns `SijTFAndS`
  (`Sij_TF`, `S`);
- `theory.theory_rhs(vars, d1, d2, advec)` returns `TheoryRHS` (`phi`, `Pi`),
  the time derivatives including the advection terms passed in `advec`
  (a `FieldVars`);
- `theory.compute_all_rhos(vars, d1, d2)` returns `AllRhos` (`phi`, `g2`,
  `g3`, `GB`). Here `GB` is always zero;
- `theory.compute_useful_quantities(vars, d1, d2, h_UU, chris_ULL)` returns
  `UsefulQuantities`, the intermediate quantities that all of the above share.

The tensor helpers `inverse_sym`, `christoffel_ULL`, `trace` and
`make_trace_free` work on numpy arrays and can also be used on their own.

## Initial data (`horndeski.initial_data`)

`InitialScalarData` is configured with `InitialScalarParams` (`amplitude`,
`center`, `width`, `r0`). It gives a Gaussian shell of scalar field,
`phi = A exp(−((r − r0)/w)²)`, with `Pi = 0`. Positions carry their
coordinates on the last axis, so arrays of points are accepted.

```python
from horndeski.initial_data import InitialScalarData, InitialScalarParams

data = InitialScalarData(
    InitialScalarParams(amplitude=0.1, center=(0.0, 0.0, 0.0), width=1.0, r0=5.0)
)
data.radius((3.0, 4.0, 0.0))         # 5.0
phi, Pi = data.compute((3.0, 4.0, 0.0))
```

## Diagnostic variables (`horndeski.variables`)

`DiagnosticVar` is an `IntEnum` that numbers the diagnostic quantities:
`HAM`, `MOM1`, `MOM2`, `MOM3`, `RHO_PHI`, `RHO_G2`, `RHO_G3` and `RHO_GB`.
Each member has a `label`, and `diagnostic_variable_names()` returns all the
labels in index order. `NUM_DIAGNOSTIC_VARS` is the number of members.

## What the package does not do

Everything here works at a single point. The package does not include:

- grids or mesh refinement;
- finite-difference derivatives;
- time integration;
- the vacuum CCZ4 equations or gauge evolution;
- constraint or Weyl scalar computation;
- black hole initial data;
- reading parameter files or writing output.

The caller supplies the variables and their derivatives and combines the
results with their own evolution code.