from dataclasses import dataclass

import numpy as np
import pytest

from horndeski.couplings import DefaultCouplingAndPotential, DefaultCouplingParams
from horndeski.cubic_horndeski import (
    CubicHorndeski,
    FieldVars,
    FirstDerivs,
    SecondDerivs,
    christoffel_ULL,
    inverse_sym,
    make_trace_free,
)


def _contract(tensor, h_UU):
    """Full contraction of a rank-2 tensor with the inverse metric."""
    return float(np.einsum("ij,ij->", np.asarray(h_UU), np.asarray(tensor)))


@dataclass
class ConstantCoupling:
    """Coupling returning fixed values, as in the reference test."""

    V_of_phi: float = 0.126878274512084
    dVdphi: float = 0.33695981506275907
    G2_value: float = 0.917190606110017
    dG2dphi: float = 0.6122659231946126
    dG2dX: float = 0.6404165971170108
    d2G2dXX: float = 0.6454021466326636
    d2G2dXphi: float = 0.18910065371098028
    G3_value: float = 0.1087486611571844
    dG3dphi: float = 0.5142134037177606
    dG3dX: float = 0.2971459836134873
    d2G3dXX: float = 0.4266726237662146
    d2G3dXphi: float = 0.40982512136572513
    d2G3dphiphi: float = 0.5073205842021682

    def V(self, phi, X):
        return self.V_of_phi

    def dV_dphi(self, phi, X):
        return self.dVdphi

    def G2(self, phi, X):
        return self.G2_value

    def dG2_dphi(self, phi, X):
        return self.dG2dphi

    def dG2_dX(self, phi, X):
        return self.dG2dX

    def d2G2_dXX(self, phi, X):
        return self.d2G2dXX

    def d2G2_dXphi(self, phi, X):
        return self.d2G2dXphi

    def G3(self, phi, X):
        return self.G3_value

    def dG3_dphi(self, phi, X):
        return self.dG3dphi

    def dG3_dX(self, phi, X):
        return self.dG3dX

    def d2G3_dXX(self, phi, X):
        return self.d2G3dXX

    def d2G3_dXphi(self, phi, X):
        return self.d2G3dXphi

    def d2G3_dphiphi(self, phi, X):
        return self.d2G3dphiphi


def _sym(a, b, c, d, e, f):
    return [[a, b, c], [b, d, e], [c, e, f]]


@pytest.fixture
def reference():
    vars = FieldVars(
        chi=0.3766114550754842,
        phi=0.5861683495052938,
        Pi=-0.41087772284842305,
        lapse=0.7515006738860959,
        K=0.5250143537572622,
        h=_sym(
            -0.8780873952540507,
            -0.39547402062022174,
            -0.13406472503479763,
            -0.8048147254266876,
            -1.1500031838468223,
            -0.09776144358691517,
        ),
        A=_sym(
            -0.14176551053222686,
            0.7270948821720654,
            -0.020352636356769753,
            0.13731750916610097,
            0.21357366667075028,
            0.12571269034409915,
        ),
    )
    d1h_00 = [0.6402690944225398, 0.7922869840915667, 0.303943621624883]
    d1h_01 = [0.7416768232515512, 0.6204575108844881, 0.6665230004126819]
    d1h_02 = [0.022265979766274535, 0.8577789037224097, 0.8826796183382271]
    d1h_11 = [0.41722068480156405, 0.6491498355613006, 0.2246122640436694]
    d1h_12 = [0.4695883945290076, 0.2648881969633705, 0.8159372674684966]
    d1h_22 = [0.01897621509359637, 0.9327315965700824, 0.9643131739702593]
    d1 = FirstDerivs(
        chi=[0.7697996964753482, 0.01463153301196507, 0.1236400776190989],
        phi=[0.15818779707472275, 0.046388251684621906, 0.966295293993328],
        Pi=[-0.8309312860915559, -0.309068102263119, -0.481422513213672],
        lapse=[0.9287320693316086, 0.584047709856421, 0.016358935022488863],
        h=[
            [d1h_00, d1h_01, d1h_02],
            [d1h_01, d1h_11, d1h_12],
            [d1h_02, d1h_12, d1h_22],
        ],
    )
    d2 = SecondDerivs(
        phi=_sym(
            0.8467800635199061,
            0.4379609237088704,
            0.7258967349989873,
            0.00815546122774502,
            0.9640879355822385,
            0.8054673699313728,
        )
    )
    advec = FieldVars(
        chi=0.2949094229445113,
        phi=0.15860743134404665,
        Pi=-0.49909172851170164,
        lapse=0.6404110182550204,
        K=0.5982120318362013,
        h=_sym(
            0.6680683901615849,
            0.6440874544434935,
            0.5259020306300818,
            0.5067266640982678,
            0.37266567046797394,
            0.5703298997880127,
        ),
        A=_sym(
            0.8046260696843603,
            0.591225789728286,
            0.6968736975812385,
            0.7091038871469378,
            0.596151540268173,
            0.5914739940482756,
        ),
    )
    return vars, d1, d2, advec


def _flat(phi, Pi=0.0, lapse=1.0):
    vars = FieldVars(
        chi=1.0, h=np.eye(3), K=0.0, A=np.zeros((3, 3)), lapse=lapse, phi=phi, Pi=Pi
    )
    d1 = FirstDerivs(
        chi=np.zeros(3),
        h=np.zeros((3, 3, 3)),
        lapse=np.zeros(3),
        phi=np.zeros(3),
        Pi=np.zeros(3),
    )
    d2 = SecondDerivs(phi=np.zeros((3, 3)))
    return vars, d1, d2


def _default_theory(mass, g2=0.0, g3=0.0):
    params = DefaultCouplingParams(scalar_mass=mass, g3=g3, g2=g2)
    return CubicHorndeski(DefaultCouplingAndPotential(params))


def test_phi_rhs_matches_reference(reference):
    vars, d1, d2, advec = reference
    rhs = CubicHorndeski(ConstantCoupling()).theory_rhs(vars, d1, d2, advec)
    assert rhs.phi == pytest.approx(-0.15016745426132783, abs=1e-10)


def test_Pi_rhs_matches_reference(reference):
    vars, d1, d2, advec = reference
    rhs = CubicHorndeski(ConstantCoupling()).theory_rhs(vars, d1, d2, advec)
    assert rhs.Pi == pytest.approx(-1.3851411801023632, abs=1e-10)


def test_all_rhos_sum_to_rho(reference):
    vars, d1, d2, _ = reference
    theory = CubicHorndeski(ConstantCoupling())
    rhos = theory.compute_all_rhos(vars, d1, d2)
    rho = theory.compute_rho_and_Si(vars, d1, d2).rho
    assert rhos.phi + rhos.g2 + rhos.g3 + rhos.GB == pytest.approx(rho, rel=1e-12)
    assert rhos.GB == 0.0


def test_Sij_is_trace_free_and_symmetric(reference):
    vars, d1, d2, advec = reference
    out = CubicHorndeski(ConstantCoupling()).compute_Sij_TF_and_S(vars, d1, d2, advec)
    h_UU = inverse_sym(vars.h)
    assert _contract(out.Sij_TF, h_UU) == pytest.approx(0.0, abs=1e-10)
    np.testing.assert_allclose(out.Sij_TF, out.Sij_TF.T, atol=1e-12)


def test_massive_scalar_at_rest_energy_density():
    vars, d1, d2 = _flat(phi=0.3)
    out = _default_theory(mass=0.5).compute_rho_and_Si(vars, d1, d2)
    assert out.rho == pytest.approx(0.5 * 0.25 * 0.09)
    np.testing.assert_allclose(out.Si, np.zeros(3), atol=1e-15)


def test_massive_scalar_at_rest_stress_trace():
    vars, d1, d2 = _flat(phi=0.3)
    out = _default_theory(mass=0.5, g3=0.7).compute_Sij_TF_and_S(vars, d1, d2, vars)
    assert out.S == pytest.approx(-1.5 * 0.25 * 0.09)
    np.testing.assert_allclose(out.Sij_TF, np.zeros((3, 3)), atol=1e-15)


def test_massive_scalar_at_rest_follows_klein_gordon():
    vars, d1, d2 = _flat(phi=0.3, lapse=2.0)
    advec = FieldVars(
        chi=0.0, h=np.eye(3), K=0.0, A=np.zeros((3, 3)), lapse=0.0, phi=0.1, Pi=0.2
    )
    rhs = _default_theory(mass=0.5).theory_rhs(vars, d1, d2, advec)
    assert rhs.phi == pytest.approx(0.1)
    assert rhs.Pi == pytest.approx(0.2 - 2.0 * 0.25 * 0.3)


def test_inverse_sym_inverts(reference):
    vars, *_ = reference
    np.testing.assert_allclose(vars.h @ inverse_sym(vars.h), np.eye(3), atol=1e-12)


def test_inverse_sym_rejects_wrong_shape():
    with pytest.raises(ValueError):
        inverse_sym(np.eye(2))


def test_inverse_sym_rejects_singular():
    with pytest.raises(np.linalg.LinAlgError):
        inverse_sym(np.zeros((3, 3)))


def test_christoffel_vanishes_for_constant_metric():
    chris = christoffel_ULL(np.zeros((3, 3, 3)), np.eye(3))
    np.testing.assert_array_equal(chris, np.zeros((3, 3, 3)))


def test_christoffel_symmetric_in_lower_indices(reference):
    vars, d1, *_ = reference
    chris = christoffel_ULL(d1.h, inverse_sym(vars.h))
    np.testing.assert_allclose(chris, np.transpose(chris, (0, 2, 1)), atol=1e-12)


def test_christoffel_single_derivative():
    d1_h = np.zeros((3, 3, 3))
    d1_h[0, 0, 1] = 2.0  # d_y h_xx
    chris = christoffel_ULL(d1_h, np.eye(3))
    assert chris[0, 0, 1] == pytest.approx(1.0)
    assert chris[0, 1, 0] == pytest.approx(1.0)
    assert chris[1, 0, 0] == pytest.approx(-1.0)


def test_make_trace_free_removes_trace(reference):
    vars, *_ = reference
    h_UU = inverse_sym(vars.h)
    tf = make_trace_free(vars.A + 3.0 * vars.h, vars.h, h_UU)
    assert _contract(tf, h_UU) == pytest.approx(0.0, abs=1e-10)
    np.testing.assert_allclose(
        tf, make_trace_free(vars.A, vars.h, h_UU), atol=1e-10
    )


def test_field_vars_rejects_bad_shape():
    with pytest.raises(ValueError):
        FieldVars(chi=1.0, h=np.eye(2), K=0.0, A=np.zeros((3, 3)), lapse=1.0, phi=0.0, Pi=0.0)