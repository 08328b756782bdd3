"""Indices and names of the diagnostic grid variables."""

from __future__ import annotations

from enum import IntEnum


class DiagnosticVar(IntEnum):
    """Index of each diagnostic variable stored on the grid."""

    HAM = 0
    MOM1 = 1
    MOM2 = 2
    MOM3 = 3
    RHO_PHI = 4
    RHO_G2 = 5
    RHO_G3 = 6
    RHO_GB = 7

    @property
    def label(self) -> str:
        """Name under which the variable is written out."""
        return _LABELS[self]


_LABELS = {
    DiagnosticVar.HAM: "Ham",
    DiagnosticVar.MOM1: "Mom1",
    DiagnosticVar.MOM2: "Mom2",
    DiagnosticVar.MOM3: "Mom3",
    DiagnosticVar.RHO_PHI: "rho_phi",
    DiagnosticVar.RHO_G2: "rho_g2",
    DiagnosticVar.RHO_G3: "rho_g3",
    DiagnosticVar.RHO_GB: "rho_GB",
}

NUM_DIAGNOSTIC_VARS = len(DiagnosticVar)


def diagnostic_variable_names() -> tuple[str, ...]:
    """Names of all diagnostic variables, in index order."""
    return tuple(var.label for var in DiagnosticVar)