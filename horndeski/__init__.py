"""Pointwise cubic Horndeski scalar-tensor theory, couplings, scalar initial data and diagnostic names."""

__version__ = "0.1.0"
__all__ = ["couplings", "cubic_horndeski", "initial_data", "variables"]