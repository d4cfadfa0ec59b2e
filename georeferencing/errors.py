"""
Errors raised by the raytracing engine.
"""


class RaytracingError(Exception):
    """Base class for raytracing failures."""


class DegenerateProfileError(RaytracingError, ValueError):
    """
    Two adjacent sound velocity samples share the same depth.
    
    The sound speed gradient between them is undefined.
    """
    
    def __init__(self, z0: float, z1: float):
        self.z0 = z0
        self.z1 = z1
        super().__init__(
            f"Can't calculate gradient for svp samples at same depth: z0={z0} z1={z1}"
        )


class NumericalDomainError(RaytracingError, ArithmeticError):
    """An intermediate value left the domain of sqrt, log or a division."""
