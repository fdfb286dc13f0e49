"""Strip-packing solvers for cutting rectangular pieces from a fabric roll."""

__version__ = "0.1.0"
__all__ = ["problem", "greedy", "exhaustive", "genetic"]