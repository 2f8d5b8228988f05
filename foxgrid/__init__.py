"""Simulated process-grid matrix multiplication: Cartesian topologies, Fox's algorithm and row-block distribution."""

__version__ = "0.1.0"
__all__ = ["topology", "fox", "rowblock"]