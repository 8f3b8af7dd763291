"""CoreMark benchmark: list, matrix and state-machine workloads with CRC validation."""

__version__ = "1.0.0"

__all__ = ["__version__"]