"""Evolutionary algorithm implementations."""

from nsga_kit.algorithms.nsga2 import NSGA2, nsga2

__all__ = ["NSGA2", "nsga2"]
