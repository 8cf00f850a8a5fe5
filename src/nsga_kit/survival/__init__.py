"""Survivor selection for NSGA-II."""

from nsga_kit.survival.nsga2 import nsga2_survival, survivor_state

__all__ = ["nsga2_survival", "survivor_state"]
