"""Parent selection for NSGA-II."""

from nsga_kit.selection.crowded import binary_tournament, crowded_order, crowding_operator

__all__ = ["binary_tournament", "crowded_order", "crowding_operator"]
