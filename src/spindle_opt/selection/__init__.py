"""Parent selection for the spindle optimizer."""

from spindle_opt.selection.crowded import crowded_better, crowded_tournament, select_parent_pair

__all__ = ["crowded_better", "crowded_tournament", "select_parent_pair"]
