"""Survival strategies for the spindle optimizer."""

from spindle_opt.survival.nsga2 import nsga2_survival

__all__ = ["nsga2_survival"]
