# -*- coding: utf-8 -*-
"""
Paired-device sync

Merges nutrition/weight/hydration fields pushed by the phone into one state
record and derives the progress values the watch screens show.
"""

from .channel import SyncChannel
from .metrics import ARC_CEILING, build_summary, derived_arc_fraction, derived_percentage, remaining
from .models import NutritionPatch, NutritionState, NutritionSummary, WIRE_KEYS
from .store import NutritionStore

__all__ = [
    'ARC_CEILING',
    'NutritionPatch',
    'NutritionState',
    'NutritionStore',
    'NutritionSummary',
    'SyncChannel',
    'WIRE_KEYS',
    'build_summary',
    'derived_arc_fraction',
    'derived_percentage',
    'remaining',
]
