"""
Running totals of tank results per bunker category.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from navisound_app.models import TankCalculationResult, TankCategory


@dataclass(slots=True)
class CategoryTotals:
    category: TankCategory
    total_volume_m3: float = 0.0
    total_weight_t: float = 0.0
    tank_count: int = 0


def aggregate_by_category(results: Iterable[TankCalculationResult]) -> Dict[TankCategory, CategoryTotals]:
    """Sum volume and weight of results sharing a category. Every category is present."""
    totals = {category: CategoryTotals(category=category) for category in TankCategory}
    for res in results:
        entry = totals[res.category]
        entry.total_volume_m3 += res.volume_m3
        entry.total_weight_t += res.weight_t
        entry.tank_count += 1
    return totals


def grand_total_weight(totals: Dict[TankCategory, CategoryTotals]) -> float:
    return sum(t.total_weight_t for t in totals.values())
