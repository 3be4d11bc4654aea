"""
Simple text-based bunker sounding summary.
"""

from __future__ import annotations

from typing import Dict, Iterable

from navisound_app.models import Drafts, ShipAttitude, TankCalculationResult, TankCategory, TankSpec
from navisound_app.services.aggregation import aggregate_by_category, grand_total_weight


def _tank_line(index: int, name: str, res: TankCalculationResult, manual: bool) -> str:
    sounding = "  manual" if manual else f"{res.measured_sounding_m:8.3f}"
    corrected = "        " if manual else f"{res.corrected_sounding_m:8.3f}"
    return (
        f"{index:>2} {name:<26} {sounding} {corrected} {res.volume_m3:9.2f} "
        f"{res.temperature_c:6.1f} {res.specific_gravity:7.4f} {res.corrected_specific_gravity:7.4f} "
        f"{res.weight_t:9.2f}"
    )


def build_sounding_summary_text(
    vessel_name: str,
    report_date: str,
    drafts: Drafts,
    attitude: ShipAttitude,
    tanks: Iterable[TankSpec],
    results: Dict[str, TankCalculationResult],
) -> str:
    tank_list = list(tanks)
    lines: list[str] = []
    lines.append(f"Bunker Sounding Report - {vessel_name or 'Vessel'}")
    lines.append(f"Date: {report_date}")
    lines.append("")
    lines.append("Drafts (m)   Port    Stbd    Mean")
    lines.append(f"  Fore     {drafts.fore_p:6.2f}  {drafts.fore_s:6.2f}  {attitude.mean_fore_m:6.3f}")
    lines.append(f"  Mid      {drafts.mid_p:6.2f}  {drafts.mid_s:6.2f}  {attitude.mean_mid_m:6.3f}")
    lines.append(f"  Aft      {drafts.aft_p:6.2f}  {drafts.aft_s:6.2f}  {attitude.mean_aft_m:6.3f}")
    lines.append(f"Trim: {attitude.trim_m:.3f} m ({attitude.trim_state.value})")
    lines.append(f"Heel: {attitude.heel_deg:.3f} deg ({attitude.list_state.value})")

    for category in TankCategory:
        members = [t for t in tank_list if t.category is category]
        if not members:
            continue
        lines.append("")
        lines.append(category.value.upper())
        lines.append(" # Tank                        Snd (m) Corr (m)  Vol (m3)  Temp    SG@15  SG corr    Wt (MT)")
        for i, tank in enumerate(members, start=1):
            res = results.get(tank.id)
            if res is None:
                lines.append(f"{i:>2} {tank.name or tank.id:<26} {'-':>8}")
                continue
            lines.append(_tank_line(i, tank.name or tank.id, res, tank.is_manual))

    totals = aggregate_by_category(results.values())
    lines.append("")
    for category, t in totals.items():
        lines.append(
            f"Total {category.value}: {t.total_volume_m3:.2f} m3, {t.total_weight_t:.2f} MT ({t.tank_count} tanks)"
        )
    lines.append(f"Grand total: {grand_total_weight(totals):.2f} MT")
    return "\n".join(lines)
