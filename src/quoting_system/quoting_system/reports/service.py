from __future__ import annotations

import io
from dataclasses import dataclass

import pandas as pd

from ..quotes.model import Quote
from ..quotes.service import QuoteService


@dataclass(frozen=True)
class FinancialBreakdown:
    labour_normal: float
    labour_overtime: float
    vehicle: float
    per_diem: float
    reporting: float
    travel_charge: float
    extras: list[dict]
    total: float

    def to_dict(self) -> dict:
        return {
            "labourNormal": self.labour_normal,
            "labourOvertime": self.labour_overtime,
            "vehicle": self.vehicle,
            "perDiem": self.per_diem,
            "reporting": self.reporting,
            "travelCharge": self.travel_charge,
            "extras": self.extras,
            "total": self.total,
        }


class ReportService:
    """Read-only views over a quote: breakdown text, money split, spreadsheet."""

    def __init__(self, quotes: QuoteService):
        self._quotes = quotes

    def shift_breakdown_text(self, quote: Quote) -> str:
        lines = ["SHIFT BREAKDOWN", ""]
        for index, (shift, result) in enumerate(self._quotes.allocations(quote), start=1):
            b = result.breakdown
            night = " (Night Shift)" if shift.is_night_shift else ""
            lines += [
                f"Shift {index}:",
                f"Date: {shift.date} | Tech: {shift.tech}",
                f"Time: {shift.start_time} - {shift.finish_time}",
                f"Day Type: {shift.day_type.value}{night}",
                "",
                "Hours Breakdown:",
                f"  Travel In NT: {b.travel_in_nt:.2f}h | OT: {b.travel_in_ot:.2f}h",
                f"  Site NT: {b.site_nt:.2f}h | OT: {b.site_ot:.2f}h",
                f"  Travel Out NT: {b.travel_out_nt:.2f}h | OT: {b.travel_out_ot:.2f}h",
                f"  Total Hours: {b.total_hours:.2f}h (Site: {b.site_hours:.2f}h)",
                "",
            ]
        return "\n".join(lines) + "\n"

    def financial_breakdown(self, quote: Quote) -> FinancialBreakdown:
        rates = quote.rates
        labour_normal = 0.0
        labour_overtime = 0.0
        for shift, result in self._quotes.allocations(quote):
            b = result.breakdown
            if b.nt_hours:
                labour_normal += b.nt_hours * rates.require("site_normal")
            if b.ot_hours:
                labour_overtime += b.ot_hours * rates.premium_rate(shift.day_type)

        vehicle_count = sum(1 for s in quote.shifts if s.vehicle)
        per_diem_count = sum(1 for s in quote.shifts if s.per_diem)
        totals = self._quotes.totals(quote)

        return FinancialBreakdown(
            labour_normal=labour_normal,
            labour_overtime=labour_overtime,
            vehicle=vehicle_count * rates.require("vehicle") if vehicle_count else 0.0,
            per_diem=per_diem_count * rates.require("per_diem") if per_diem_count else 0.0,
            reporting=totals.reporting_cost,
            travel_charge=totals.travel_charge_cost,
            extras=[{"description": e.description, "cost": e.cost} for e in quote.extras if e.cost > 0],
            total=totals.total,
        )

    def breakdown_rows(self, quote: Quote) -> list[dict]:
        rows = []
        for shift, result in self._quotes.allocations(quote):
            b = result.breakdown
            rows.append(
                {
                    "Date": shift.date,
                    "Tech": shift.tech,
                    "Start": shift.start_time,
                    "Finish": shift.finish_time,
                    "Day Type": shift.day_type.value,
                    "Night Shift": shift.is_night_shift,
                    "Travel In NT": round(b.travel_in_nt, 2),
                    "Travel In OT": round(b.travel_in_ot, 2),
                    "Site NT": round(b.site_nt, 2),
                    "Site OT": round(b.site_ot, 2),
                    "Travel Out NT": round(b.travel_out_nt, 2),
                    "Travel Out OT": round(b.travel_out_ot, 2),
                    "Total Hours": round(b.total_hours, 2),
                    "Site Hours": round(b.site_hours, 2),
                    "Cost": round(result.cost, 2),
                }
            )
        return rows

    def export_breakdown_xlsx(self, quote: Quote) -> bytes:
        df = pd.DataFrame(self.breakdown_rows(quote))

        # Written in memory, never to disk.
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Shifts")
        return output.getvalue()
