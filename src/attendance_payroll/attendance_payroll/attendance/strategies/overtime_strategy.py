from __future__ import annotations

from datetime import datetime

from ...core.exceptions import TransitionError
from ...timewindow.calculator import checkout_boundaries, classify_check_in, classify_check_out
from ...timewindow.model import TimeWindow
from .base import CheckInDecision, CheckOutDecision, PeriodContext, PeriodStrategy


class OvertimePeriodStrategy(PeriodStrategy):
    """Classify against the approved overtime window."""

    def resolve_window(self, context: PeriodContext) -> TimeWindow:
        if context.overtime is None or not context.overtime.is_approved:
            raise TransitionError("No approved overtime for this date", code="no_approved_overtime")
        return context.overtime.resolve()

    def decide_check_in(self, *, now: datetime, context: PeriodContext) -> CheckInDecision:
        window = self.resolve_window(context)
        t = context.thresholds
        timing = classify_check_in(
            now, window, late_threshold_min=t.late_check_in, early_threshold_min=t.early_check_in
        )
        return CheckInDecision(window=window, timing=timing)

    def decide_check_out(self, *, now: datetime, context: PeriodContext) -> CheckOutDecision:
        window = self.resolve_window(context)
        t = context.thresholds
        bounds = checkout_boundaries(window.end, t.early_check_out, t.late_check_out, t.very_late)
        return CheckOutDecision(window=window, timing=classify_check_out(now, bounds))
