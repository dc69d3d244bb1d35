from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Optional

from ..common.logger import get_logger
from ..core.enums import CheckoutTiming, CheckStatus
from ..leave.calendar import LeaveCalendar
from ..shifts.directory import ShiftDirectory
from ..time_entries.builder import build_overtime_entry, build_regular_entry
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from .factory import PeriodStrategyFactory
from .locks import EmployeeLockRegistry
from .model import AttendanceCompositeStatus, AttendanceRecord, AttendanceThresholds, CheckEvent, CheckResult
from .repository import AttendanceRepository
from .state_machine import apply_transition, display_status
from .strategies.base import PeriodContext

logger = get_logger(__name__)


class AttendanceService:
    """Applies check events for employees.

    Each employee's transitions are serialized through ``EmployeeLockRegistry``:
    the record is read, validated, classified and written back while the
    employee's lock is held, so two concurrent check-ins cannot both pass the
    guards. Retrying rejected events is up to the caller.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        time_entries: TimeEntryRepository,
        shifts: ShiftDirectory,
        calendar: LeaveCalendar,
        *,
        strategy_factory: PeriodStrategyFactory | None = None,
        thresholds: AttendanceThresholds | None = None,
        locks: EmployeeLockRegistry | None = None,
    ):
        self._attendance = attendance
        self._time_entries = time_entries
        self._shifts = shifts
        self._calendar = calendar
        self._factory = strategy_factory or PeriodStrategyFactory()
        self._thresholds = thresholds or AttendanceThresholds()
        self._locks = locks or EmployeeLockRegistry()

    def apply_check_event(self, employee_id: int, event: CheckEvent) -> CheckResult:
        with self._locks.hold(employee_id):
            work_date = self._resolve_work_date(employee_id, event)
            record = self._attendance.get(employee_id, work_date) or self._new_record(employee_id, work_date)
            context = self._context(employee_id, work_date)

            if event.is_check_in:
                result = self._check_in(record, event, context)
            else:
                result = self._check_out(record, event, context)

            self._commit(result)

        logger.info(
            "employee=%s date=%s %s -> %s/%s",
            employee_id,
            work_date,
            "check-in" if event.is_check_in else "check-out",
            result.status.state.value,
            result.status.check_status.value,
        )
        return result

    def _commit(self, result: CheckResult) -> None:
        entry = result.time_entry
        if entry is None:
            self._attendance.save(result.record)
            return

        self._time_entries.add(entry)
        try:
            self._attendance.save(result.record)
        except Exception:
            # The entry must not outlive a record that is still open.
            logger.exception("Saving %s failed, removing entry %s", result.record.attendance_ref, entry.entry_id)
            self._time_entries.remove(entry.entry_id)
            raise

    def get_record(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._attendance.get(employee_id, work_date)

    def get_display_status(self, employee_id: int, work_date: date) -> str:
        record = self._attendance.get(employee_id, work_date) or self._new_record(employee_id, work_date)
        return display_status(record, is_holiday=self._calendar.is_holiday(work_date))

    def _check_in(self, record: AttendanceRecord, event: CheckEvent, context: PeriodContext) -> CheckResult:
        new_status = apply_transition(record.status, is_check_in=True, is_overtime=event.is_overtime)
        strategy = self._factory.for_event(is_overtime=event.is_overtime)
        decision = strategy.decide_check_in(now=event.instant, context=context)

        if event.is_overtime:
            updated = replace(record, status=new_status, overtime_check_in=event.instant)
        else:
            updated = replace(
                record,
                status=new_status,
                regular_check_in=event.instant,
                is_late_check_in=decision.timing.is_late,
                is_early_check_in=decision.timing.is_early,
                late_minutes=decision.timing.minutes_late,
            )
        return CheckResult(status=new_status, record=updated)

    def _check_out(self, record: AttendanceRecord, event: CheckEvent, context: PeriodContext) -> CheckResult:
        was_overtime = record.status.is_overtime
        new_status = apply_transition(record.status, is_check_in=False, is_overtime=was_overtime)
        strategy = self._factory.for_event(is_overtime=was_overtime)
        decision = strategy.decide_check_out(now=event.instant, context=context)

        is_late = decision.timing in (CheckoutTiming.LATE, CheckoutTiming.VERY_LATE)
        is_very_late = decision.timing == CheckoutTiming.VERY_LATE

        if was_overtime:
            updated = replace(
                record,
                status=new_status,
                overtime_check_out=event.instant,
                is_late_check_out=is_late,
                is_very_late_check_out=is_very_late,
                checkout_timing=decision.timing,
            )
            entry: TimeEntry = build_overtime_entry(
                updated, event.instant, context.overtime, thresholds=context.thresholds
            )
        else:
            updated = replace(
                record,
                status=new_status,
                regular_check_out=event.instant,
                is_late_check_out=is_late,
                is_very_late_check_out=is_very_late,
                checkout_timing=decision.timing,
            )
            entry = build_regular_entry(
                updated,
                event.instant,
                decision.window,
                break_minutes=context.shift.break_minutes,
                checkout_timing=decision.timing,
            )

        if entry.needs_review:
            logger.warning("Very late check-out flagged for review: %s", entry.entry_id)
        return CheckResult(status=new_status, record=updated, time_entry=entry)

    def _resolve_work_date(self, employee_id: int, event: CheckEvent) -> date:
        if event.work_date is not None:
            return event.work_date

        today = event.instant.date()
        if event.is_check_in:
            return today

        current = self._attendance.get(employee_id, today)
        if current and current.status.check_status == CheckStatus.CHECKED_IN:
            return today

        # Overnight periods close on the calendar day after they opened.
        yesterday = today - timedelta(days=1)
        previous = self._attendance.get(employee_id, yesterday)
        if previous and previous.status.check_status == CheckStatus.CHECKED_IN:
            return yesterday
        return today

    def _new_record(self, employee_id: int, work_date: date) -> AttendanceRecord:
        if self._calendar.is_holiday(work_date):
            status = AttendanceCompositeStatus.holiday()
        else:
            shift = self._shifts.get_shift_window(employee_id, work_date)
            if shift is None or not shift.is_work_day(work_date):
                status = AttendanceCompositeStatus.day_off()
            else:
                status = AttendanceCompositeStatus.initial()
        return AttendanceRecord(employee_id=employee_id, work_date=work_date, status=status)

    def _context(self, employee_id: int, work_date: date) -> PeriodContext:
        return PeriodContext(
            work_date=work_date,
            shift=self._shifts.get_shift_window(employee_id, work_date),
            overtime=self._shifts.get_approved_overtime(employee_id, work_date),
            thresholds=self._thresholds,
        )
