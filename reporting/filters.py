"""
reporting/filters.py

Report window definition.

One parameterized ``ReportFilter`` covers every report variant:

    monthly    (year, month)
    semestral  (year, semester)     semester 1 = Jan–Jun, 2 = Jul–Dec
    yearly     (year)

Each may be narrowed by a role equality filter, an allow-list of roles,
and/or an exclusion set (typically the reserved administrative role).
Role comparisons are case-insensitive.

The window also owns the human-facing period label and the deterministic
document name, so repeated exports of one window always share a file name.
"""

from __future__ import annotations

import calendar
import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from reporting.errors import InvalidFilterError
from reporting.types import SubmissionRecord

_MIN_YEAR = 1900
_MAX_YEAR = 9999
_SEMESTER_MONTHS: dict[int, tuple[int, int]] = {1: (1, 6), 2: (7, 12)}
_SEMESTER_NAMES: dict[int, str] = {1: "First", 2: "Second"}


class PeriodMode(str, enum.Enum):
    MONTHLY = "monthly"
    SEMESTRAL = "semestral"
    YEARLY = "yearly"


def _normalize_roles(roles: object) -> frozenset[str]:
    if not roles:
        return frozenset()
    return frozenset(str(r).strip().upper() for r in roles if str(r).strip())


@dataclass(frozen=True)
class ReportFilter:
    """
    A report window.

    Build with :meth:`monthly`, :meth:`semestral` or :meth:`yearly`, or
    directly and then call :meth:`validate`.
    """

    mode: PeriodMode
    year: int | None
    month: int | None = None
    semester: int | None = None
    role: str | None = None
    included_roles: frozenset[str] = field(default_factory=frozenset)
    excluded_roles: frozenset[str] = field(default_factory=frozenset)
    timezone: tzinfo = field(default_factory=lambda: ZoneInfo("UTC"))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def monthly(cls, year: int, month: int, **kwargs: object) -> "ReportFilter":
        return cls.build(PeriodMode.MONTHLY, year=year, month=month, **kwargs)

    @classmethod
    def semestral(cls, year: int, semester: int, **kwargs: object) -> "ReportFilter":
        return cls.build(PeriodMode.SEMESTRAL, year=year, semester=semester, **kwargs)

    @classmethod
    def yearly(cls, year: int, **kwargs: object) -> "ReportFilter":
        return cls.build(PeriodMode.YEARLY, year=year, **kwargs)

    @classmethod
    def build(
        cls,
        mode: PeriodMode | str,
        *,
        year: int | None,
        month: int | None = None,
        semester: int | None = None,
        role: str | None = None,
        included_roles: object = None,
        excluded_roles: object = None,
        timezone: tzinfo | str | None = None,
    ) -> "ReportFilter":
        """
        Create and validate a filter.

        Raises
        ------
        InvalidFilterError: When any parameter is missing, unknown, or out of range.
        """
        try:
            period_mode = PeriodMode(mode)
        except ValueError as exc:
            raise InvalidFilterError(
                f"Unknown report mode {mode!r}. Valid: {[m.value for m in PeriodMode]}"
            ) from exc

        if timezone is None:
            tz: tzinfo = ZoneInfo("UTC")
        elif isinstance(timezone, str):
            try:
                tz = ZoneInfo(timezone)
            except (KeyError, ValueError) as exc:
                raise InvalidFilterError(f"Unknown timezone {timezone!r}.") from exc
        else:
            tz = timezone

        cleaned_role = role.strip().upper() if role and role.strip() else None
        report_filter = cls(
            mode=period_mode,
            year=year,
            month=month,
            semester=semester,
            role=cleaned_role,
            included_roles=_normalize_roles(included_roles),
            excluded_roles=_normalize_roles(excluded_roles),
            timezone=tz,
        )
        report_filter.validate()
        return report_filter

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Raise InvalidFilterError unless exactly the parameters of ``mode`` are set."""
        if not isinstance(self.mode, PeriodMode):
            raise InvalidFilterError(
                f"Unknown report mode {self.mode!r}. Valid: {[m.value for m in PeriodMode]}"
            )
        if self.year is None:
            raise InvalidFilterError("A year is required for every report window.")
        if not isinstance(self.year, int) or not _MIN_YEAR <= self.year <= _MAX_YEAR:
            raise InvalidFilterError(f"Year {self.year!r} is out of range.")

        if self.mode is PeriodMode.MONTHLY:
            if self.month is None:
                raise InvalidFilterError("A month is required for a monthly report.")
            if not isinstance(self.month, int) or not 1 <= self.month <= 12:
                raise InvalidFilterError(f"Month {self.month!r} must be between 1 and 12.")
        elif self.month is not None:
            raise InvalidFilterError(f"A month is only valid for a monthly report, not {self.mode.value}.")

        if self.mode is PeriodMode.SEMESTRAL:
            if self.semester is None:
                raise InvalidFilterError("A semester is required for a semestral report.")
            if self.semester not in _SEMESTER_MONTHS:
                raise InvalidFilterError(f"Semester {self.semester!r} must be 1 or 2.")
        elif self.semester is not None:
            raise InvalidFilterError(
                f"A semester is only valid for a semestral report, not {self.mode.value}."
            )

        if self.role and self.role in self.excluded_roles:
            raise InvalidFilterError(f"Role {self.role!r} is excluded from this report.")

    # ------------------------------------------------------------------
    # Window
    # ------------------------------------------------------------------

    @property
    def month_range(self) -> tuple[int, int]:
        """First and last calendar month of the window, inclusive."""
        if self.mode is PeriodMode.MONTHLY:
            return self.month, self.month  # type: ignore[return-value]
        if self.mode is PeriodMode.SEMESTRAL:
            return _SEMESTER_MONTHS[self.semester]  # type: ignore[index]
        return 1, 12

    def bounds(self) -> tuple[datetime, datetime]:
        """Inclusive start and end of the window as aware datetimes in ``timezone``."""
        first, last = self.month_range
        year: int = self.year  # type: ignore[assignment]
        start = datetime(year, first, 1, tzinfo=self.timezone)
        last_day = calendar.monthrange(year, last)[1]
        end = datetime(year, last, last_day, tzinfo=self.timezone) + timedelta(days=1, microseconds=-1)
        return start, end

    def contains_timestamp(self, created_at: datetime) -> bool:
        local = created_at.astimezone(self.timezone) if created_at.tzinfo else created_at
        first, last = self.month_range
        return local.year == self.year and first <= local.month <= last

    def accepts_role(self, role: str | None) -> bool:
        normalized = (role or "").strip().upper()
        if normalized in self.excluded_roles:
            return False
        if self.included_roles and normalized not in self.included_roles:
            return False
        if self.role is not None and normalized != self.role:
            return False
        return True

    def matches(self, record: SubmissionRecord) -> bool:
        """True when *record* falls inside the window and passes the role predicates."""
        return self.contains_timestamp(record.created_at) and self.accepts_role(record.role)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @property
    def period_label(self) -> str:
        """Title line describing the window, e.g. ``For the month of March 2025``."""
        if self.mode is PeriodMode.MONTHLY:
            return f"For the month of {calendar.month_name[self.month]} {self.year}"  # type: ignore[index]
        if self.mode is PeriodMode.SEMESTRAL:
            first, last = self.month_range
            return (
                f"For the period {calendar.month_name[first]} - "
                f"{calendar.month_name[last]} {self.year}"
            )
        return f"For the Year {self.year}"

    @property
    def window_label(self) -> str:
        """Short window name used in user-facing messages."""
        if self.mode is PeriodMode.MONTHLY:
            label = f"{calendar.month_name[self.month]} {self.year}"  # type: ignore[index]
        elif self.mode is PeriodMode.SEMESTRAL:
            label = f"the {_SEMESTER_NAMES[self.semester].lower()} semester of {self.year}"  # type: ignore[index]
        else:
            label = f"the year {self.year}"
        if self.role:
            label = f"{self.role} in {label}"
        return label

    @property
    def document_name(self) -> str:
        """Deterministic base name of the exported document (no extension)."""
        if self.mode is PeriodMode.MONTHLY:
            stem = f"{calendar.month_name[self.month]}_{self.year}_Report"  # type: ignore[index]
        elif self.mode is PeriodMode.SEMESTRAL:
            stem = f"{_SEMESTER_NAMES[self.semester]}_Semester_{self.year}_Report"  # type: ignore[index]
        else:
            stem = f"Year_{self.year}_Report"
        if self.role:
            stem = f"{self.role}_{stem}"
        return stem
