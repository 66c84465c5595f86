"""Calendar engine: proleptic Gregorian/Julian dates to Julian dates, epoch offsets.

Years use astronomical numbering: the year 0 precedes the year 1, and 2 BC is
the year -1. Each conversion counts whole blocks of days away from Jan 0.0 of
the year 0: 400-year cycles (Gregorian), 4-year cycles, whole remaining years,
then the days within the final year. Negative years are counted backwards from
Dec 31 of the year -1 with the year offset by one, so that every cycle still
starts on a leap year.

Civil-day iteration for a chart year uses rms-julian day numbers.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import NamedTuple

import julian

from planisphere_tools.constants import (
    BIG_CYCLE_DAYS,
    BIG_CYCLE_YEARS,
    DAYS_PER_JULIAN_CENTURY,
    DAYS_PER_JULIAN_MILLENNIUM,
    DAYS_PER_JULIAN_YEAR,
    HOURS_PER_DAY,
    J2000,
    JAN_0_0_YEAR_0000_GREGORIAN,
    JAN_0_0_YEAR_0000_JULIAN,
    LEAP_YEAR_DAYS,
    MINUTES_PER_DAY,
    MONTH_LENGTHS,
    NORMAL_YEAR_DAYS,
    SECONDS_PER_DAY,
    SMALL_CYCLE_DAYS,
    SMALL_CYCLE_YEARS,
)


class Calendar(Enum):
    """Proleptic calendar in which a date is expressed."""

    GREGORIAN = 'gregorian'
    JULIAN = 'julian'


def is_leap(year: int, calendar: Calendar = Calendar.GREGORIAN) -> bool:
    """Return True if ``year`` is a leap year in the given calendar."""
    if calendar is Calendar.GREGORIAN and year % 100 == 0:
        return year % BIG_CYCLE_YEARS == 0
    return year % SMALL_CYCLE_YEARS == 0


def days_in_year(year: int, calendar: Calendar = Calendar.GREGORIAN) -> int:
    """Number of days in ``year`` (365 or 366)."""
    return LEAP_YEAR_DAYS if is_leap(year, calendar) else NORMAL_YEAR_DAYS


def month_length(month: int, leap: bool) -> int:
    """Number of days in ``month`` (1-12)."""
    if month == 2 and leap:
        return 29
    return MONTH_LENGTHS[month - 1]


def _days_from_jan_0(month: int, day: float, leap: bool) -> float:
    """Days elapsed from Jan 0.0 to the given month and (fractional) day."""
    return sum(month_length(m, leap) for m in range(1, month)) + day


def _days_until_dec_32(month: int, day: float, leap: bool) -> float:
    """Days remaining from the given month and (fractional) day to Dec 32.0."""
    after = sum(month_length(m, leap) for m in range(month + 1, 13))
    return after + (month_length(month, leap) + 1) - day


def _days_in_complete_years(start_year: int, end_year: int, calendar: Calendar) -> int:
    """Days in the whole years start_year..end_year-1 (0 if the range is empty)."""
    return sum(days_in_year(y, calendar) for y in range(start_year, end_year))


def jd_julian(year: int, month: int, day: float) -> float:
    """Julian date of a moment in the proleptic Julian calendar (UT).

    Parameters:
        year: Astronomical year (any sign).
        month: Month 1-12 (not validated).
        day: Day of month; the fraction carries the time of day.

    Returns:
        Julian date; JD 0.0 is -4712 Jan 1.5.
    """
    leap = is_leap(year, Calendar.JULIAN)
    if year >= 0:
        num_cycles = year // SMALL_CYCLE_YEARS
        cycles_end = num_cycles * SMALL_CYCLE_YEARS
        return (
            JAN_0_0_YEAR_0000_JULIAN
            + num_cycles * SMALL_CYCLE_DAYS
            + _days_in_complete_years(cycles_end, year, Calendar.JULIAN)
            + _days_from_jan_0(month, day, leap)
        )
    # Counted backwards from year -1 Dec 31 using year + 1; the cycle count
    # truncates toward zero.
    biased = year + 1
    num_cycles = abs(biased) // SMALL_CYCLE_YEARS
    cycles_start = -num_cycles * SMALL_CYCLE_YEARS
    elapsed = (
        num_cycles * SMALL_CYCLE_DAYS
        + _days_in_complete_years(biased, cycles_start, Calendar.JULIAN)
        + _days_until_dec_32(month, day, leap)
    )
    # Jan 0.0 of the year 0 already lies one day into the year -1.
    return JAN_0_0_YEAR_0000_JULIAN + 1 - elapsed


def jd_gregorian(year: int, month: int, day: float) -> float:
    """Julian date of a moment in the proleptic Gregorian calendar (UT).

    Parameters:
        year: Astronomical year (any sign).
        month: Month 1-12 (not validated).
        day: Day of month; the fraction carries the time of day.

    Returns:
        Julian date.
    """
    leap = is_leap(year, Calendar.GREGORIAN)
    if year >= 0:
        num_big = year // BIG_CYCLE_YEARS
        num_small = (year % BIG_CYCLE_YEARS) // SMALL_CYCLE_YEARS
        small_start = num_big * BIG_CYCLE_YEARS
        small_end = small_start + num_small * SMALL_CYCLE_YEARS
        return (
            JAN_0_0_YEAR_0000_GREGORIAN
            + num_big * BIG_CYCLE_DAYS
            + _days_in_complete_years(small_start, small_end, Calendar.GREGORIAN)
            + _days_in_complete_years(small_end, year, Calendar.GREGORIAN)
            + _days_from_jan_0(month, day, leap)
        )
    biased = year + 1
    num_big = abs(biased) // BIG_CYCLE_YEARS
    num_small = (abs(biased) % BIG_CYCLE_YEARS) // SMALL_CYCLE_YEARS
    small_end = -num_big * BIG_CYCLE_YEARS
    small_start = small_end - num_small * SMALL_CYCLE_YEARS
    elapsed = (
        num_big * BIG_CYCLE_DAYS
        + _days_in_complete_years(small_start, small_end, Calendar.GREGORIAN)
        + _days_in_complete_years(biased, small_start, Calendar.GREGORIAN)
        + _days_until_dec_32(month, day, leap)
    )
    return JAN_0_0_YEAR_0000_GREGORIAN + 1 - elapsed


def fractional_day(day: int, hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """Day of month with the time of day as its fraction."""
    return day + hour / HOURS_PER_DAY + minute / MINUTES_PER_DAY + second / SECONDS_PER_DAY


def julian_date(
    year: int,
    month: int,
    day: float,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
    offset_hours: int = 0,
    offset_minutes: int = 0,
    calendar: Calendar = Calendar.GREGORIAN,
) -> float:
    """Julian date of a civil date and time kept with a given offset from UT.

    The offset (negative west of Greenwich) is removed before conversion. The
    day count is linear in the day of month, so a time pushed past midnight by
    the offset lands on the neighbouring day without explicit rollover.

    Parameters:
        year, month, day: Calendar date; ``day`` may carry a fraction.
        hour, minute, second: Local clock time.
        offset_hours, offset_minutes: Offset of the local clock from UT.
        calendar: Proleptic calendar of the date.

    Returns:
        Julian date (UT).
    """
    clock = fractional_day(0, hour - offset_hours, minute - offset_minutes, second)
    if calendar is Calendar.JULIAN:
        return jd_julian(year, month, day + clock)
    return jd_gregorian(year, month, day + clock)


class LocalTime(NamedTuple):
    """Civil date and clock time on the chart's time zone, for any Gregorian year.

    Unlike ``datetime`` this is not limited to the years 1-9999.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    def day_number(self) -> int:
        """rms-julian day number of the date (days since 2000-01-01)."""
        return int(julian.day_from_ymd(self.year, self.month, self.day, proleptic=True))

    def add_minutes(self, minutes: int) -> LocalTime:
        """The time ``minutes`` later, rolling over into following or earlier days."""
        days, remainder = divmod(self.hour * 60 + self.minute + minutes, int(MINUTES_PER_DAY))
        year, month, day = self.year, self.month, self.day
        if days:
            y, m, d = julian.ymd_from_day(self.day_number() + days, proleptic=True)
            year, month, day = int(y), int(m), int(d)
        return LocalTime(year, month, day, remainder // 60, remainder % 60)

    def at(self, hour: int, minute: int = 0) -> LocalTime:
        return self._replace(hour=hour, minute=minute)

    def __str__(self) -> str:
        return f'{self.year:d}-{self.month:02d}-{self.day:02d} {self.hour:02d}:{self.minute:02d}'


def jd_for_local(local: LocalTime, offset_hours: int = 0, offset_minutes: int = 0) -> float:
    """Julian date of a local Gregorian date and time with the given offset from UT."""
    return julian_date(
        local.year,
        local.month,
        local.day,
        local.hour,
        local.minute,
        0.0,
        offset_hours,
        offset_minutes,
    )


def julian_centuries_since_j2000(jd: float) -> float:
    """Julian centuries (T) elapsed from J2000 to ``jd``."""
    return (jd - J2000) / DAYS_PER_JULIAN_CENTURY


def julian_millennia_since_j2000(jd: float) -> float:
    """Julian millennia (tau) elapsed from J2000 to ``jd``."""
    return (jd - J2000) / DAYS_PER_JULIAN_MILLENNIUM


def julian_years_since_j2000(jd: float) -> float:
    """Julian years elapsed from J2000 to ``jd``."""
    return (jd - J2000) / DAYS_PER_JULIAN_YEAR


def days_of_year(year: int) -> Iterator[LocalTime]:
    """Yield midnight of every civil date of ``year``, Feb 29 included in leap years."""
    first = int(julian.day_from_ymd(year, 1, 1, proleptic=True))
    stop = int(julian.day_from_ymd(year + 1, 1, 1, proleptic=True))
    for day in range(first, stop):
        y, m, d = julian.ymd_from_day(day, proleptic=True)
        yield LocalTime(int(y), int(m), int(d))


def mid_month_dates(year: int) -> list[LocalTime]:
    """Midnight on the 15th of every month of ``year``."""
    return [LocalTime(year, month, 15) for month in range(1, 13)]
