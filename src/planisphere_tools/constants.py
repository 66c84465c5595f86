"""Fixed constants: epochs, calendar lengths, unit conversions, physical values."""

import math

# Epochs (Julian dates)
J2000 = 2451545.0
J1991_25 = 2448349.0625  # Hipparcos catalog epoch

# Calendar: Jan 0.0 of the year 0 in the Julian calendar; the Gregorian is 2 days behind
JAN_0_0_YEAR_0000_JULIAN = 1721056.5
JAN_0_0_YEAR_0000_GREGORIAN = JAN_0_0_YEAR_0000_JULIAN + 2.0
NORMAL_YEAR_DAYS = 365
LEAP_YEAR_DAYS = 366
SMALL_CYCLE_YEARS = 4
SMALL_CYCLE_DAYS = LEAP_YEAR_DAYS + 3 * NORMAL_YEAR_DAYS  # 1461
BIG_CYCLE_YEARS = 400
BIG_CYCLE_DAYS = 146097  # 3 short centuries (36524 d) + 1 long century (36525 d)
MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Time: units per unit
DAYS_PER_JULIAN_YEAR = 365.25
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_JULIAN_MILLENNIUM = 365250.0
HOURS_PER_DAY = 24.0
MINUTES_PER_HOUR = 60.0
MINUTES_PER_DAY = 1440.0
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0

# Angle: degrees per circle and sexagesimal
TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi
DEGREES_PER_CIRCLE = 360.0
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h

# Physical
KM_PER_AU = 1.49597870e8  # IAU 1976

# Validity windows of the precession models, in Julian years from J2000
LONG_TERM_PRECESSION_YEARS = 200_000.0
SHORT_TERM_PRECESSION_YEARS = 10_000.0
NUTATION_YEARS = 5_000.0

# Star catalog
POLARIS_INDEX = 11767  # Hipparcos number; its record is discarded on request
FAST_STAR_ARCSEC = 3600.0  # motion above this is reported in catalog statistics

# Chart defaults
DEFAULT_DECLINATION_GAP = 5.0  # degrees past the horizon shown on the chart
DEFAULT_MAGNITUDE_LIMIT = 5.0
DEFAULT_CHART_WIDTH = 612.0  # points (US Letter)
DEFAULT_CHART_HEIGHT = 792.0
NORTHERN_CHART_MIN_DEC = 89.0  # max dec at or above this marks a northern chart
SUN_MARK_HOUR = 18  # local standard time of the daily Sun marks
SIDEREAL_CLOCK_HOUR = 20  # local standard time of the date-scale sidereal times
LUNAR_ORBIT_MONTH = 7  # the Moon's orbit is drawn for July 1
POLE_PATH_STEP_YEARS = 200
SHOWER_RADIANT_MONTH = 7  # radiants are precessed to July 1

# Meteor shower radiants at their peaks, J2000 degrees (IMO video meteor database)
DEFAULT_SHOWER_RADIANTS = (
    'Quadrantids:230.1,48.5 | Eta Aquariids:338.0,-1.0 | Perseids:46.2,57.4 | Geminids:112.3,32.5'
)

# Horizon transparency: the meridian runs along RA 6h (equatorward) to 18h
MERIDIAN_RA_HOURS = 6.0
TWILIGHT_ALTITUDES = (-18.0, -12.0, -6.0)
RISE_SET_ALTITUDE = -0.9  # refraction plus the Sun's semi-diameter
TRANSPARENCY_ALTITUDES = (
    *TWILIGHT_ALTITUDES,
    RISE_SET_ALTITUDE,
    0.0, 10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0,
)
