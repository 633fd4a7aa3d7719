"""Tests for calendar to Julian Day conversion."""

from datetime import date, datetime, timedelta, timezone

import pytest
from astropy.time import Time


class TestJulianDayFromCalendar:
    """Tests for the Gregorian to Julian Day formula."""

    def test_j2000_epoch_is_exact(self):
        """2000-01-01 12:00 is exactly JD 2451545.0."""
        from orrery.astro.timescale import julian_day_from_calendar

        assert julian_day_from_calendar(2000, 1, 1, 12) == 2451545.0

    def test_midnight_is_half_day(self):
        """JD fractions are noon based, so midnight ends in .5."""
        from orrery.astro.timescale import julian_day_from_calendar

        assert julian_day_from_calendar(1970, 1, 1) == 2440587.5
        assert julian_day_from_calendar(1858, 11, 17) == 2400000.5

    def test_proleptic_gregorian_zero_point(self):
        """JD 0 falls on -4713-11-24 12:00 in the proleptic Gregorian calendar."""
        from orrery.astro.timescale import julian_day_from_calendar

        assert julian_day_from_calendar(-4713, 11, 24, 12) == 0.0

    def test_fractional_terms(self):
        """Minutes, seconds and milliseconds add to the day fraction."""
        from orrery.astro.timescale import julian_day_from_calendar

        jd = julian_day_from_calendar(2000, 1, 1, 12, 30, 15, 250)
        expected = 2451545.0 + 30 / 1440 + 15 / 86400 + 250 / 86400000
        assert jd == pytest.approx(expected, abs=1e-10)


class TestDateToJulianDay:
    """Tests for date_to_julian_day with different instant types."""

    def test_j2000_from_iso_string_with_z(self):
        """ISO strings with a trailing Z are accepted."""
        from orrery.astro.timescale import date_to_julian_day

        assert date_to_julian_day("2000-01-01T12:00:00Z") == 2451545.0

    def test_j2000_from_datetime(self):
        """Naive datetimes are taken as UTC."""
        from orrery.astro.timescale import date_to_julian_day

        assert date_to_julian_day(datetime(2000, 1, 1, 12)) == 2451545.0

    def test_aware_datetime_converted_to_utc(self):
        """Aware datetimes are shifted to UTC first."""
        from orrery.astro.timescale import date_to_julian_day

        tz = timezone(timedelta(hours=2))
        assert date_to_julian_day(datetime(2000, 1, 1, 14, tzinfo=tz)) == 2451545.0

    def test_date_is_midnight(self):
        """A plain date means 00:00 UTC."""
        from orrery.astro.timescale import date_to_julian_day

        assert date_to_julian_day(date(2000, 1, 1)) == 2451544.5

    def test_astropy_time_input(self):
        """astropy Time instants are accepted."""
        from orrery.astro.timescale import date_to_julian_day

        t = Time("2000-01-01T12:00:00", scale="utc")
        assert date_to_julian_day(t) == 2451545.0

    def test_iso_string_with_utc_offset(self):
        """A numeric offset suffix is applied before conversion."""
        from orrery.astro.timescale import date_to_julian_day

        assert date_to_julian_day("2000-01-01T13:00:00+01:00") == 2451545.0
        assert date_to_julian_day("2000-01-01T07:00:00-05:00") == 2451545.0

    def test_tt_time_shifted_to_utc(self):
        """A TT Time is read through its UTC calendar fields."""
        from orrery.astro.timescale import date_to_julian_day

        t = Time("2000-01-01T12:00:00", scale="tt")
        # TT - UTC was 64.184 s at J2000.0
        assert date_to_julian_day(t) == pytest.approx(2451545.0 - 64.184 / 86400, abs=1e-6)

    def test_microseconds_carried(self):
        """Sub-second precision contributes to the fraction."""
        from orrery.astro.timescale import date_to_julian_day

        jd = date_to_julian_day(datetime(2000, 1, 1, 12, 0, 0, 500000))
        assert jd == pytest.approx(2451545.0 + 0.5 / 86400, abs=1e-10)

    @pytest.mark.parametrize("dt", [
        datetime(1985, 7, 15, 6, 30, 15),
        datetime(1999, 3, 2, 23, 59, 59),
        datetime(2024, 2, 29, 12, 0, 1),
        datetime(2049, 10, 10, 3, 14, 7),
    ])
    def test_matches_astropy(self, dt):
        """Agrees with astropy's UTC Julian Date on ordinary days."""
        from orrery.astro.timescale import date_to_julian_day

        assert date_to_julian_day(dt) == pytest.approx(Time(dt, scale="utc").jd, abs=1e-8)

    def test_invalid_string_raises(self):
        """Unparseable strings raise InvalidInstantError."""
        from orrery.astro.timescale import date_to_julian_day
        from orrery.exceptions import InvalidInstantError

        with pytest.raises(InvalidInstantError, match="Cannot parse time"):
            date_to_julian_day("not a date")

    def test_unsupported_type_raises(self):
        """Non-time values raise InvalidInstantError."""
        from orrery.astro.timescale import date_to_julian_day
        from orrery.exceptions import InvalidInstantError

        with pytest.raises(InvalidInstantError, match="Unsupported instant type"):
            date_to_julian_day(12345)

    def test_none_means_now(self):
        """None resolves to the current time."""
        from orrery.astro.timescale import date_to_julian_day

        now = Time(datetime.now(timezone.utc).replace(tzinfo=None), scale="utc").jd
        assert date_to_julian_day(None) == pytest.approx(now, abs=1e-3)


class TestJulianCenturies:
    """Tests for centuries since J2000.0."""

    def test_zero_at_epoch(self):
        from orrery.astro.timescale import J2000_JD, julian_centuries

        assert julian_centuries(J2000_JD) == 0.0

    def test_sign_and_scale(self):
        """One century is 36525 days; earlier dates are negative."""
        from orrery.astro.timescale import J2000_JD, julian_centuries

        assert julian_centuries(J2000_JD + 36525.0) == pytest.approx(1.0)
        assert julian_centuries(J2000_JD - 36525.0 / 2) == pytest.approx(-0.5)


class TestSimulatedTime:
    """Tests for accelerated simulation time helpers."""

    def test_default_speed_is_one_hour_per_second(self):
        from orrery.astro.timescale import simulated_instant

        start = datetime(2000, 1, 1)
        assert simulated_instant(start, 10) == datetime(2000, 1, 1, 10)

    def test_custom_speed(self):
        from orrery.astro.timescale import simulated_instant

        start = datetime(2000, 1, 1)
        assert simulated_instant(start, 2, speed=86400) == datetime(2000, 1, 3)

    @pytest.mark.parametrize("speed, label", [
        (1, "1x"),
        (30, "30x"),
        (120, "2 min/s"),
        (3600, "1 h/s"),
        (7200, "2 h/s"),
        (172800, "2 days/s"),
    ])
    def test_format_speed(self, speed, label):
        from orrery.astro.timescale import format_speed

        assert format_speed(speed) == label
