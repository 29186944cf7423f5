'''Orbital mechanics core for a solar-system orrery
SimulationClock class definition'''

import logging
import math
import time
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Union

from .utils import DAYS_PER_YEAR, SECONDS_PER_DAY, normalize_degrees

logger = logging.getLogger(__name__)

# J2000 reference epoch
J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
J2000_JD = 2451545.0

SYNODIC_MONTH = 29.53058867  # days

# jump units in seconds
TIME_UNITS = {
    'seconds': 1.0,
    'minutes': 60.0,
    'hours': 3600.0,
    'days': SECONDS_PER_DAY,
    'weeks': 7 * SECONDS_PER_DAY,
    'months': 30.44 * SECONDS_PER_DAY,
    'years': DAYS_PER_YEAR * SECONDS_PER_DAY,
}

# simulated seconds per wall-clock second
TIME_SCALE_PRESETS = {
    'paused': 0.0,
    'realtime': 1.0,
    '1min/sec': 60.0,
    '1hour/sec': 3600.0,
    '1day/sec': 86400.0,
    '1week/sec': 604800.0,
    '1month/sec': 2592000.0,
    '1year/sec': 31536000.0,
    '10years/sec': 315360000.0,
    '100years/sec': 3153600000.0,
    '1000years/sec': 31536000000.0,
}

_MOON_PHASES = (
    (0.0625, 'New Moon'),
    (0.1875, 'Waxing Crescent'),
    (0.3125, 'First Quarter'),
    (0.4375, 'Waxing Gibbous'),
    (0.5625, 'Full Moon'),
    (0.6875, 'Waning Gibbous'),
    (0.8125, 'Last Quarter'),
    (0.9375, 'Waning Crescent'),
)


class ClockState(Enum):
    STOPPED = 'stopped'
    RUNNING = 'running'


class SimulationClock:
    """
    Simulation time source for one orrery session.

    Tracks elapsed time since the J2000 epoch, a play/pause state and a time
    scale (simulated seconds per wall-clock second). The clock never
    schedules itself: the host calls advance() (or tick()) once per frame.

    Parameters
    ----------
    elapsed_days : float, optional
        Initial time [days since J2000] (default 0)
    time_scale : float, optional
        Initial time scale (default 1, real time)
    wall_clock : callable, optional
        Monotonic wall-clock source in seconds, used by play() and tick().
        Default: time.perf_counter

    Notes
    -----
    Elapsed time only moves backwards through reset(), set_time() and its
    calendar variants, or jump_backward(), which clamps at the epoch.
    """
    def __init__(self, elapsed_days: float = 0.0, time_scale: float = 1.0,
                 wall_clock: Callable[[], float] = time.perf_counter):
        self._wall_clock = wall_clock
        self._elapsed_seconds = 0.0
        self._time_scale = 1.0
        self._running = False
        self._last_wall = wall_clock()
        self.set_time(elapsed_days)
        self.set_time_scale(time_scale)

    # ========== STATE ==========
    @property
    def state(self) -> ClockState:
        return ClockState.RUNNING if self._running else ClockState.STOPPED

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def time_scale(self) -> float:
        """Simulated seconds per wall-clock second"""
        return self._time_scale

    @property
    def elapsed_seconds(self) -> float:
        """Simulated seconds since J2000"""
        return self._elapsed_seconds

    @property
    def elapsed_days(self) -> float:
        """Simulated days since J2000 (the time argument for positions)"""
        return self._elapsed_seconds / SECONDS_PER_DAY

    def play(self):
        """Start or resume; records the wall-clock reference for tick()"""
        self._running = True
        self._last_wall = self._wall_clock()

    def pause(self):
        """Stop advancing; pausing a stopped clock does nothing"""
        self._running = False

    def toggle(self) -> bool:
        """Flip between running and stopped, returning is_running"""
        if self._running:
            self.pause()
        else:
            self.play()
        return self._running

    def reset(self):
        """Stop and return to the epoch"""
        self._running = False
        self._elapsed_seconds = 0.0
        self._last_wall = self._wall_clock()

    # ========== ADVANCING ==========
    def advance(self, wall_delta: float):
        """
        Advance by a wall-clock interval scaled by the time scale.

        Has no effect while stopped. Non-positive intervals are ignored.

        Parameters
        ----------
        wall_delta : float
            Wall-clock seconds since the previous frame

        Raises
        ------
        ValueError
            If wall_delta is NaN or infinite
        """
        if not math.isfinite(wall_delta):
            raise ValueError(f"Wall-clock interval must be finite, got {wall_delta}")
        if not self._running or wall_delta <= 0.0:
            return
        self._elapsed_seconds += wall_delta * self._time_scale

    def tick(self) -> float:
        """
        Advance by the wall-clock time since the last play() or tick().

        Returns
        -------
        float
            The wall-clock interval measured [s]
        """
        now = self._wall_clock()
        delta = now - self._last_wall
        self._last_wall = now
        self.advance(delta)
        return delta

    # ========== SETTING TIME ==========
    def set_time(self, days: float):
        """Set elapsed time [days since J2000]"""
        if not math.isfinite(days):
            raise ValueError(f"Time must be finite, got {days}")
        self._elapsed_seconds = float(days) * SECONDS_PER_DAY

    def set_from_calendar_date(self, when: Union[datetime, date]):
        """
        Set elapsed time from a calendar date.

        Naive datetimes are taken as UTC; plain dates as 00:00 UTC.
        """
        if not isinstance(when, datetime):
            when = datetime(when.year, when.month, when.day, tzinfo=timezone.utc)
        elif when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        self._elapsed_seconds = (when - J2000_EPOCH).total_seconds()

    def set_julian_date(self, jd: float):
        """Set elapsed time from a Julian Date"""
        self.set_time(jd - J2000_JD)

    def _jump_seconds(self, amount, unit):
        if unit not in TIME_UNITS:
            raise ValueError(f"Unknown time unit '{unit}'. "
                             f"Use: {list(TIME_UNITS.keys())}")
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Jump amount must be finite and non-negative, "
                             f"got {amount}")
        return amount * TIME_UNITS[unit]

    def jump_forward(self, amount: float, unit: str = 'days'):
        """Move forward by `amount` of `unit` (seconds ... years)"""
        self._elapsed_seconds += self._jump_seconds(amount, unit)

    def jump_backward(self, amount: float, unit: str = 'days'):
        """
        Move backward by `amount` of `unit`, clamping at the epoch.

        The result is never before the epoch, even when the clock was.
        """
        target = self._elapsed_seconds - self._jump_seconds(amount, unit)
        self._elapsed_seconds = max(target, 0.0)

    # ========== TIME SCALE ==========
    def set_time_scale(self, scale: float):
        """Set the time scale; negative values are clamped to zero (frozen)"""
        if not math.isfinite(scale):
            raise ValueError(f"Time scale must be finite, got {scale}")
        if scale < 0:
            logger.debug("Clamping negative time scale %g to 0", scale)
        self._time_scale = max(0.0, float(scale))

    def set_time_scale_preset(self, name: str):
        """Set the time scale from a TIME_SCALE_PRESETS name"""
        if name not in TIME_SCALE_PRESETS:
            raise ValueError(f"Unknown time scale preset '{name}'. "
                             f"Use: {list(TIME_SCALE_PRESETS.keys())}")
        self._time_scale = TIME_SCALE_PRESETS[name]

    @property
    def time_scale_label(self) -> str:
        """Preset name matching the time scale within 1%, else '1.00e+05x'"""
        for name, scale in TIME_SCALE_PRESETS.items():
            if scale == 0.0:
                if self._time_scale == 0.0:
                    return name
            elif abs(self._time_scale - scale) < 0.01 * scale:
                return name
        return f"{self._time_scale:.2e}x"

    # ========== CALENDAR QUERIES ==========
    @property
    def calendar_date(self) -> datetime:
        """
        UTC datetime of the current simulation time

        Raises
        ------
        OverflowError
            Outside the years 1-9999 representable by datetime
        """
        return J2000_EPOCH + timedelta(seconds=self._elapsed_seconds)

    @property
    def julian_date(self) -> float:
        return J2000_JD + self.elapsed_days

    @property
    def julian_centuries(self) -> float:
        """Julian centuries since J2000"""
        return self.elapsed_days / 36525.0

    def format_date(self) -> str:
        """'YYYY-MM-DD', or an approximate year beyond the calendar range"""
        try:
            return self.calendar_date.strftime('%Y-%m-%d')
        except OverflowError:
            return self._approximate_year()

    def format_datetime(self) -> str:
        """'YYYY-MM-DD HH:MM:SS' (UTC)"""
        try:
            return self.calendar_date.strftime('%Y-%m-%d %H:%M:%S')
        except OverflowError:
            return self._approximate_year()

    def _approximate_year(self):
        year = 2000 + self.elapsed_days / DAYS_PER_YEAR
        return f"year {year:.0f}"

    def relative_time(self) -> str:
        """
        Elapsed time since the epoch as a readable string.

        Bucketed by magnitude: days below one year, then years with two
        decimals, whole years from 1000, millions of years from 1e6.
        """
        days = self.elapsed_days
        sign = '-' if days < 0 else ''
        days = abs(days)
        years = days / DAYS_PER_YEAR
        if years >= 1e6:
            return f"{sign}{years / 1e6:.1f} million years"
        elif years >= 1000:
            return f"{sign}{years:.0f} years"
        elif years >= 1:
            return f"{sign}{years:.2f} years"
        return f"{sign}{days:.1f} days"

    # ========== DERIVED ASTRONOMY ==========
    def solar_longitude(self) -> float:
        """Approximate mean longitude of the Sun [deg, 0-360)"""
        return normalize_degrees(280.460 + 0.9856474 * self.elapsed_days)

    def moon_phase(self) -> float:
        """Lunar phase fraction in [0, 1): 0 new, 0.5 full"""
        return (self.elapsed_days % SYNODIC_MONTH) / SYNODIC_MONTH

    def moon_phase_name(self) -> str:
        phase = self.moon_phase()
        for upper, name in _MOON_PHASES:
            if phase < upper:
                return name
        return 'New Moon'

    def season(self) -> str:
        """Northern-hemisphere season from the solar longitude"""
        longitude = self.solar_longitude()
        if longitude < 90:
            return 'Spring'
        elif longitude < 180:
            return 'Summer'
        elif longitude < 270:
            return 'Fall'
        return 'Winter'

    def earth_obliquity(self) -> float:
        """Obliquity of the ecliptic [deg], linear IAU 1976 term"""
        return 23.439291 - 0.0130042 * self.julian_centuries

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"SimulationClock(elapsed_days={self.elapsed_days}, "
                f"time_scale={self._time_scale}, state={self.state.value})")

    def __str__(self):
        return (f"{self.format_datetime()} UTC ({self.relative_time()} since J2000), "
                f"{self.time_scale_label}, {self.state.value}")
