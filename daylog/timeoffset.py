"""
Clock times as offsets in minutes since midnight.

A `TimeOffset` wraps a signed integer count of minutes.  It is a numeric
wrapper, not a calendar-aware clock: arithmetic is defined purely on the
wrapped integer, so offsets can be added, subtracted, scaled, and can go
negative or past the end of the day.  Plain integers combine with
offsets as if they were offsets, which makes `TimeOffset(30) * 2` and
`TimeOffset(61) == 61` behave as expected.

Offsets display as `HH:MM`.  The hours and minutes are the truncating
quotient and remainder of the minute count by 60.  Hours keep their
sign while minutes are shown as a magnitude, so `TimeOffset(-100)`
displays as `-1:40`.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


class TimeOffset:

    __slots__ = ('_minutes',)

    def __init__(self, minutes=0):
        value = self._unwrap(minutes)
        if value is None:
            raise TypeError('Minutes must be an integer or a '
                            f'`TimeOffset`: {minutes!r}')
        self._minutes = value

    @staticmethod
    def from_hours_minutes(hours, minutes):
        return TimeOffset(int(hours) * 60 + int(minutes))

    @property
    def minutes(self):
        return self._minutes

    @staticmethod
    def _unwrap(other):
        # Offsets and plain integers are interchangeable operands
        if isinstance(other, TimeOffset):
            return other._minutes
        elif isinstance(other, int) and not isinstance(other, bool):
            return other
        return None

    # Conversions

    def __int__(self):
        return self._minutes

    def __bool__(self):
        return self._minutes != 0

    def __hash__(self):
        return hash(self._minutes)

    def __repr__(self):
        return f'TimeOffset({self._minutes!r})'

    def __str__(self):
        magnitude_hours = abs(self._minutes) // 60
        hours = -magnitude_hours if self._minutes < 0 else magnitude_hours
        minutes = self._minutes - hours * 60
        return f'{hours:02d}:{abs(minutes):02d}'

    # Comparisons

    def __eq__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return self._minutes == value

    def __lt__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return self._minutes < value

    def __le__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return self._minutes <= value

    def __gt__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return self._minutes > value

    def __ge__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return self._minutes >= value

    # Arithmetic

    def __add__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return TimeOffset(self._minutes + value)

    __radd__ = __add__

    def __sub__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return TimeOffset(self._minutes - value)

    def __rsub__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return TimeOffset(value - self._minutes)

    def __mul__(self, other):
        value = self._unwrap(other)
        if value is None:
            return NotImplemented
        return TimeOffset(self._minutes * value)

    __rmul__ = __mul__

    def __neg__(self):
        return TimeOffset(-self._minutes)

    def __pos__(self):
        return self

    def __abs__(self):
        return TimeOffset(abs(self._minutes))

    def sign(self):
        """Return -1, 0, or 1 as an offset, following the minute count."""
        return TimeOffset((self._minutes > 0) - (self._minutes < 0))
