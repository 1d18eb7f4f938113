"""Reading personal activity logs into mappings of dates to entries."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


from .logfile import (
    CalendarDate,
    Entry,
    LogParser,
    ParseError,
    Section,
    parse_activity,
    parse_date,
    parse_entry,
    parse_log,
    parse_section,
    read,
)
from .timeoffset import TimeOffset


__version__ = '0.1.0'
