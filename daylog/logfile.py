"""
Library for reading a personal activity log into a mapping of dates to
timestamped entries.


Activity Logs
-------------

An activity log is a plain text diary of what was done when, organized
into sections by date.  Each section starts with a date header and
contains one entry per line, each entry being a time of day and a short
description of the activity that started at that time.  Comments
introduced by `--` can annotate a header or an entry, or stand on their
own line, and are discarded.  For example:

```
-- wheee a comment

# 2025-02-05
08:00 Breakfast
09:00 Sanitizing moisture collector
12:00 Lunch
22:00 Sleep

# 2025-02-07 -- dates not necessarily sequential
08:00 Breakfast -- should I try skipping breakfast?
09:00 Bumped head, passed out
13:36 Wake up, headache
22:00 Sleep
```

Reading this log produces a mapping from `CalendarDate(2025, 2, 5)` and
`CalendarDate(2025, 2, 7)` to mappings from `TimeOffset` (minutes since
midnight) to activity text, e.g. `TimeOffset(480)` to `'Breakfast'`.

Dates and times are taken literally: `# 2025-13-40` and `99:99` are
read without complaint.  Within a section, a repeated time replaces the
earlier entry.  Within a log, a repeated date replaces the earlier
section rather than merging with it.


Grammar
-------

```
<log> ::= <section>+

# Anything before a date header is ignored
<section> ::=
    <filler>? <date-header> <comment-line>? <space>* <entry>+

<filler> ::= (!"#")+

<date-header> ::=
    "# " <digit>{4} "-" <digit>{2} "-" <digit>{2}

# A comment line may start on the line after a header because the space
# before a comment marker includes newlines
<comment-line> ::=
    <space>* "--" (!<newline>)* <newline>?

<entry> ::=
    <digit>{2} ":" <digit>{2} " " <activity>

# Alternatives are tried in order and the first that matches wins.  The
# rest of the line (any comment body) is then discarded.
<activity> ::=
    | (!<newline>)* <comment-marker>    # Text up to a comment
    | (!<newline>)* ?=<newline>         # Text up to the end of the line
    | <any>* <eof>                      # Text up to the end of the input

<comment-marker> ::= <space>+ "--" | "--"
```

Parsing stops at the first entry that fails to parse, keeping the
entries parsed so far, and likewise at the first section that fails to
parse.  A section without entries and a log without sections are
errors.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import bisect
import collections
import logging
import re
import types

from .timeoffset import TimeOffset


logger = logging.getLogger(__name__)


# Errors


class ParseError(Exception):

    def __init__(
            self,
            filename=None,
            line=None,
            column=None,
            text=None,
            message=None,
            expected=None,
            offset=None,
    ):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column
        self.text = text
        self.message = message
        self.expected = expected
        self.offset = offset

    def __str__(self):
        pieces = ['Parse error']
        if self.filename is not None:
            pieces.append(f' in {self.filename!r}')
        if self.line is not None:
            pieces.append(f' at line {self.line}')
        if self.column is not None:
            pieces.append(' at' if self.line is None else ',')
            pieces.append(f' column {self.column}')
        if self.message is not None:
            pieces.append(': ')
            pieces.append(self.message)
        if self.expected is not None:
            pieces.append(': expected ')
            pieces.append(self.expected)
        if self.text is not None:
            pieces.append(': ')
            pieces.append(f'{self.text!r}')
        return ''.join(pieces)


# Values


class CalendarDate(
        collections.namedtuple('CalendarDate', ('year', 'month', 'day'))):

    __slots__ = ()

    def __str__(self):
        return f'{self.year:04d}-{self.month:02d}-{self.day:02d}'


Entry = collections.namedtuple('Entry', ('time', 'activity'))


# `entries` is a read-only mapping of `TimeOffset` to activity text
Section = collections.namedtuple('Section', ('date', 'entries'))


def _frozen_mapping(mapping):
    # Read-only view that iterates in key order
    return types.MappingProxyType(dict(sorted(mapping.items())))


# Parsing


class LogParser:
    """
    Recursive descent parser over a single activity log text.

    Each parsing method consumes input from the current position and
    either returns what it parsed or raises `ParseError`.  Repetitions
    save the position before each attempt and restore it when the
    attempt fails, so a failed attempt consumes nothing.

    The lexical details of the format are the regular expressions below.
    Subclass to change them.
    """

    date_header_pattern = re.compile(
        r'# ([0-9]{4})-([0-9]{2})-([0-9]{2})')

    entry_time_pattern = re.compile(r'([0-9]{2}):([0-9]{2}) ')

    comment_pattern = re.compile(r'\s+--|--')

    filler_pattern = re.compile(r'[^#]*')

    whitespace_pattern = re.compile(r'\s*')

    rest_of_line_pattern = re.compile(r'[^\n]*\n?')

    activity_patterns = (
        # Text up to a comment marker, with or without space before it
        re.compile(r'([^\n]*?)(?:\s+--|--)'),
        # Text up to the end of the line
        re.compile(r'([^\n]*)(?=\n)'),
        # Text up to the end of the input
        re.compile(r'(.*)\Z', re.DOTALL),
    )

    def __init__(self, text, filename=None):
        self._text = text
        self._filename = filename
        self._idx = 0
        self._line_starts = None

    @property
    def offset(self):
        return self._idx

    def at_end(self):
        return self._idx >= len(self._text)

    def position(self, offset=None):
        """Return the 1-based line and column of the given offset."""
        if offset is None:
            offset = self._idx
        if self._line_starts is None:
            self._line_starts = self._index_lines()
        line = bisect.bisect_right(self._line_starts, offset)
        column = offset - self._line_starts[line - 1] + 1
        return line, column

    def _index_lines(self):
        # Offsets at which each line starts, built once per text
        starts = [0]
        idx = self._text.find('\n')
        while idx >= 0:
            starts.append(idx + 1)
            idx = self._text.find('\n', idx + 1)
        return starts

    def error(self, message, expected=None, offset=None):
        if offset is None:
            offset = self._idx
        line, column = self.position(offset)
        line_end = self._text.find('\n', offset)
        if line_end < 0:
            line_end = len(self._text)
        return ParseError(
            filename=self._filename,
            line=line,
            column=column,
            text=self._text[offset:line_end],
            message=message,
            expected=expected,
            offset=offset,
        )

    def _match(self, pattern, message, expected):
        match = pattern.match(self._text, self._idx)
        if match is None:
            raise self.error(message, expected)
        self._idx = match.end()
        return match

    def _skip(self, pattern):
        match = pattern.match(self._text, self._idx)
        if match is None:
            return False
        self._idx = match.end()
        return True

    def _some(self, parse, message=None, expected=None):
        # One or more, stopping at the first failed attempt.  If the
        # first attempt fails, its error propagates (or is replaced by
        # one with the given message).
        items = []
        while True:
            mark = self._idx
            try:
                items.append(parse())
            except ParseError as error:
                self._idx = mark
                if items:
                    break
                if message is None:
                    raise
                raise self.error(message, expected) from error
            # Stop on zero progress to guarantee termination
            if self._idx == mark:
                break
        return items

    # Lines

    def skip_line(self):
        """Discard the rest of the current line and its terminator."""
        self._skip(self.rest_of_line_pattern)

    def skip_whitespace(self):
        self._skip(self.whitespace_pattern)

    def skip_filler(self):
        self._skip(self.filler_pattern)

    def skip_comment(self):
        """
        Discard a comment line if one starts here, returning whether one
        did.  The cursor is unchanged when there is no comment.
        """
        if self._skip(self.comment_pattern):
            self.skip_line()
            return True
        return False

    def activity(self):
        for pattern in self.activity_patterns:
            match = pattern.match(self._text, self._idx)
            if match is not None:
                self._idx = match.end()
                self.skip_line()
                return match.group(1)
        raise self.error('Bad activity', 'activity text')

    def date_header(self):
        match = self._match(
            self.date_header_pattern,
            'Bad date header', "date header '# YYYY-MM-DD'")
        return CalendarDate(*(int(group) for group in match.groups()))

    def entry(self):
        match = self._match(
            self.entry_time_pattern,
            'Bad entry time', "entry time 'HH:MM '")
        hours, minutes = match.groups()
        time = TimeOffset.from_hours_minutes(hours, minutes)
        return Entry(time, self.activity())

    # Structure

    def section(self):
        self.skip_filler()
        date = self.date_header()
        self.skip_comment()
        self.skip_whitespace()
        entries = self._some(
            self.entry,
            f'No entries in section for {date}',
            "entry 'HH:MM activity'")
        # Fold with later entries replacing earlier ones
        mapping = {}
        for time, activity in entries:
            if time in mapping:
                logger.debug('Entry at %s on %s replaces %r with %r',
                             time, date, mapping[time], activity)
            mapping[time] = activity
        logger.debug('Parsed section for %s with %d entries',
                     date, len(mapping))
        return Section(date, _frozen_mapping(mapping))

    def log(self):
        sections = self._some(self.section)
        # Fold with later sections replacing earlier ones
        mapping = {}
        for date, entries in sections:
            if date in mapping:
                logger.warning(
                    'Section for %s replaces an earlier section%s',
                    date, self._where())
            mapping[date] = entries
        if self._text[self._idx:].strip():
            line, column = self.position()
            logger.warning('Ignoring unparsed text%s at line %d, '
                           'column %d', self._where(), line, column)
        return _frozen_mapping(mapping)

    def _where(self):
        if self._filename is None:
            return ''
        return f' in {self._filename!r}'


def parse_activity(text, filename=None):
    return LogParser(text, filename).activity()


def parse_date(text, filename=None):
    return LogParser(text, filename).date_header()


def parse_entry(text, filename=None):
    return LogParser(text, filename).entry()


def parse_section(text, filename=None):
    return LogParser(text, filename).section()


def parse_log(text, filename=None):
    """
    Parse the given activity log text into a read-only mapping of
    `CalendarDate` to read-only mappings of `TimeOffset` to activity
    text.  Raise `ParseError` if the text does not start with a valid
    section.
    """
    return LogParser(text, filename).log()


def read(file, filename=None):
    """
    Read an activity log from a string or a text file object.

    The file's `name`, if any, is used in error messages unless
    `filename` is given.
    """
    if isinstance(file, (str, bytes)):
        text = file
    elif hasattr(file, 'read'):
        text = file.read()
        if filename is None:
            filename = getattr(file, 'name', None)
    else:
        raise TypeError(f'Not a string or readable file: {file!r}')
    if isinstance(text, bytes):
        text = text.decode('utf-8')
    return parse_log(text, filename)
