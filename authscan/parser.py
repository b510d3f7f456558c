"""
Parse authentication log lines into Event objects.

Expected line format (whitespace separated):
    yyyy-MM-dd HH:mm:ss OUTCOME key=value key=value ...
where OUTCOME is FAILED_LOGIN, SUCCESS_LOGIN or anything else (ignored),
and the keys must include user= and ip=. Unknown keys are ignored.
"""
import re
import logging
from dateutil import parser as dateparser

from authscan.models import Event, LOGIN_FAILED, LOGIN_SUCCESS, OTHER

logger = logging.getLogger('parser')

RE_DATE = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}$')
RE_TIME = re.compile(r'^[0-9]{2}:[0-9]{2}:[0-9]{2}$')

OUTCOMES = {
    'FAILED_LOGIN': LOGIN_FAILED,
    'SUCCESS_LOGIN': LOGIN_SUCCESS,
}

MIN_TOKENS = 5


def parse_timestamp(date, time):
    """Return a datetime for the date/time tokens, or None if they don't match yyyy-MM-dd HH:mm:ss."""
    if not RE_DATE.match(date) or not RE_TIME.match(time):
        return None
    # isoparse would read 24:00:00 as midnight of the next day
    if time.startswith('24'):
        return None
    try:
        return dateparser.isoparse(date + 'T' + time)
    except ValueError:
        return None


def parse_fields(tokens):
    fields = {}
    for tok in tokens:
        key, sep, value = tok.partition('=')
        if sep:
            fields[key] = value
    return fields


def parse_line(raw):
    """
    Parse one raw log line. Returns an Event, or None if the line is malformed.
    Lines with an unrecognised outcome keyword still parse, with outcome OTHER.
    """
    line = raw.strip()
    parts = line.split()
    if len(parts) < MIN_TOKENS:
        logger.debug('Too few tokens: %r', line)
        return None

    ts = parse_timestamp(parts[0], parts[1])
    if ts is None:
        logger.debug('Bad timestamp: %r', line)
        return None

    fields = parse_fields(parts[3:])
    user = fields.get('user')
    ip = fields.get('ip')
    if not user or not ip:
        logger.debug('Missing user= or ip=: %r', line)
        return None

    return Event(
        timestamp=ts,
        outcome=OUTCOMES.get(parts[2], OTHER),
        user=user,
        ip=ip,
        raw=line,
    )
