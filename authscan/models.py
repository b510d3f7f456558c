"""
Data types shared by the parser, the analyzer and the report.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

TS_FORMAT = '%Y-%m-%d %H:%M:%S'

# event outcomes
LOGIN_FAILED = 'login_failed'
LOGIN_SUCCESS = 'login_success'
OTHER = 'other'


def format_ts(ts):
    return ts.strftime(TS_FORMAT)


@dataclass(frozen=True)
class Event:
    timestamp: datetime
    outcome: str
    user: str
    ip: str
    raw: str = ''


@dataclass
class PeakWindow:
    count: int
    start: datetime
    end: datetime


@dataclass(frozen=True)
class Correlation:
    timestamp: datetime
    user: str
    ip: str

    def describe(self):
        return (f'Possible compromise: time={format_ts(self.timestamp)} user={self.user} '
                f'ip={self.ip} (success after brute-force pattern)')


@dataclass
class Snapshot:
    """Final state of one analyzer run, handed to the report."""
    window_minutes: int
    malformed: int = 0
    events: int = 0
    ignored: int = 0
    # ip -> peak window, in the order the sources were flagged
    flagged_ips: Dict[str, PeakWindow] = field(default_factory=dict)
    # user -> lifetime failure total, in the order the accounts were flagged
    flagged_users: Dict[str, int] = field(default_factory=dict)
    correlations: List[Correlation] = field(default_factory=list)

    def to_dict(self):
        return {
            'window_minutes': self.window_minutes,
            'malformed_lines': self.malformed,
            'events': self.events,
            'ignored': self.ignored,
            'flagged_ips': [
                {'ip': ip, 'max_window_fails': p.count,
                 'window_start': format_ts(p.start), 'window_end': format_ts(p.end)}
                for ip, p in self.flagged_ips.items()
            ],
            'flagged_users': [
                {'user': user, 'total_failed': total}
                for user, total in self.flagged_users.items()
            ],
            'possible_compromises': [
                {'timestamp': format_ts(c.timestamp), 'user': c.user, 'ip': c.ip}
                for c in self.correlations
            ],
        }
