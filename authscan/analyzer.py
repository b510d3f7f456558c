"""
Rule-based correlation engine over an ordered stream of auth events.
Rules implemented:
- Brute force by ip: >= ip_threshold failed logins from one ip within window_minutes.
- Targeted account: >= user_threshold failed logins for one user over the whole run.
- Possible compromise: successful login from an ip already flagged for brute force.

Every decision is made once, when the event arrives. Flags are never cleared,
so a flagged ip correlates with every later success from it, even after its
window has emptied again.
"""
import logging

from authscan import config
from authscan.counter import FailureCounter
from authscan.models import (
    Correlation, PeakWindow, Snapshot, LOGIN_FAILED, LOGIN_SUCCESS, format_ts
)
from authscan.parser import parse_line
from authscan.window import RollingWindow

logger = logging.getLogger('analyzer')


def _setting(name, value, default):
    if value is None:
        value = default
    if value < 1:
        raise ValueError(f'{name} must be a positive integer, got {value}')
    return value


class Analyzer:
    def __init__(self, ip_threshold=None, window_minutes=None, user_threshold=None):
        # settings
        self.ip_threshold = _setting('ip_threshold', ip_threshold, config.IP_FAIL_THRESHOLD)
        self.window_minutes = _setting('window_minutes', window_minutes, config.WINDOW_MINUTES)
        self.user_threshold = _setting('user_threshold', user_threshold, config.USER_FAIL_THRESHOLD)

        # ip -> failure timestamps inside the rolling window
        self.failed_by_ip = RollingWindow(self.window_minutes)
        # user -> total failures
        self.failed_by_user = FailureCounter()
        # ip -> largest window observed
        self.peaks = {}
        # dicts used as ordered sets: keys in the order they were flagged
        self.flagged_ips = {}
        self.flagged_users = {}
        self.correlations = []

        self.malformed = 0
        self.events = 0
        self.ignored = 0

    def process(self, event):
        """Update state for one event. Returns the alerts raised by it (usually none)."""
        self.events += 1
        if event.outcome == LOGIN_FAILED:
            return self._failed(event)
        elif event.outcome == LOGIN_SUCCESS:
            return self._success(event)
        else:
            self.ignored += 1
            return []

    def _failed(self, event):
        alerts = []
        ip, user, now = event.ip, event.user, event.timestamp

        count = self.failed_by_ip.record(ip, now)
        peak = self.peaks.get(ip)
        if peak is None or count > peak.count:
            self.peaks[ip] = PeakWindow(count, self.failed_by_ip.oldest(ip), now)

        if count >= self.ip_threshold and ip not in self.flagged_ips:
            self.flagged_ips[ip] = True
            logger.info('Brute force suspect from %s: %d fails in %d minutes',
                        ip, count, self.window_minutes)
            alerts.append({
                'type': 'bruteforce_source',
                'ip': ip,
                'count': count,
                'message': f'Suspected brute force: {count} failed logins from {ip} '
                           f'in {self.window_minutes} minutes'
            })

        total = self.failed_by_user.increment(user)
        if total >= self.user_threshold and user not in self.flagged_users:
            self.flagged_users[user] = True
            logger.info('Targeted account %s: %d failed logins', user, total)
            alerts.append({
                'type': 'targeted_account',
                'user': user,
                'count': total,
                'message': f'Targeted account: {total} failed logins for {user}'
            })
        return alerts

    def _success(self, event):
        if event.ip not in self.flagged_ips:
            return []
        self.correlations.append(Correlation(event.timestamp, event.user, event.ip))
        logger.warning('Intrusion pattern: success for %s from flagged ip %s',
                       event.user, event.ip)
        return [{
            'type': 'possible_compromise',
            'ip': event.ip,
            'user': event.user,
            'timestamp': format_ts(event.timestamp),
            'message': f'Successful login for {event.user} from brute-force source {event.ip}'
        }]

    def run(self, lines, on_alert=None):
        """
        Consume raw log lines in order and return the final Snapshot.
        Malformed lines are counted and skipped. Errors raised while iterating
        `lines` propagate to the caller.
        """
        for line in lines:
            event = parse_line(line)
            if event is None:
                self.malformed += 1
                continue
            for alert in self.process(event):
                if on_alert:
                    on_alert(alert)
        return self.snapshot()

    def snapshot(self):
        return Snapshot(
            window_minutes=self.window_minutes,
            malformed=self.malformed,
            events=self.events,
            ignored=self.ignored,
            flagged_ips={ip: self.peaks[ip] for ip in self.flagged_ips},
            flagged_users={u: self.failed_by_user.total(u) for u in self.flagged_users},
            correlations=list(self.correlations),
        )
