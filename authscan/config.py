"""
Detection thresholds, default paths and alerting settings.
Every value can be overridden via environment variables.
"""
import os

# >= IP_FAIL_THRESHOLD failures from one ip within WINDOW_MINUTES -> brute force
IP_FAIL_THRESHOLD = int(os.getenv('IP_FAIL_THRESHOLD', '5'))
WINDOW_MINUTES = int(os.getenv('WINDOW_MINUTES', '10'))
# >= USER_FAIL_THRESHOLD total failures for one user -> targeted account
USER_FAIL_THRESHOLD = int(os.getenv('USER_FAIL_THRESHOLD', '8'))

DEFAULT_INPUT = os.getenv('AUTHSCAN_INPUT', 'sample_data/auth.log')
DEFAULT_OUTPUT = os.getenv('AUTHSCAN_OUTPUT', 'report.txt')

# Alerting
ALERT_EMAIL_FROM = os.getenv('ALERT_EMAIL_FROM', 'alert@example.com')
ALERT_EMAIL_TO = os.getenv('ALERT_EMAIL_TO')
SMTP_HOST = os.getenv('SMTP_HOST', 'localhost')
SMTP_PORT = int(os.getenv('SMTP_PORT', '25'))
SLACK_WEBHOOK = os.getenv('SLACK_WEBHOOK')
