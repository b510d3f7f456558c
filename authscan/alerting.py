"""
Alerting: forward analyzer alerts by email and/or Slack webhook.
Both channels are off unless configured (see authscan.config).
"""
import smtplib
import json
import logging
import requests
from email.message import EmailMessage

from authscan import config

logger = logging.getLogger('alerting')


class Alerting:
    def __init__(self, slack_webhook=None, email_to=None):
        self.slack_webhook = slack_webhook or config.SLACK_WEBHOOK
        self.email_to = email_to or config.ALERT_EMAIL_TO

    def send(self, alert):
        text = json.dumps(alert, indent=2)
        logger.info('ALERT: %s', text)
        if self.email_to:
            try:
                self._send_email('Auth log alert: ' + alert.get('type'), text)
            except Exception as e:
                logger.exception('Email alert failed: %s', e)
        if self.slack_webhook:
            try:
                resp = requests.post(
                    self.slack_webhook,
                    json={'text': '*' + alert.get('type') + '*\n' + alert.get('message')},
                    timeout=10,
                )
                resp.raise_for_status()
            except Exception as e:
                logger.exception('Slack notify failed: %s', e)

    def _send_email(self, subject, body):
        msg = EmailMessage()
        msg['From'] = config.ALERT_EMAIL_FROM
        msg['To'] = self.email_to
        msg['Subject'] = subject
        msg.set_content(body)
        with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=10) as s:
            s.send_message(msg)
