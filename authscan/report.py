import json
from pathlib import Path

from authscan.models import format_ts


def make_text_report(snapshot, input_path):
    lines = []
    lines.append("Report")
    lines.append(f"Input: {input_path}")
    lines.append(f"Malformed lines skipped: {snapshot.malformed}")
    lines.append(f"Events processed: {snapshot.events} (ignored outcomes: {snapshot.ignored})")
    lines.append("")

    lines.append("1. Flagged IPs (Brute force):")
    lines.append("")
    if not snapshot.flagged_ips:
        lines.append("None")
        lines.append("")
    for ip, peak in snapshot.flagged_ips.items():
        lines.append(f"IP: {ip}")
        lines.append(f"Max fails in {snapshot.window_minutes} min window: {peak.count}")
        lines.append(f"Window: {format_ts(peak.start)} to {format_ts(peak.end)}")
        lines.append("")

    lines.append("2. Flagged Usernames (Targeted accounts):")
    lines.append("")
    if not snapshot.flagged_users:
        lines.append("None")
    for user, total in snapshot.flagged_users.items():
        lines.append(f"User: {user} | total failed logins: {total}")
    lines.append("")

    lines.append("3. Possible Compromises (Success after brute force pattern):")
    lines.append("")
    if not snapshot.correlations:
        lines.append("None")
    for record in snapshot.correlations:
        lines.append(record.describe())
    return "\n".join(lines) + "\n"


def write_report(snapshot, input_path, output_path):
    Path(output_path).write_text(make_text_report(snapshot, input_path), encoding="utf-8")


def write_json(snapshot, output_path):
    Path(output_path).write_text(json.dumps(snapshot.to_dict(), indent=2) + "\n", encoding="utf-8")
