from datetime import datetime

from authscan.parser import parse_line
from authscan.models import LOGIN_FAILED, LOGIN_SUCCESS, OTHER


def test_failed_login_parsing():
    ev = parse_line("2024-03-01 09:15:02 FAILED_LOGIN user=admin ip=203.0.113.7 port=22\n")
    assert ev is not None
    assert ev.timestamp == datetime(2024, 3, 1, 9, 15, 2)
    assert ev.outcome == LOGIN_FAILED
    assert ev.user == "admin"
    assert ev.ip == "203.0.113.7"


def test_key_order_does_not_matter():
    ev = parse_line("2024-03-01 09:15:02 SUCCESS_LOGIN ip=10.0.0.1 session=7 user=alice")
    assert ev.outcome == LOGIN_SUCCESS
    assert ev.user == "alice"
    assert ev.ip == "10.0.0.1"


def test_unknown_outcome_is_not_malformed():
    ev = parse_line("2024-03-01 09:15:02 LOGOUT user=alice ip=10.0.0.1")
    assert ev is not None
    assert ev.outcome == OTHER


def test_outcome_is_case_sensitive():
    ev = parse_line("2024-03-01 09:15:02 failed_login user=alice ip=10.0.0.1")
    assert ev.outcome == OTHER


def test_too_few_tokens():
    assert parse_line("2024-03-01 09:15:02 FAILED_LOGIN") is None
    assert parse_line("") is None


def test_bad_timestamp():
    assert parse_line("2024-03-01 25:61:00 FAILED_LOGIN user=a ip=1.1.1.1") is None
    assert parse_line("2024-13-01 10:00:00 FAILED_LOGIN user=a ip=1.1.1.1") is None
    assert parse_line("01/03/2024 10:00:00 FAILED_LOGIN user=a ip=1.1.1.1") is None
    assert parse_line("2024-03-01 10:00 FAILED_LOGIN user=a ip=1.1.1.1") is None
    assert parse_line("2024-03-01 24:00:00 FAILED_LOGIN user=a ip=1.1.1.1") is None


def test_missing_or_empty_keys():
    assert parse_line("2024-03-01 10:00:00 FAILED_LOGIN user=a port=22") is None
    assert parse_line("2024-03-01 10:00:00 FAILED_LOGIN ip=1.1.1.1 port=22") is None
    assert parse_line("2024-03-01 10:00:00 FAILED_LOGIN user= ip=1.1.1.1") is None


def test_repeated_key_last_wins():
    ev = parse_line("2024-03-01 10:00:00 FAILED_LOGIN user=a ip=1.1.1.1 user=b")
    assert ev.user == "b"


def test_non_ascii_digits_are_malformed():
    arabic = "٢٠٢٤-٠٣-٠١"
    assert parse_line(f"{arabic} 10:00:00 FAILED_LOGIN user=a ip=1.1.1.1") is None
    assert parse_line("2024-03-01 ١٠:00:00 FAILED_LOGIN user=a ip=1.1.1.1") is None
