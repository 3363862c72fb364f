# synccircle/utils/helpers.py
from decimal import Decimal, ROUND_HALF_UP
import re

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
SEND_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def validate_email(email):
    return isinstance(email, str) and bool(EMAIL_PATTERN.match(email))


def validate_send_time(value):
    """HH:MM, 24-hour clock"""
    return isinstance(value, str) and bool(SEND_TIME_PATTERN.match(value))


def round_half_up(value, digits=0):
    """Round like a spreadsheet does (0.5 goes up), not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)
