from __future__ import annotations

import re
import secrets

from app.economy.spin.errors import SpinInvalidFormatError

SPIN_CODE_LENGTH = 5
SPIN_CODE_PATTERN = re.compile(r"[0-9]{5}")
# codes never start with 0 so spreadsheet exports keep all five digits
SPIN_CODE_MIN_VALUE = 10_000
SPIN_CODE_MAX_VALUE = 99_999


def generate_spin_code() -> str:
    span = SPIN_CODE_MAX_VALUE - SPIN_CODE_MIN_VALUE + 1
    return str(SPIN_CODE_MIN_VALUE + secrets.randbelow(span))


def is_valid_spin_code(raw_code: object) -> bool:
    return isinstance(raw_code, str) and SPIN_CODE_PATTERN.fullmatch(raw_code) is not None


def validate_spin_code(raw_code: object) -> str:
    if not is_valid_spin_code(raw_code):
        raise SpinInvalidFormatError
    return str(raw_code)
