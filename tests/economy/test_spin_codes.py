from __future__ import annotations

import pytest

from app.economy.spin.codes import generate_spin_code, is_valid_spin_code, validate_spin_code
from app.economy.spin.errors import SpinInvalidFormatError


def test_generate_spin_code_produces_five_digits_without_leading_zero() -> None:
    codes = {generate_spin_code() for _ in range(500)}

    assert all(is_valid_spin_code(code) for code in codes)
    assert all(code[0] != "0" for code in codes)
    assert len(codes) > 1


@pytest.mark.parametrize("raw_code", ["12345", "00000", "99999"])
def test_validate_spin_code_accepts_five_ascii_digits(raw_code: str) -> None:
    assert validate_spin_code(raw_code) == raw_code


@pytest.mark.parametrize(
    "raw_code",
    ["1234", "123456", "12a45", "", " 12345", "12345\n", "١٢٣٤٥", "-1234", None, 12345],
)
def test_validate_spin_code_rejects_malformed_values(raw_code: object) -> None:
    with pytest.raises(SpinInvalidFormatError):
        validate_spin_code(raw_code)
