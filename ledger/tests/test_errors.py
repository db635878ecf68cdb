from __future__ import annotations

import json

import pytest

from ledger.errors import (ArithmeticOverflow, EnforcedPause, InsufficientAllowance,
                           InsufficientBalance, InvalidAddress, InvalidAmount, InvalidMetadata,
                           InvalidReceiver, LedgerError, SupplyCapExceeded, Unauthorized,
                           error_to_result_fields)

A = b"\xaa" * 20


@pytest.mark.parametrize(
    "err,code",
    [
        (InvalidAddress(address="0x12"), "INVALID_ADDRESS"),
        (InvalidAmount(value=-1), "INVALID_AMOUNT"),
        (ArithmeticOverflow(value=2, limit=1), "ARITHMETIC_OVERFLOW"),
        (InvalidReceiver(A), "INVALID_RECEIVER"),
        (InsufficientBalance(A, 1, 2), "INSUFFICIENT_BALANCE"),
        (InsufficientAllowance(A, 1, 2), "INSUFFICIENT_ALLOWANCE"),
        (SupplyCapExceeded(11, 10), "SUPPLY_CAP_EXCEEDED"),
        (EnforcedPause(), "ENFORCED_PAUSE"),
        (Unauthorized(A), "UNAUTHORIZED"),
        (InvalidMetadata(field_name="name"), "INVALID_METADATA"),
    ],
)
def test_codes_and_json_safe_payloads(err: LedgerError, code: str) -> None:
    assert isinstance(err, LedgerError)
    assert err.code == code
    json.dumps(err.to_dict())


def test_addresses_rendered_as_hex() -> None:
    err = InsufficientAllowance(A, 3, 4)
    assert err.to_dict() == {
        "code": "INSUFFICIENT_ALLOWANCE",
        "message": "insufficient allowance",
        "data": {"spender": "0x" + "aa" * 20, "allowance": 3, "needed": 4},
    }
    assert err.spender == A


def test_str_includes_code() -> None:
    assert str(EnforcedPause()) == "ENFORCED_PAUSE: ledger is paused"
    assert str(InsufficientBalance(A, 0, 1)).startswith("INSUFFICIENT_BALANCE: insufficient balance")


def test_result_fields_split_input_from_rejection() -> None:
    assert error_to_result_fields(InvalidAmount(value=1.5))["status"] == "INVALID_INPUT"
    assert error_to_result_fields(InvalidAddress())["status"] == "INVALID_INPUT"
    res = error_to_result_fields(InsufficientBalance(A, 0, 1))
    assert res["status"] == "REJECTED"
    assert res["error"]["code"] == "INSUFFICIENT_BALANCE"


def test_errors_are_catchable_as_exceptions() -> None:
    with pytest.raises(LedgerError):
        raise SupplyCapExceeded(2, 1)
