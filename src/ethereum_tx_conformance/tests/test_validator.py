"""Test validation of a single transaction under one fork."""

import pytest

from ..chain_config import MAINNET_CONFIG
from ..crypto.hash import keccak256
from ..exceptions import (
    DecodeError,
    InsufficientGasError,
    InvalidSignatureError,
)
from ..forks import fork_case
from ..rules import resolve_rules
from ..validator import (
    ValidatedTransaction,
    ValidationFailure,
    check_transaction,
    validate_transaction,
)
from ..transactions import encode_transaction
from .helpers import (
    EIP155_EXAMPLE,
    EIP155_EXAMPLE_SENDER,
    PRIVATE_KEY,
    address_of,
    legacy_transaction,
    with_high_s,
)


def check(raw: bytes, fork_name: str):
    case = fork_case(fork_name)
    rules = resolve_rules(MAINNET_CONFIG, fork_name)
    return check_transaction(raw, case.signature_scheme, rules)


def test_valid_transaction() -> None:
    outcome = check(EIP155_EXAMPLE, "Prague")

    assert outcome == ValidatedTransaction(
        sender=EIP155_EXAMPLE_SENDER,
        hash=keccak256(EIP155_EXAMPLE),
        intrinsic_gas=21000,
    )


def test_signature_rejected() -> None:
    outcome = check(EIP155_EXAMPLE, "Homestead")

    assert isinstance(outcome, ValidationFailure)
    assert isinstance(outcome.cause, InvalidSignatureError)


def test_undecodable() -> None:
    outcome = check(b"\xf8", "Prague")

    assert isinstance(outcome, ValidationFailure)
    assert isinstance(outcome.cause, DecodeError)


def test_insufficient_gas() -> None:
    raw = encode_transaction(legacy_transaction(data=b"\x01"))

    case = fork_case("Frontier")
    rules = resolve_rules(MAINNET_CONFIG, "Frontier")
    with pytest.raises(InsufficientGasError) as exc_info:
        validate_transaction(raw, case.signature_scheme, rules)

    assert exc_info.value.required == 21068
    assert exc_info.value.declared == 21000
    assert str(exc_info.value) == "insufficient gas ( 21000 < 21068 )"


def test_gas_exactly_intrinsic() -> None:
    raw = encode_transaction(legacy_transaction(gas=21016, data=b"\x01"))

    assert isinstance(check(raw, "Frontier"), ValidationFailure)
    outcome = check(raw, "Istanbul")
    assert isinstance(outcome, ValidatedTransaction)
    assert outcome.intrinsic_gas == 21016
    assert outcome.sender == address_of(PRIVATE_KEY)


def test_signature_checked_before_gas() -> None:
    tx = with_high_s(legacy_transaction(gas=0))
    outcome = check(encode_transaction(tx), "Homestead")

    assert isinstance(outcome, ValidationFailure)
    assert isinstance(outcome.cause, InvalidSignatureError)

    outcome = check(encode_transaction(tx), "Frontier")
    assert isinstance(outcome, ValidationFailure)
    assert isinstance(outcome.cause, InsufficientGasError)


def test_outcome_is_deterministic() -> None:
    assert check(EIP155_EXAMPLE, "London") == check(EIP155_EXAMPLE, "London")
