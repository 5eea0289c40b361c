"""
Comparison of the outcome of a fork with what the test expects.

When the test expects a transaction to be rejected, any rejection passes: the
exception text of the fixture is deliberately not compared with the reason
the transaction was rejected here, as each client words its errors
differently.
"""

from typing import Optional

from .exceptions import (
    MissingExpectedError,
    ReconciliationMismatch,
    UnexpectedValidationError,
)
from .fixtures import ExpectedOutcome
from .forks import ForkCase
from .validator import ValidationFailure, ValidationResult


def reconcile(
    fork_case: ForkCase,
    expected: Optional[ExpectedOutcome],
    outcome: ValidationResult,
) -> None:
    """
    Check `outcome` against `expected` for the fork in `fork_case`.

    Parameters
    ----------
    fork_case :
        The fork the outcome was produced under.
    expected :
        What the test expects, or `None` if the fork is not checked.
    outcome :
        The outcome of validating the transaction under the fork.

    Raises
    ------
    UnexpectedValidationError
        If the transaction was rejected but a hash was expected.
    MissingExpectedError
        If the transaction was accepted but a rejection was expected.
    ReconciliationMismatch
        If the hash, sender or intrinsic gas differ from the expected ones.
    """
    if expected is None:
        return

    fork = fork_case.name
    if isinstance(outcome, ValidationFailure):
        if not expected.expects_failure:
            raise UnexpectedValidationError(
                fork, outcome.cause
            ) from outcome.cause
        return

    if expected.exception is not None:
        raise MissingExpectedError(fork, expected.exception)

    if expected.hash is not None and bytes(outcome.hash) != bytes(
        expected.hash
    ):
        raise ReconciliationMismatch(
            fork, "hash", "0x" + outcome.hash.hex(), str(expected.hash)
        )
    if expected.sender is not None and bytes(outcome.sender) != bytes(
        expected.sender
    ):
        raise ReconciliationMismatch(
            fork, "sender", "0x" + outcome.sender.hex(), str(expected.sender)
        )
    if outcome.intrinsic_gas != int(expected.intrinsic_gas):
        raise ReconciliationMismatch(
            fork,
            "intrinsic gas",
            outcome.intrinsic_gas,
            int(expected.intrinsic_gas),
        )
