"""
Runs a transaction test under every fork it has an expectation for.
"""

from typing import Sequence

from .chain_config import ChainConfig
from .exceptions import ConformanceFailure
from .fixtures import TransactionTest
from .forks import FORK_CASES, ForkCase
from .logging import get_logger
from .reconcile import reconcile
from .rules import resolve_rules
from .validator import ValidationFailure, check_transaction

logger = get_logger(__name__)


def run(
    test: TransactionTest,
    chain_config: ChainConfig,
    fork_cases: Sequence[ForkCase] = FORK_CASES,
) -> None:
    """
    Check `test` under each fork of `fork_cases`, in order.

    The test is checked for structural errors before any transaction is
    decoded. Forks without an expectation are skipped. The first fork whose
    outcome does not match its expectation stops the run.

    Parameters
    ----------
    test :
        The transaction test to check.
    chain_config :
        Chain the rules of each fork are derived from.
    fork_cases :
        Forks to check, with the signature scheme of each.

    Raises
    ------
    MalformedRecordError
        If the test is not well formed.
    UnsupportedForkError
        If an expectation is given for a fork without known rules.
    ForkActivationMissingError
        If `chain_config` does not schedule a fork the test checks.
    ConformanceFailure
        If the outcome of a fork differs from its expectation.
    """
    txbytes = test.check_well_formed()

    for case in fork_cases:
        expected = test.expected(case.name)
        if expected is None:
            continue

        rules = resolve_rules(chain_config, case.name)
        outcome = check_transaction(txbytes, case.signature_scheme, rules)
        if isinstance(outcome, ValidationFailure):
            logger.verbose(f"{case.name}: rejected ({outcome.cause})")
        else:
            logger.verbose(
                f"{case.name}: sender 0x{outcome.sender.hex()}, "
                f"hash 0x{outcome.hash.hex()}, "
                f"intrinsic gas {outcome.intrinsic_gas}"
            )

        try:
            reconcile(case, expected, outcome)
        except ConformanceFailure as e:
            logger.fail(str(e))
            raise
