"""
Ethereum Transaction Conformance
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
Transaction tests pair one encoded transaction with an expected outcome for
each protocol upgrade ("fork"): either the sender, hash and intrinsic gas the
transaction must produce, or the fact that it must be rejected.

This package decodes the transaction, recovers its sender with the signature
scheme of each fork, checks the intrinsic gas floor under the rules the fork
activates, and compares the outcome with the expectation.
"""

from .chain_config import MAINNET_CONFIG, ChainConfig, Rules
from .exceptions import (
    ConformanceException,
    ConformanceFailure,
    DecodeError,
    ForkActivationMissingError,
    GasComputationError,
    InsufficientGasError,
    InvalidSignatureError,
    InvalidTransaction,
    MalformedRecordError,
    MissingExpectedError,
    ReconciliationMismatch,
    UnexpectedValidationError,
    UnsupportedForkError,
)
from .fixtures import ExpectedOutcome, TransactionTest, load_transaction_tests
from .forks import FORK_CASES, ForkCase, fork_case
from .rules import resolve_rules
from .runner import run
from .signers import SignatureScheme
from .validator import (
    ValidatedTransaction,
    ValidationFailure,
    check_transaction,
    validate_transaction,
)

__version__ = "0.1.0"

__all__ = (
    "ChainConfig",
    "ConformanceException",
    "ConformanceFailure",
    "DecodeError",
    "ExpectedOutcome",
    "FORK_CASES",
    "ForkActivationMissingError",
    "ForkCase",
    "GasComputationError",
    "InsufficientGasError",
    "InvalidSignatureError",
    "InvalidTransaction",
    "MAINNET_CONFIG",
    "MalformedRecordError",
    "MissingExpectedError",
    "ReconciliationMismatch",
    "Rules",
    "SignatureScheme",
    "TransactionTest",
    "UnexpectedValidationError",
    "UnsupportedForkError",
    "ValidatedTransaction",
    "ValidationFailure",
    "check_transaction",
    "fork_case",
    "load_transaction_tests",
    "resolve_rules",
    "run",
    "validate_transaction",
)
