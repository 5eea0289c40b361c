"""
Error types raised while checking transaction tests.

Errors fall into three groups. [`MalformedRecordError`],
[`UnsupportedForkError`] and [`ForkActivationMissingError`] are defects in
the test data or chain configuration. Subclasses of [`InvalidTransaction`]
are the reasons a transaction may be rejected, which is an outcome the test
itself may expect. Subclasses of [`ConformanceFailure`] report that the
outcome of a fork did not match its expectation.

[`MalformedRecordError`]: ref:ethereum_tx_conformance.exceptions.MalformedRecordError
[`UnsupportedForkError`]: ref:ethereum_tx_conformance.exceptions.UnsupportedForkError
[`ForkActivationMissingError`]: ref:ethereum_tx_conformance.exceptions.ForkActivationMissingError
[`InvalidTransaction`]: ref:ethereum_tx_conformance.exceptions.InvalidTransaction
[`ConformanceFailure`]: ref:ethereum_tx_conformance.exceptions.ConformanceFailure
"""  # noqa: E501

from typing import Final


class ConformanceException(Exception):
    """
    Base class for all exceptions raised by this package.
    """


class MalformedRecordError(ConformanceException):
    """
    Thrown when a transaction test violates the structural rules of the
    format, for example an expectation with neither `hash` nor `exception`.
    """


class UnsupportedForkError(ConformanceException):
    """
    Thrown when asked to derive rules for a fork name that is not known.
    """

    name: Final[str]
    """
    The unknown fork name.
    """

    def __init__(self, name: str):
        super().__init__(f"unsupported fork {name!r}")
        self.name = name


class ForkActivationMissingError(ConformanceException):
    """
    Thrown when the chain configuration does not schedule a fork that a test
    expects to be checked.
    """

    fork: Final[str]
    field: Final[str]

    def __init__(self, fork: str, field: str):
        super().__init__(
            f"chain configuration has no `{field}` to activate {fork}"
        )
        self.fork = fork
        self.field = field


class InvalidTransaction(ConformanceException):
    """
    Thrown when a transaction is found to be invalid.
    """


class DecodeError(InvalidTransaction):
    """
    Thrown when the transaction bytes cannot be decoded.
    """


class InvalidSignatureError(InvalidTransaction):
    """
    Thrown when the sender of a transaction cannot be recovered from its
    signature.
    """


class GasComputationError(InvalidTransaction):
    """
    Thrown when the intrinsic gas of a transaction cannot be computed.
    """


class InsufficientGasError(InvalidTransaction):
    """
    Thrown when a transaction declares less gas than its intrinsic cost.
    """

    required: Final[int]
    declared: Final[int]

    def __init__(self, required: int, declared: int):
        super().__init__(f"insufficient gas ( {declared} < {required} )")
        self.required = required
        self.declared = declared


class ConformanceFailure(ConformanceException):
    """
    Base class for a fork outcome that does not match its expectation.
    """

    fork: Final[str]

    def __init__(self, fork: str, message: str):
        super().__init__(f"{fork}: {message}")
        self.fork = fork


class UnexpectedValidationError(ConformanceFailure):
    """
    Thrown when a transaction was expected to be valid but was rejected.
    """

    cause: Final[InvalidTransaction]

    def __init__(self, fork: str, cause: InvalidTransaction):
        super().__init__(fork, f"unexpected error: {cause}")
        self.cause = cause


class MissingExpectedError(ConformanceFailure):
    """
    Thrown when a transaction was expected to be rejected but was accepted.
    """

    expected: Final[str]

    def __init__(self, fork: str, expected: str):
        super().__init__(fork, f"expected error {expected}, got none")
        self.expected = expected


class ReconciliationMismatch(ConformanceFailure):
    """
    Thrown when a valid transaction produced a different sender, hash or
    intrinsic gas than expected.
    """

    field: Final[str]
    got: Final[object]
    want: Final[object]

    def __init__(self, fork: str, field: str, got: object, want: object):
        super().__init__(fork, f"{field} mismatch: got {got}, want {want}")
        self.field = field
        self.got = got
        self.want = want
