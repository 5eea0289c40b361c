"""
Checks a single encoded transaction under the rules of one fork.

Each step is a gate: the transaction is decoded, its sender recovered, its
intrinsic gas computed and compared with the gas it declares. The first step
that fails rejects the transaction.
"""

from dataclasses import dataclass
from typing import Union

from ethereum_types.bytes import Bytes

from .chain_config import Rules
from .crypto.hash import Hash32
from .exceptions import InsufficientGasError, InvalidTransaction
from .gas import calculate_intrinsic_gas
from .logging import get_logger
from .signers import SignatureScheme, recover_sender
from .transactions import Address, decode_transaction, transaction_hash

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidatedTransaction:
    """
    Outcome of a transaction that passed every check.
    """

    sender: Address
    hash: Hash32
    intrinsic_gas: int


@dataclass(frozen=True)
class ValidationFailure:
    """
    Outcome of a rejected transaction, with the reason it was rejected.
    """

    cause: InvalidTransaction


ValidationResult = Union[ValidatedTransaction, ValidationFailure]


def validate_transaction(
    raw: Bytes, scheme: SignatureScheme, rules: Rules
) -> ValidatedTransaction:
    """
    Verifies an encoded transaction.

    The gas in a transaction gets used to pay for the intrinsic cost of
    operations, therefore if there is insufficient gas then it would not
    be possible to execute a transaction and it will be declared invalid.

    Parameters
    ----------
    raw :
        Encoded transaction.
    scheme :
        Signature scheme used to recover the sender.
    rules :
        Rules the intrinsic gas is computed under.

    Returns
    -------
    validated : `ValidatedTransaction`
        Sender, hash and intrinsic gas of the transaction.

    Raises
    ------
    InvalidTransaction
        A subclass naming the first check the transaction failed.
    """
    tx = decode_transaction(raw)
    sender = recover_sender(scheme, rules.chain_id, tx)
    intrinsic_gas = calculate_intrinsic_gas(tx, rules)
    if intrinsic_gas > int(tx.gas):
        raise InsufficientGasError(intrinsic_gas, int(tx.gas))
    return ValidatedTransaction(
        sender=sender,
        hash=transaction_hash(tx),
        intrinsic_gas=intrinsic_gas,
    )


def check_transaction(
    raw: Bytes, scheme: SignatureScheme, rules: Rules
) -> ValidationResult:
    """
    Run [`validate_transaction`] and return a rejection as a value.

    [`validate_transaction`]: ref:ethereum_tx_conformance.validator.validate_transaction
    """  # noqa: E501
    try:
        return validate_transaction(raw, scheme, rules)
    except InvalidTransaction as e:
        logger.debug(f"Transaction rejected by {scheme} signer: {e!r}")
        return ValidationFailure(cause=e)
