"""
Signature schemes.

How the sender of a transaction is recovered has changed several times: the
original scheme signs the bare transaction, Homestead additionally rejects
high `s` values, [EIP-155] binds legacy signatures to a chain identifier, and
every later scheme accepts one more typed transaction. Each scheme is a member
of [`SignatureScheme`] and [`recover_sender`] is the only place that reads
them.

[EIP-155]: https://eips.ethereum.org/EIPS/eip-155
[`SignatureScheme`]: ref:ethereum_tx_conformance.signers.SignatureScheme
[`recover_sender`]: ref:ethereum_tx_conformance.signers.recover_sender
"""

from enum import Enum
from typing import Callable, Dict, FrozenSet

from ethereum_types.numeric import U256

from .crypto.elliptic_curve import SECP256K1N, secp256k1_recover
from .crypto.hash import Hash32, keccak256
from .exceptions import InvalidSignatureError
from .transactions import (
    Address,
    LegacyTransaction,
    Transaction,
    TypedTransaction,
    signing_hash_155,
    signing_hash_1559,
    signing_hash_2930,
    signing_hash_4844,
    signing_hash_7702,
    signing_hash_pre155,
    transaction_type,
)

SECP256K1N_INT = int(SECP256K1N)
SECP256K1N_HALF = SECP256K1N_INT // 2

SIGNING_HASHES: Dict[int, Callable[..., Hash32]] = {
    1: signing_hash_2930,
    2: signing_hash_1559,
    3: signing_hash_4844,
    4: signing_hash_7702,
}


class SignatureScheme(Enum):
    """
    Rules for recovering the sender of a transaction.

    Each member records the typed transactions it accepts, whether legacy
    transactions may carry [EIP-155] replay protection and whether `s` must
    be in the lower half of the curve order.

    [EIP-155]: https://eips.ethereum.org/EIPS/eip-155
    """

    FRONTIER = ("frontier", frozenset(), False, False)
    HOMESTEAD = ("homestead", frozenset(), False, True)
    EIP155 = ("eip155", frozenset(), True, True)
    EIP2930 = ("eip2930", frozenset({1}), True, True)
    LONDON = ("london", frozenset({1, 2}), True, True)
    CANCUN = ("cancun", frozenset({1, 2, 3}), True, True)
    PRAGUE = ("prague", frozenset({1, 2, 3, 4}), True, True)

    label: str
    typed_transactions: FrozenSet[int]
    replay_protection: bool
    low_s: bool

    def __init__(
        self,
        label: str,
        typed_transactions: FrozenSet[int],
        replay_protection: bool,
        low_s: bool,
    ):
        self.label = label
        self.typed_transactions = typed_transactions
        self.replay_protection = replay_protection
        self.low_s = low_s

    def __str__(self) -> str:
        return self.label


def validate_signature_values(r: int, s: int, low_s: bool) -> None:
    """
    Check that `r` and `s` are in range for a secp256k1 signature.
    """
    if not 0 < r < SECP256K1N_INT:
        raise InvalidSignatureError("invalid transaction r value")
    if not 0 < s < SECP256K1N_INT:
        raise InvalidSignatureError("invalid transaction s value")
    if low_s and s > SECP256K1N_HALF:
        raise InvalidSignatureError("invalid transaction s value (high s)")


def recover_sender(
    scheme: SignatureScheme, chain_id: int, tx: Transaction
) -> Address:
    """
    Extracts the sender address from a transaction.

    Parameters
    ----------
    scheme :
        Signature scheme of the fork the transaction is checked under.
    chain_id :
        ID of the chain the transaction must be bound to.
    tx :
        Transaction of interest.

    Returns
    -------
    sender : `Address`
        The address of the account that signed the transaction.

    Raises
    ------
    InvalidSignatureError
        If `scheme` does not accept the transaction or its signature.
    """
    if isinstance(tx, LegacyTransaction):
        recovery_id, msg_hash = _legacy_recovery(scheme, chain_id, tx)
    else:
        recovery_id, msg_hash = _typed_recovery(scheme, chain_id, tx)

    r, s = int(tx.r), int(tx.s)
    validate_signature_values(r, s, scheme.low_s)
    public_key = secp256k1_recover(
        U256(r), U256(s), U256(recovery_id), msg_hash
    )
    return Address(keccak256(public_key)[12:32])


def _legacy_recovery(
    scheme: SignatureScheme, chain_id: int, tx: LegacyTransaction
) -> tuple[int, Hash32]:
    v = int(tx.v)
    if scheme.replay_protection and v not in (0, 1, 27, 28):
        if (v - 35) // 2 != chain_id:
            raise InvalidSignatureError(
                f"invalid chain id for signer: have {(v - 35) // 2} "
                f"want {chain_id}"
            )
        recovery_id = v - 35 - 2 * chain_id
        msg_hash = signing_hash_155(tx, U256(chain_id))
    else:
        recovery_id = v - 27
        msg_hash = signing_hash_pre155(tx)

    if recovery_id not in (0, 1):
        raise InvalidSignatureError(f"invalid transaction v value {v}")
    return recovery_id, msg_hash


def _typed_recovery(
    scheme: SignatureScheme, chain_id: int, tx: TypedTransaction
) -> tuple[int, Hash32]:
    tx_type = transaction_type(tx)
    if tx_type not in scheme.typed_transactions:
        raise InvalidSignatureError(
            f"transaction type {tx_type} not supported by {scheme} signer"
        )
    if int(tx.chain_id) != chain_id:
        raise InvalidSignatureError(
            f"invalid chain id for signer: have {int(tx.chain_id)} "
            f"want {chain_id}"
        )
    y_parity = int(tx.y_parity)
    if y_parity not in (0, 1):
        raise InvalidSignatureError(f"invalid y parity {y_parity}")
    return y_parity, SIGNING_HASHES[tx_type](tx)
