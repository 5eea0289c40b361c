"""
Transactions are atomic units of work created externally to Ethereum and
submitted to be executed. This module only reads them: it decodes the wire
format of every transaction type up to [EIP-7702], re-encodes them and
computes the hashes their signatures commit to.

[EIP-7702]: https://eips.ethereum.org/EIPS/eip-7702
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Type, Union

from ethereum_rlp import rlp
from ethereum_rlp.exceptions import RLPException
from ethereum_types.bytes import Bytes, Bytes0, Bytes20, Bytes32
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, U256, Uint

from .crypto.hash import Hash32, keccak256
from .exceptions import DecodeError

Address = Bytes20


@slotted_freezable
@dataclass
class LegacyTransaction:
    """
    Atomic operation performed on the block chain.
    """

    nonce: U64
    gas_price: U256
    gas: U64
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    v: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class Access:
    """
    An account and the storage slots a transaction pre-declares for it.
    """

    account: Address
    slots: Tuple[Bytes32, ...]


@slotted_freezable
@dataclass
class AccessListTransaction:
    """
    The transaction type added in EIP-2930 to support access lists.
    """

    chain_id: U256
    nonce: U64
    gas_price: U256
    gas: U64
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    y_parity: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class FeeMarketTransaction:
    """
    The transaction type added in EIP-1559.
    """

    chain_id: U256
    nonce: U64
    max_priority_fee_per_gas: U256
    max_fee_per_gas: U256
    gas: U64
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    y_parity: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class BlobTransaction:
    """
    The transaction type added in EIP-4844.
    """

    chain_id: U256
    nonce: U64
    max_priority_fee_per_gas: U256
    max_fee_per_gas: U256
    gas: U64
    to: Address
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    max_fee_per_blob_gas: U256
    blob_versioned_hashes: Tuple[Bytes32, ...]
    y_parity: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class Authorization:
    """
    A signed permission for `address`'s code to be delegated to by the
    signing account, carried by EIP-7702 transactions.
    """

    chain_id: U256
    address: Address
    nonce: U64
    y_parity: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class SetCodeTransaction:
    """
    The transaction type added in EIP-7702.
    """

    chain_id: U256
    nonce: U64
    max_priority_fee_per_gas: U256
    max_fee_per_gas: U256
    gas: U64
    to: Address
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    authorizations: Tuple[Authorization, ...]
    y_parity: U256
    r: U256
    s: U256


Transaction = Union[
    LegacyTransaction,
    AccessListTransaction,
    FeeMarketTransaction,
    BlobTransaction,
    SetCodeTransaction,
]

TypedTransaction = Union[
    AccessListTransaction,
    FeeMarketTransaction,
    BlobTransaction,
    SetCodeTransaction,
]

TRANSACTION_TYPES: Dict[int, Type[TypedTransaction]] = {
    1: AccessListTransaction,
    2: FeeMarketTransaction,
    3: BlobTransaction,
    4: SetCodeTransaction,
}
"""
[EIP-2718] type byte of every typed transaction.

[EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
"""


def transaction_type(tx: Transaction) -> int:
    """
    Type byte of `tx`, `0` for legacy transactions.
    """
    for type_byte, cls in TRANSACTION_TYPES.items():
        if isinstance(tx, cls):
            return type_byte
    return 0


def is_contract_creation(tx: Transaction) -> bool:
    """
    Whether `tx` deploys a contract instead of calling an account.
    """
    return tx.to == Bytes0(b"")


def encode_transaction(tx: Transaction) -> Bytes:
    """
    Encode a transaction into its canonical wire format: the RLP list for
    legacy transactions, the type byte followed by the RLP payload for typed
    ones.
    """
    if isinstance(tx, LegacyTransaction):
        return rlp.encode(tx)
    return bytes([transaction_type(tx)]) + rlp.encode(tx)


def decode_transaction(raw: Bytes) -> Transaction:
    """
    Decode a transaction from its wire format.

    Parameters
    ----------
    raw :
        Encoded transaction.

    Returns
    -------
    tx : `Transaction`
        The decoded transaction.

    Only the canonical form is accepted. Blob transactions in their network
    form, with the blobs, commitments and proofs wrapped around the
    transaction, are rejected: transaction tests carry the form that is
    included in blocks.

    Raises
    ------
    DecodeError
        If `raw` is not exactly the canonical encoding of a transaction.
    """
    if len(raw) == 0:
        raise DecodeError("empty transaction")

    cls: Type[Transaction]
    if raw[0] > 0x7F:
        cls, payload = LegacyTransaction, raw
    else:
        if len(raw) <= 1:
            raise DecodeError("typed transaction too short")
        try:
            cls = TRANSACTION_TYPES[raw[0]]
        except KeyError:
            raise DecodeError(
                f"transaction type {raw[0]} not supported"
            ) from None
        payload = raw[1:]

    try:
        tx = rlp.decode_to(cls, payload)
    except RLPException as e:
        raise DecodeError(f"cannot decode {cls.__name__}: {e}") from e

    # Catches trailing bytes and integers with leading zeros, which the
    # decoder accepts.
    if encode_transaction(tx) != raw:
        raise DecodeError("non-canonical transaction encoding")

    return tx


def transaction_hash(tx: Transaction) -> Hash32:
    """
    Compute the hash identifying a transaction.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `Hash32`
        Keccak-256 of the canonical encoding of `tx`.
    """
    return keccak256(encode_transaction(tx))


def signing_hash_pre155(tx: LegacyTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a legacy (pre EIP 155) signature.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `Hash32`
        Hash of the transaction.
    """
    return keccak256(
        rlp.encode(
            (
                tx.nonce,
                tx.gas_price,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
            )
        )
    )


def signing_hash_155(tx: LegacyTransaction, chain_id: U256) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 155 signature.

    Parameters
    ----------
    tx :
        Transaction of interest.
    chain_id :
        The id of the current chain.

    Returns
    -------
    hash : `Hash32`
        Hash of the transaction.
    """
    return keccak256(
        rlp.encode(
            (
                tx.nonce,
                tx.gas_price,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                chain_id,
                Uint(0),
                Uint(0),
            )
        )
    )


def signing_hash_2930(tx: AccessListTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 2930 signature.
    """
    return keccak256(
        b"\x01"
        + rlp.encode(
            (
                tx.chain_id,
                tx.nonce,
                tx.gas_price,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                tx.access_list,
            )
        )
    )


def signing_hash_1559(tx: FeeMarketTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 1559 signature.
    """
    return keccak256(
        b"\x02"
        + rlp.encode(
            (
                tx.chain_id,
                tx.nonce,
                tx.max_priority_fee_per_gas,
                tx.max_fee_per_gas,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                tx.access_list,
            )
        )
    )


def signing_hash_4844(tx: BlobTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP-4844 signature.
    """
    return keccak256(
        b"\x03"
        + rlp.encode(
            (
                tx.chain_id,
                tx.nonce,
                tx.max_priority_fee_per_gas,
                tx.max_fee_per_gas,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                tx.access_list,
                tx.max_fee_per_blob_gas,
                tx.blob_versioned_hashes,
            )
        )
    )


def signing_hash_7702(tx: SetCodeTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP-7702 signature.
    """
    return keccak256(
        b"\x04"
        + rlp.encode(
            (
                tx.chain_id,
                tx.nonce,
                tx.max_priority_fee_per_gas,
                tx.max_fee_per_gas,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                tx.access_list,
                tx.authorizations,
            )
        )
    )
