"""
Helpers that build and sign transactions for the tests.
"""

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import coincurve
from ethereum_types.bytes import Bytes0, Bytes20, Bytes32
from ethereum_types.numeric import U64, U256

from ..crypto.elliptic_curve import SECP256K1N
from ..crypto.hash import keccak256
from ..transactions import (
    Access,
    AccessListTransaction,
    Authorization,
    BlobTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
    SetCodeTransaction,
    Transaction,
    encode_transaction,
    signing_hash_155,
    signing_hash_1559,
    signing_hash_2930,
    signing_hash_4844,
    signing_hash_7702,
    signing_hash_pre155,
    transaction_hash,
)

PRIVATE_KEY = b"\x46" * 32
OTHER_PRIVATE_KEY = b"\x01" * 32
RECIPIENT = Bytes20(b"\x35" * 20)
CONTRACT_CREATION = Bytes0(b"")

# Example transaction of EIP-155, signed for chain id 1.
EIP155_EXAMPLE = bytes.fromhex(
    "f86c098504a817c800825208943535353535353535353535353535353535353535880de0"
    "b6b3a76400008025a028ef61340bd939bc2195fe537567866003e1a15d3c71ff63e15906"
    "20aa636276a067cbe9d8997f761aecb703304b3800ccf555c9f3dc64214b297fb1966a3b"
    "6d83"
)
EIP155_EXAMPLE_SENDER = bytes.fromhex(
    "9d8a62f656a8d1615c1294fd71e9cfb3e4855a4f"
)


def address_of(private_key: bytes) -> bytes:
    """Address of the account controlled by `private_key`."""
    public_key = coincurve.PrivateKey(private_key).public_key
    return bytes(keccak256(public_key.format(compressed=False)[1:])[12:])


def sign(msg_hash: bytes, private_key: bytes) -> Tuple[int, int, int]:
    """Sign `msg_hash` and return `(r, s, recovery_id)`."""
    signature = coincurve.PrivateKey(private_key).sign_recoverable(
        msg_hash, hasher=None
    )
    return (
        int.from_bytes(signature[0:32], "big"),
        int.from_bytes(signature[32:64], "big"),
        signature[64],
    )


def legacy_transaction(
    *,
    nonce: int = 0,
    gas_price: int = 10,
    gas: int = 21000,
    to: bytes = RECIPIENT,
    value: int = 0,
    data: bytes = b"",
    chain_id: Optional[int] = None,
    private_key: bytes = PRIVATE_KEY,
) -> LegacyTransaction:
    """
    Build a signed legacy transaction, replay protected when `chain_id` is
    given.
    """
    tx = LegacyTransaction(
        nonce=U64(nonce),
        gas_price=U256(gas_price),
        gas=U64(gas),
        to=to,
        value=U256(value),
        data=data,
        v=U256(0),
        r=U256(0),
        s=U256(0),
    )
    if chain_id is None:
        r, s, recovery_id = sign(signing_hash_pre155(tx), private_key)
        v = 27 + recovery_id
    else:
        r, s, recovery_id = sign(
            signing_hash_155(tx, U256(chain_id)), private_key
        )
        v = 35 + 2 * chain_id + recovery_id
    return replace(tx, v=U256(v), r=U256(r), s=U256(s))


def with_high_s(tx: LegacyTransaction) -> LegacyTransaction:
    """
    The same unprotected signature with `s` mirrored to the upper half of
    the curve order, which recovers the same sender.
    """
    v = 27 + (1 - (int(tx.v) - 27))
    return replace(tx, v=U256(v), s=U256(int(SECP256K1N) - int(tx.s)))


def _typed_fields(
    chain_id: int, nonce: int, gas: int, to: bytes, data: bytes
) -> Dict[str, Any]:
    return dict(
        chain_id=U256(chain_id),
        nonce=U64(nonce),
        gas=U64(gas),
        to=to,
        value=U256(0),
        data=data,
        y_parity=U256(0),
        r=U256(0),
        s=U256(0),
    )


def _sign_typed(tx: Any, msg_hash: bytes, private_key: bytes) -> Any:
    r, s, recovery_id = sign(msg_hash, private_key)
    return replace(tx, y_parity=U256(recovery_id), r=U256(r), s=U256(s))


def access_list_transaction(
    *,
    chain_id: int = 1,
    nonce: int = 0,
    gas: int = 30000,
    to: bytes = RECIPIENT,
    data: bytes = b"",
    access_list: Tuple[Access, ...] = (),
    private_key: bytes = PRIVATE_KEY,
) -> AccessListTransaction:
    """Build a signed EIP-2930 transaction."""
    tx = AccessListTransaction(
        gas_price=U256(10),
        access_list=access_list,
        **_typed_fields(chain_id, nonce, gas, to, data),
    )
    return _sign_typed(tx, signing_hash_2930(tx), private_key)


def fee_market_transaction(
    *,
    chain_id: int = 1,
    nonce: int = 0,
    gas: int = 30000,
    to: bytes = RECIPIENT,
    data: bytes = b"",
    access_list: Tuple[Access, ...] = (),
    private_key: bytes = PRIVATE_KEY,
) -> FeeMarketTransaction:
    """Build a signed EIP-1559 transaction."""
    tx = FeeMarketTransaction(
        max_priority_fee_per_gas=U256(1),
        max_fee_per_gas=U256(10),
        access_list=access_list,
        **_typed_fields(chain_id, nonce, gas, to, data),
    )
    return _sign_typed(tx, signing_hash_1559(tx), private_key)


def blob_transaction(
    *,
    chain_id: int = 1,
    gas: int = 30000,
    private_key: bytes = PRIVATE_KEY,
) -> BlobTransaction:
    """Build a signed EIP-4844 transaction carrying one blob."""
    tx = BlobTransaction(
        max_priority_fee_per_gas=U256(1),
        max_fee_per_gas=U256(10),
        access_list=(),
        max_fee_per_blob_gas=U256(1),
        blob_versioned_hashes=(Bytes32(b"\x01" + b"\x00" * 31),),
        **_typed_fields(chain_id, 0, gas, RECIPIENT, b""),
    )
    return _sign_typed(tx, signing_hash_4844(tx), private_key)


def set_code_transaction(
    *,
    chain_id: int = 1,
    gas: int = 50000,
    authorization_count: int = 1,
    private_key: bytes = PRIVATE_KEY,
) -> SetCodeTransaction:
    """Build a signed EIP-7702 transaction."""
    authorizations = tuple(
        Authorization(
            chain_id=U256(chain_id),
            address=Bytes20(b"\x42" * 20),
            nonce=U64(i),
            y_parity=U256(0),
            r=U256(1),
            s=U256(1),
        )
        for i in range(authorization_count)
    )
    tx = SetCodeTransaction(
        max_priority_fee_per_gas=U256(1),
        max_fee_per_gas=U256(10),
        access_list=(),
        authorizations=authorizations,
        **_typed_fields(chain_id, 0, gas, RECIPIENT, b""),
    )
    return _sign_typed(tx, signing_hash_7702(tx), private_key)


def expected_success(
    tx: Transaction, intrinsic_gas: int, private_key: bytes = PRIVATE_KEY
) -> Dict[str, str]:
    """JSON expectation of a transaction that must be accepted."""
    return {
        "sender": "0x" + address_of(private_key).hex(),
        "hash": "0x" + transaction_hash(tx).hex(),
        "intrinsicGas": hex(intrinsic_gas),
    }


def txbytes(tx: Transaction) -> str:
    """Hex encoding of `tx` as found in fixtures."""
    return "0x" + encode_transaction(tx).hex()
