"""
Intrinsic gas: the gas a transaction is charged before execution starts, and
therefore the least gas it may declare.
"""

from typing import Final

from .chain_config import Rules
from .exceptions import GasComputationError
from .transactions import (
    LegacyTransaction,
    SetCodeTransaction,
    Transaction,
    is_contract_creation,
)

TX_BASE_COST: Final = 21000
TX_CREATE_COST: Final = 53000
TX_DATA_COST_PER_ZERO: Final = 4
TX_DATA_COST_PER_NON_ZERO_FRONTIER: Final = 68
TX_DATA_COST_PER_NON_ZERO_EIP2028: Final = 16
TX_INIT_CODE_WORD_COST: Final = 2
TX_ACCESS_LIST_ADDRESS_COST: Final = 2400
TX_ACCESS_LIST_STORAGE_KEY_COST: Final = 1900
TX_AUTHORIZATION_COST: Final = 25000

MAX_GAS: Final = 2**64 - 1


def _charge(total: int, count: int, cost: int, item: str) -> int:
    if count and (MAX_GAS - total) // cost < count:
        raise GasComputationError(f"gas uint64 overflow charging {item}")
    return total + count * cost


def calculate_intrinsic_gas(tx: Transaction, rules: Rules) -> int:
    """
    Calculates the gas that is charged before execution is started.

    The intrinsic cost covers the transaction itself, its data, the words of
    init code when it creates a contract (from Shanghai, [EIP-3860]), the
    entries of its access list and its delegation authorizations.

    Parameters
    ----------
    tx :
        Transaction to compute the intrinsic cost of.
    rules :
        Rules of the fork the transaction is checked under.

    Returns
    -------
    intrinsic_gas : `int`
        The intrinsic cost of the transaction.

    Raises
    ------
    GasComputationError
        If the cost does not fit in 64 bits.

    [EIP-3860]: https://eips.ethereum.org/EIPS/eip-3860
    """
    creation = is_contract_creation(tx)
    if creation and rules.is_homestead:
        gas = TX_CREATE_COST
    else:
        gas = TX_BASE_COST

    data = bytes(tx.data)
    non_zero = len(data) - data.count(0)
    if rules.is_istanbul:
        non_zero_cost = TX_DATA_COST_PER_NON_ZERO_EIP2028
    else:
        non_zero_cost = TX_DATA_COST_PER_NON_ZERO_FRONTIER
    gas = _charge(gas, non_zero, non_zero_cost, "non-zero data")
    gas = _charge(
        gas, len(data) - non_zero, TX_DATA_COST_PER_ZERO, "zero data"
    )

    if creation and rules.is_shanghai:
        words = (len(data) + 31) // 32
        gas = _charge(gas, words, TX_INIT_CODE_WORD_COST, "init code")

    if not isinstance(tx, LegacyTransaction):
        try:
            slots = sum(len(access.slots) for access in tx.access_list)
        except (AttributeError, TypeError) as e:
            raise GasComputationError("malformed access list") from e
        gas = _charge(
            gas,
            len(tx.access_list),
            TX_ACCESS_LIST_ADDRESS_COST,
            "access list addresses",
        )
        gas = _charge(
            gas, slots, TX_ACCESS_LIST_STORAGE_KEY_COST, "storage keys"
        )

    if isinstance(tx, SetCodeTransaction):
        gas = _charge(
            gas,
            len(tx.authorizations),
            TX_AUTHORIZATION_COST,
            "authorizations",
        )

    return gas
