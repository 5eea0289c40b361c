"""
Resolution of a fork name to the rules a transaction is checked under.

Every fork activates in one of three ways:

- [`AtBlock`]: forks up to and including London are evaluated at the block
  their chain configuration field names, before the merge.
- [`AtMerge`]: Paris is evaluated at the London block with the merge flag set.
- [`AtTimestamp`]: later forks are evaluated after the merge at the
  timestamp their chain configuration field names.

[`AtBlock`]: ref:ethereum_tx_conformance.rules.AtBlock
[`AtMerge`]: ref:ethereum_tx_conformance.rules.AtMerge
[`AtTimestamp`]: ref:ethereum_tx_conformance.rules.AtTimestamp
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .chain_config import ChainConfig, Rules
from .exceptions import ForkActivationMissingError, UnsupportedForkError

MERGE_BLOCK_FIELD = "london_block"


@dataclass(frozen=True)
class AtBlock:
    """
    Activated by block number. `None` means the genesis block.
    """

    field: Optional[str]


@dataclass(frozen=True)
class AtMerge:
    """
    Activated by the transition to proof-of-stake.
    """


@dataclass(frozen=True)
class AtTimestamp:
    """
    Activated by block timestamp, after the merge.
    """

    field: str


Activation = Union[AtBlock, AtMerge, AtTimestamp]

FORK_ACTIVATIONS: Mapping[str, Activation] = MappingProxyType(
    {
        "Frontier": AtBlock(None),
        "Homestead": AtBlock("homestead_block"),
        "EIP150": AtBlock("eip150_block"),
        "EIP158": AtBlock("eip158_block"),
        "Byzantium": AtBlock("byzantium_block"),
        "Constantinople": AtBlock("constantinople_block"),
        "Istanbul": AtBlock("istanbul_block"),
        "Berlin": AtBlock("berlin_block"),
        "London": AtBlock("london_block"),
        "Paris": AtMerge(),
        "Shanghai": AtTimestamp("shanghai_time"),
        "Cancun": AtTimestamp("cancun_time"),
        "Prague": AtTimestamp("prague_time"),
    }
)


def _activation_point(
    chain_config: ChainConfig, fork_name: str, field: str
) -> int:
    value = getattr(chain_config, field)
    if value is None:
        raise ForkActivationMissingError(fork_name, field)
    return value


def resolve_rules(chain_config: ChainConfig, fork_name: str) -> Rules:
    """
    Derive the rules of `fork_name` from `chain_config`.

    Parameters
    ----------
    chain_config :
        Chain whose activation points are used.
    fork_name :
        Name of the fork, as used by transaction tests.

    Returns
    -------
    rules : `Rules`
        The rules in force once the fork has activated.

    Raises
    ------
    UnsupportedForkError
        If `fork_name` is not a known fork.
    ForkActivationMissingError
        If `chain_config` does not schedule the fork.
    """
    try:
        activation = FORK_ACTIVATIONS[fork_name]
    except KeyError:
        raise UnsupportedForkError(fork_name) from None

    match activation:
        case AtBlock(field=None):
            return chain_config.rules(0, False, 0)
        case AtBlock(field=str(field)):
            block = _activation_point(chain_config, fork_name, field)
            return chain_config.rules(block, False, 0)
        case AtMerge():
            block = _activation_point(
                chain_config, fork_name, MERGE_BLOCK_FIELD
            )
            return chain_config.rules(block, True, 0)
        case AtTimestamp(field=field):
            block = _activation_point(
                chain_config, fork_name, MERGE_BLOCK_FIELD
            )
            timestamp = _activation_point(chain_config, fork_name, field)
            return chain_config.rules(block, True, timestamp)

    raise UnsupportedForkError(fork_name)
