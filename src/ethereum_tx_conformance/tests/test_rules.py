"""Test resolution of fork names to rules."""

import pytest

from ..chain_config import MAINNET_CONFIG, ChainConfig
from ..exceptions import ForkActivationMissingError, UnsupportedForkError
from ..forks import fork_names
from ..rules import (
    FORK_ACTIVATIONS,
    AtBlock,
    AtMerge,
    AtTimestamp,
    resolve_rules,
)

FLAGS = (
    "is_homestead",
    "is_eip150",
    "is_eip155",
    "is_eip158",
    "is_byzantium",
    "is_constantinople",
    "is_petersburg",
    "is_istanbul",
    "is_berlin",
    "is_london",
    "is_merge",
    "is_shanghai",
    "is_cancun",
    "is_prague",
)

# The last flag each fork turns on, with every earlier flag also set.
LAST_FLAG = {
    "Frontier": None,
    "Homestead": "is_homestead",
    "EIP150": "is_eip150",
    "EIP158": "is_eip158",
    "Byzantium": "is_byzantium",
    "Constantinople": "is_petersburg",
    "Istanbul": "is_istanbul",
    "Berlin": "is_berlin",
    "London": "is_london",
    "Paris": "is_merge",
    "Shanghai": "is_shanghai",
    "Cancun": "is_cancun",
    "Prague": "is_prague",
}


def test_every_fork_has_an_activation() -> None:
    assert tuple(FORK_ACTIVATIONS) == fork_names()


@pytest.mark.parametrize("fork_name", list(LAST_FLAG))
def test_mainnet_rules(fork_name: str) -> None:
    rules = resolve_rules(MAINNET_CONFIG, fork_name)

    last_flag = LAST_FLAG[fork_name]
    enabled = FLAGS.index(last_flag) + 1 if last_flag else 0
    assert rules.chain_id == 1
    for flag in FLAGS[:enabled]:
        assert getattr(rules, flag), flag
    for flag in FLAGS[enabled:]:
        assert not getattr(rules, flag), flag


def test_rules_are_fresh_per_call() -> None:
    first = resolve_rules(MAINNET_CONFIG, "Berlin")
    second = resolve_rules(MAINNET_CONFIG, "Berlin")
    assert first == second
    assert first is not second


def test_activation_kinds() -> None:
    assert FORK_ACTIVATIONS["Frontier"] == AtBlock(None)
    assert FORK_ACTIVATIONS["London"] == AtBlock("london_block")
    assert FORK_ACTIVATIONS["Paris"] == AtMerge()
    assert FORK_ACTIVATIONS["Prague"] == AtTimestamp("prague_time")


def test_unknown_fork() -> None:
    with pytest.raises(UnsupportedForkError) as exc_info:
        resolve_rules(MAINNET_CONFIG, "Foo")
    assert exc_info.value.name == "Foo"


def test_fork_names_are_case_sensitive() -> None:
    with pytest.raises(UnsupportedForkError):
        resolve_rules(MAINNET_CONFIG, "prague")


def test_frontier_needs_no_activation() -> None:
    rules = resolve_rules(ChainConfig(chain_id=9), "Frontier")
    assert rules.chain_id == 9
    assert not rules.is_homestead


@pytest.mark.parametrize(
    "config, fork_name, field",
    [
        pytest.param(
            ChainConfig(), "Homestead", "homestead_block", id="block"
        ),
        pytest.param(ChainConfig(), "Paris", "london_block", id="merge"),
        pytest.param(
            ChainConfig(london_block=0),
            "Shanghai",
            "shanghai_time",
            id="time",
        ),
        pytest.param(
            ChainConfig(shanghai_time=0),
            "Shanghai",
            "london_block",
            id="time_without_merge_block",
        ),
        pytest.param(
            ChainConfig(london_block=0, shanghai_time=0, cancun_time=0),
            "Prague",
            "prague_time",
            id="prague",
        ),
    ],
)
def test_missing_activation(
    config: ChainConfig, fork_name: str, field: str
) -> None:
    with pytest.raises(ForkActivationMissingError) as exc_info:
        resolve_rules(config, fork_name)
    assert exc_info.value.fork == fork_name
    assert exc_info.value.field == field


def test_custom_chain() -> None:
    config = ChainConfig(
        chain_id=1337,
        homestead_block=0,
        eip150_block=0,
        eip155_block=0,
        eip158_block=0,
        byzantium_block=0,
        constantinople_block=0,
        istanbul_block=0,
        berlin_block=0,
        london_block=0,
        shanghai_time=0,
        cancun_time=0,
        prague_time=0,
    )

    rules = resolve_rules(config, "Cancun")

    assert rules.chain_id == 1337
    assert rules.is_cancun
    # Upgrades scheduled by block are active from genesis, the ones
    # scheduled by time only once the merge has happened.
    homestead = resolve_rules(config, "Homestead")
    assert homestead.is_london
    assert not homestead.is_prague
