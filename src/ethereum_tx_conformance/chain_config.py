"""
Chain configuration: where each protocol upgrade activates on a chain, and
the rules that are active at a given block.

The field names mirror the `config` section of a geth genesis file, so a
configuration can be loaded straight from one (see
[`ChainConfig.from_file`]).

[`ChainConfig.from_file`]: ref:ethereum_tx_conformance.chain_config.ChainConfig.from_file
"""  # noqa: E501

from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Dict, Tuple

import yaml
from pydantic import ValidationError

from .base_types import CamelModel
from .exceptions import ConformanceException
from .fork_criteria import (
    ByBlockNumber,
    ByTimestamp,
    ForkCriteria,
    Unscheduled,
)
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Rules:
    """
    Activation flags of the protocol rules in force at one point of a chain.

    A fresh instance is derived for every fork that is checked.
    """

    chain_id: int
    is_homestead: bool = False
    is_eip150: bool = False
    is_eip155: bool = False
    is_eip158: bool = False
    is_byzantium: bool = False
    is_constantinople: bool = False
    is_petersburg: bool = False
    is_istanbul: bool = False
    is_berlin: bool = False
    is_london: bool = False
    is_merge: bool = False
    is_shanghai: bool = False
    is_cancun: bool = False
    is_prague: bool = False


class ChainConfig(CamelModel):
    """
    Activation points of the protocol upgrades of one chain.

    Block-scheduled upgrades are given as block numbers and post-merge
    upgrades as timestamps. A `None` value leaves the upgrade unscheduled.
    """

    BLOCK_FIELDS: ClassVar[Tuple[str, ...]] = (
        "homestead_block",
        "eip150_block",
        "eip155_block",
        "eip158_block",
        "byzantium_block",
        "constantinople_block",
        "petersburg_block",
        "istanbul_block",
        "berlin_block",
        "london_block",
    )
    TIME_FIELDS: ClassVar[Tuple[str, ...]] = (
        "shanghai_time",
        "cancun_time",
        "prague_time",
    )

    chain_id: int = 1
    homestead_block: int | None = None
    eip150_block: int | None = None
    eip155_block: int | None = None
    eip158_block: int | None = None
    byzantium_block: int | None = None
    constantinople_block: int | None = None
    petersburg_block: int | None = None
    istanbul_block: int | None = None
    berlin_block: int | None = None
    london_block: int | None = None
    shanghai_time: int | None = None
    cancun_time: int | None = None
    prague_time: int | None = None

    @classmethod
    def from_file(cls, path: Path | str) -> "ChainConfig":
        """
        Load a configuration from a YAML or JSON file.

        Full genesis files are accepted: their `config` section is used.
        """
        path = Path(path)
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ConformanceException(
                f"chain configuration {path} is not a mapping"
            )
        if isinstance(data.get("config"), dict):
            data = data["config"]
        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConformanceException(
                f"invalid chain configuration {path}: {e}"
            ) from e
        logger.debug(f"Loaded chain configuration from {path}: {config!r}")
        return config

    def activation(self, field: str) -> ForkCriteria:
        """
        Return the activation criteria stored in the given field.
        """
        value = getattr(self, field)
        if value is None:
            return Unscheduled()
        if field in self.TIME_FIELDS:
            return ByTimestamp(value)
        if field in self.BLOCK_FIELDS:
            return ByBlockNumber(value)
        raise KeyError(field)

    def activations(self) -> Dict[str, ForkCriteria]:
        """
        Return the activation criteria of every upgrade, in activation order.
        """
        return {
            field: self.activation(field)
            for field in self.BLOCK_FIELDS + self.TIME_FIELDS
        }

    def rules(
        self, block_number: int, is_merge: bool, timestamp: int
    ) -> Rules:
        """
        Derive the rules in force at `block_number` and `timestamp`.

        Post-merge upgrades only activate when `is_merge` is set, regardless
        of the timestamp.
        """

        def active(field: str) -> bool:
            return self.activation(field).check(block_number, timestamp)

        is_constantinople = active("constantinople_block")
        is_london = active("london_block")
        return Rules(
            chain_id=self.chain_id,
            is_homestead=active("homestead_block"),
            is_eip150=active("eip150_block"),
            is_eip155=active("eip155_block"),
            is_eip158=active("eip158_block"),
            is_byzantium=active("byzantium_block"),
            is_constantinople=is_constantinople,
            is_petersburg=(
                active("petersburg_block")
                or (self.petersburg_block is None and is_constantinople)
            ),
            is_istanbul=active("istanbul_block"),
            is_berlin=active("berlin_block"),
            is_london=is_london,
            is_merge=is_merge,
            is_shanghai=is_merge and is_london and active("shanghai_time"),
            is_cancun=is_merge and is_london and active("cancun_time"),
            is_prague=is_merge and is_london and active("prague_time"),
        )

    def __repr__(self) -> str:
        scheduled: Dict[str, Any] = {
            field: criteria
            for field, criteria in self.activations().items()
            if criteria.is_scheduled
        }
        return f"ChainConfig(chain_id={self.chain_id}, {scheduled})"


MAINNET_CONFIG = ChainConfig(
    chain_id=1,
    homestead_block=1_150_000,
    eip150_block=2_463_000,
    eip155_block=2_675_000,
    eip158_block=2_675_000,
    byzantium_block=4_370_000,
    constantinople_block=7_280_000,
    petersburg_block=7_280_000,
    istanbul_block=9_069_000,
    berlin_block=12_244_000,
    london_block=12_965_000,
    shanghai_time=1_681_338_455,
    cancun_time=1_710_338_135,
    prague_time=1_746_612_311,
)
"""
Ethereum mainnet.
"""
