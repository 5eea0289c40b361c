"""
Activation criteria for forks.

Every protocol upgrade is scheduled in the chain configuration either by a
block number (all upgrades up to and including London) or by a block
timestamp (all upgrades after the merge). The criteria are represented by
subclasses of [`ForkCriteria`], like [`ByBlockNumber`] and [`ByTimestamp`].
The special type of [`Unscheduled`] is used for upgrades the configuration
does not schedule.

[`ForkCriteria`]: ref:ethereum_tx_conformance.fork_criteria.ForkCriteria
[`ByBlockNumber`]: ref:ethereum_tx_conformance.fork_criteria.ByBlockNumber
[`ByTimestamp`]: ref:ethereum_tx_conformance.fork_criteria.ByTimestamp
[`Unscheduled`]: ref:ethereum_tx_conformance.fork_criteria.Unscheduled
"""

import functools
from abc import ABC, abstractmethod
from typing import Final, Literal, SupportsInt, Tuple


@functools.total_ordering
class ForkCriteria(ABC):
    """
    Abstract base class for conditions specifying when a fork activates.

    Criteria are ordered so that every [`BLOCK_NUMBER`] criteria comes before
    every [`TIMESTAMP`] criteria, and scheduled criteria come before
    [`UNSCHEDULED`] ones.

    [`BLOCK_NUMBER`]: ref:ethereum_tx_conformance.fork_criteria.ForkCriteria.BLOCK_NUMBER
    [`TIMESTAMP`]: ref:ethereum_tx_conformance.fork_criteria.ForkCriteria.TIMESTAMP
    [`UNSCHEDULED`]: ref:ethereum_tx_conformance.fork_criteria.ForkCriteria.UNSCHEDULED
    """  # noqa: E501

    BLOCK_NUMBER: Final[int] = 0
    TIMESTAMP: Final[int] = 1
    UNSCHEDULED: Final[int] = 2

    _internal: Tuple[int, int]

    def __eq__(self, other: object) -> bool:
        """
        Equality for fork criteria.
        """
        if isinstance(other, ForkCriteria):
            return self._internal == other._internal
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        """
        Less-than comparison function, with earlier forks being less than later
        forks.
        """
        if isinstance(other, ForkCriteria):
            return self._internal < other._internal
        return NotImplemented

    def __hash__(self) -> int:
        """
        Compute a hash for this instance, so it can be stored in dictionaries.
        """
        return hash(self._internal)

    @property
    def is_scheduled(self) -> bool:
        """
        Whether the fork has an activation point at all.
        """
        return self._internal[0] != ForkCriteria.UNSCHEDULED

    @abstractmethod
    def check(self, block_number: int, timestamp: int) -> bool:
        """
        Check whether fork criteria have been met.

        Returns `True` when the current block meets or exceeds the criteria,
        and `False` otherwise.
        """
        raise NotImplementedError()

    @abstractmethod
    def __repr__(self) -> str:
        """
        String representation of this object.
        """
        raise NotImplementedError()


class ByBlockNumber(ForkCriteria):
    """
    Forks that occur when a specific block number has been reached.
    """

    block_number: int

    def __init__(self, block_number: SupportsInt):
        self._internal = (ForkCriteria.BLOCK_NUMBER, int(block_number))
        self.block_number = int(block_number)

    def check(self, block_number: int, timestamp: int) -> bool:
        """
        Check whether the block number has been reached.
        """
        return block_number >= self.block_number

    def __repr__(self) -> str:
        """
        String representation of this object.
        """
        return f"ByBlockNumber({self.block_number})"


class ByTimestamp(ForkCriteria):
    """
    Forks that occur when a specific timestamp has been reached.
    """

    timestamp: int

    def __init__(self, timestamp: SupportsInt):
        self._internal = (ForkCriteria.TIMESTAMP, int(timestamp))
        self.timestamp = int(timestamp)

    def check(self, block_number: int, timestamp: int) -> bool:
        """
        Check whether the timestamp has been reached.
        """
        return timestamp >= self.timestamp

    def __repr__(self) -> str:
        """
        String representation of this object.
        """
        return f"ByTimestamp({self.timestamp})"


class Unscheduled(ForkCriteria):
    """
    Forks that have not been scheduled.
    """

    def __init__(self) -> None:
        self._internal = (ForkCriteria.UNSCHEDULED, 0)

    def check(self, block_number: int, timestamp: int) -> Literal[False]:
        """
        Unscheduled forks never occur; always returns `False`.
        """
        return False

    def __repr__(self) -> str:
        """
        String representation of this object.
        """
        return "Unscheduled()"
