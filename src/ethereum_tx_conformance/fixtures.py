"""
Transaction test fixtures.

A fixture file maps test names to tests. Each test carries the encoded
transaction and, per fork, the expected outcome:

```json
{
    "<test name>": {
        "txbytes": "0xf85f...",
        "result": {
            "Frontier": {"exception": "TransactionException.INTRINSIC_GAS_TOO_LOW"},
            "Homestead": {"hash": "0x...", "sender": "0x...", "intrinsicGas": "0x5208"}
        }
    }
}
```

The forks may also sit beside `txbytes` instead of under `result`.
"""  # noqa: E501

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

from pydantic import ConfigDict, RootModel, ValidationError, model_validator

from .base_types import Address, Bytes, CamelModel, Hash, HexNumber
from .exceptions import MalformedRecordError
from .logging import get_logger

logger = get_logger(__name__)


class ExpectedOutcome(CamelModel):
    """
    The expected outcome of a transaction under one fork.

    A valid transaction is described by `hash`, `sender` and
    `intrinsic_gas`; a transaction that must be rejected by `exception`.
    """

    model_config = ConfigDict(frozen=True)

    sender: Address | None = None
    hash: Hash | None = None
    exception: str | None = None
    intrinsic_gas: HexNumber = HexNumber(0)

    def check_well_formed(self) -> None:
        """
        Raise `MalformedRecordError` unless the outcome describes either a
        valid or a rejected transaction.
        """
        if self.hash is None and self.exception is None:
            raise MalformedRecordError("missing hash and exception")
        if self.hash is not None and self.sender is None:
            raise MalformedRecordError("missing sender")

    @property
    def expects_failure(self) -> bool:
        """
        Whether the transaction must be rejected under this fork.
        """
        return self.hash is None


class TransactionTest(CamelModel):
    """
    A single transaction test.
    """

    model_config = ConfigDict(frozen=True)

    txbytes: Bytes | None = None
    result: Dict[str, ExpectedOutcome | None] = {}

    @model_validator(mode="before")
    @classmethod
    def collect_flat_results(cls, data: Any) -> Any:
        """
        Move fork entries that sit beside `txbytes` into `result`.
        """
        if not isinstance(data, dict) or "result" in data:
            return data
        result = {
            key: value
            for key, value in data.items()
            if key != "txbytes" and not key.startswith("_")
        }
        return {"txbytes": data.get("txbytes"), "result": result}

    def check_well_formed(self) -> Bytes:
        """
        Raise `MalformedRecordError` if the test cannot be run, otherwise
        return the encoded transaction.
        """
        if self.txbytes is None:
            raise MalformedRecordError("missing txbytes")
        for fork, expected in self.result.items():
            if expected is None:
                continue
            try:
                expected.check_well_formed()
            except MalformedRecordError as e:
                raise MalformedRecordError(f"invalid {fork}: {e}") from e
        return self.txbytes

    def expected(self, fork: str) -> ExpectedOutcome | None:
        """
        Expected outcome for `fork`, or `None` if the fork is not checked.
        """
        return self.result.get(fork)


class TransactionTestFile(RootModel[Dict[str, TransactionTest]]):
    """
    All transaction tests of one fixture file, keyed by test name.
    """

    root: Dict[str, TransactionTest]

    def __getitem__(self, name: str) -> TransactionTest:
        return self.root[name]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def items(self) -> Iterator[Tuple[str, TransactionTest]]:
        """
        Iterate over test names and tests.
        """
        return iter(self.root.items())

    @classmethod
    def from_file(cls, path: Path) -> "TransactionTestFile":
        """
        Load the tests of a JSON fixture file.
        """
        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise MalformedRecordError(
                    f"{path} is not valid JSON: {e}"
                ) from e
        try:
            tests = cls.model_validate(data)
        except ValidationError as e:
            raise MalformedRecordError(
                f"{path} is not a transaction test file: {e}"
            ) from e
        logger.debug(f"Loaded {len(tests)} transaction tests from {path}")
        return tests


def load_transaction_tests(path: Path | str) -> Dict[str, TransactionTest]:
    """
    Load the transaction tests in `path`, keyed by test name.
    """
    return dict(TransactionTestFile.from_file(Path(path)).items())
