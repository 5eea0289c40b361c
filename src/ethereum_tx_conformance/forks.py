"""
The forks a transaction test is checked under, in activation order, each
bound to the signature scheme in force from that fork on.

Several consecutive forks share a scheme: the transaction wire format did not
change between them even though other rules did.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .exceptions import UnsupportedForkError
from .signers import SignatureScheme


@dataclass(frozen=True)
class ForkCase:
    """
    A fork name and the signature scheme transactions are recovered with.
    """

    name: str
    signature_scheme: SignatureScheme


FORK_CASES: Tuple[ForkCase, ...] = (
    ForkCase("Frontier", SignatureScheme.FRONTIER),
    ForkCase("Homestead", SignatureScheme.HOMESTEAD),
    ForkCase("EIP150", SignatureScheme.HOMESTEAD),
    ForkCase("EIP158", SignatureScheme.EIP155),
    ForkCase("Byzantium", SignatureScheme.EIP155),
    ForkCase("Constantinople", SignatureScheme.EIP155),
    ForkCase("Istanbul", SignatureScheme.EIP155),
    ForkCase("Berlin", SignatureScheme.EIP2930),
    ForkCase("London", SignatureScheme.LONDON),
    ForkCase("Paris", SignatureScheme.LONDON),
    ForkCase("Shanghai", SignatureScheme.LONDON),
    ForkCase("Cancun", SignatureScheme.CANCUN),
    ForkCase("Prague", SignatureScheme.PRAGUE),
)

_FORK_CASES_BY_NAME: Dict[str, ForkCase] = {
    case.name: case for case in FORK_CASES
}


def fork_case(name: str) -> ForkCase:
    """
    Look up the fork case called `name`.
    """
    try:
        return _FORK_CASES_BY_NAME[name]
    except KeyError:
        raise UnsupportedForkError(name) from None


def fork_names() -> Tuple[str, ...]:
    """
    Names of all fork cases, in activation order.
    """
    return tuple(case.name for case in FORK_CASES)
