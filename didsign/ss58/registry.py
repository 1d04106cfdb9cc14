"""
SS58 network prefix registry.

The registry is built once at import and never mutated. Numeric values and
names are unique; 46 and 47 are reserved by the SS58 format and cannot be
registered.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from ..core.errors import UnknownNetworkError

MAX_PREFIX_VALUE = 16383
RESERVED_PREFIXES = frozenset({46, 47})


@dataclass(frozen=True)
class NetworkPrefix:
    """
    Immutable registry entry.

    Fields:
        name: Lower-case network name (lookup key)
        value: SS58 numeric prefix (0..16383)
        description: Human-readable label
    """
    name: str
    value: int
    description: str = ""

    @property
    def byte_length(self) -> int:
        """Prefix width in the encoded address: 1 byte below 64, else 2."""
        return 1 if self.value < 64 else 2


class NetworkRegistry:
    """
    Read-only lookup of NetworkPrefix by name or numeric value.
    """

    def __init__(self, networks: Iterable[NetworkPrefix]):
        by_value: Dict[int, NetworkPrefix] = {}
        by_name: Dict[str, NetworkPrefix] = {}

        for network in networks:
            if not 0 <= network.value <= MAX_PREFIX_VALUE:
                raise ValueError(f"SS58 prefix out of range: {network.value}")
            if network.value in RESERVED_PREFIXES:
                raise ValueError(f"SS58 prefix {network.value} is reserved")
            if network.value in by_value:
                raise ValueError(
                    f"Duplicate SS58 prefix {network.value}: "
                    f"{by_value[network.value].name} and {network.name}"
                )
            if network.name in by_name:
                raise ValueError(f"Duplicate network name: {network.name}")
            by_value[network.value] = network
            by_name[network.name] = network

        self._by_value = by_value
        self._by_name = by_name

    def find_by_value(self, value: int) -> Optional[NetworkPrefix]:
        return self._by_value.get(value)

    def find_by_name(self, name: str) -> Optional[NetworkPrefix]:
        return self._by_name.get(name.strip().lower())

    def get(self, key: Union[str, int, NetworkPrefix]) -> NetworkPrefix:
        """
        Resolve a network by name, numeric value or NetworkPrefix.

        Numeric strings ("42") are treated as values.

        Raises:
            UnknownNetworkError: If nothing in the registry matches
        """
        if isinstance(key, NetworkPrefix):
            if self._by_value.get(key.value) != key:
                raise UnknownNetworkError(f"Network not registered: {key.name}")
            return key

        if isinstance(key, int):
            network = self.find_by_value(key)
        elif key.strip().isdigit():
            network = self.find_by_value(int(key.strip()))
        else:
            network = self.find_by_name(key)

        if network is None:
            raise UnknownNetworkError(f"Unknown network: {key}")
        return network

    def all(self) -> List[NetworkPrefix]:
        """All networks, ordered by numeric value."""
        return [self._by_value[v] for v in sorted(self._by_value)]

    def __contains__(self, network: object) -> bool:
        return isinstance(network, NetworkPrefix) and self._by_value.get(network.value) == network

    def __len__(self) -> int:
        return len(self._by_value)


POLKADOT = NetworkPrefix("polkadot", 0, "Polkadot relay chain")
KUSAMA = NetworkPrefix("kusama", 2, "Kusama canary network")
ASTAR = NetworkPrefix("astar", 5, "Astar network")
BIFROST = NetworkPrefix("bifrost", 6, "Bifrost network")
ACALA = NetworkPrefix("acala", 10, "Acala network")
PHALA = NetworkPrefix("phala", 30, "Phala network")
KILT = NetworkPrefix("kilt", 38, "KILT spiritnet (identity)")
SUBSTRATE = NetworkPrefix("substrate", 42, "Generic Substrate and development chains")
MOONBEAM = NetworkPrefix("moonbeam", 1284, "Moonbeam")

REGISTRY = NetworkRegistry(
    [POLKADOT, KUSAMA, ASTAR, BIFROST, ACALA, PHALA, KILT, SUBSTRATE, MOONBEAM]
)

# Network used for signer addresses and DID key identifiers.
IDENTITY_NETWORK = KILT


def get_network(key: Union[str, int, NetworkPrefix]) -> NetworkPrefix:
    return REGISTRY.get(key)


def find_by_value(value: int) -> Optional[NetworkPrefix]:
    return REGISTRY.find_by_value(value)


def supported_networks() -> List[NetworkPrefix]:
    return REGISTRY.all()
