"""Combine CIDRs into the smallest set of supernetworks that covers them."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from ipaddress import IPv4Address, IPv6Address, ip_address

from .ip import IpCidr
from .ipv4 import Ipv4Cidr, to_u32
from .ipv6 import Ipv6Cidr, to_u128


def _check_type(cidr, cidr_type: type):
    if not isinstance(cidr, cidr_type):
        raise TypeError(f"expected {cidr_type.__name__}, not {type(cidr).__name__}")
    return cidr


def _sibling(lower, upper, width: int) -> bool:
    bits = lower.bits
    return bits == upper.bits and lower.prefix ^ upper.prefix == 1 << (width - bits)


def _push(cidrs: list, cidr, width: int) -> None:
    """Insert ``cidr`` into the sorted list, dropping covered CIDRs and merging halves."""
    cidr_type = type(cidr)
    index = bisect_left(cidrs, cidr)
    if index < len(cidrs) and cidrs[index] == cidr:
        return
    if not cidrs:
        cidrs.append(cidr)
        return
    if index > 0 and cidrs[index - 1].contains(cidr.first):
        return

    while index < len(cidrs) and cidr.contains(cidrs[index].first):
        del cidrs[index]

    merging = True
    while merging:
        merging = False
        if index < len(cidrs) and _sibling(cidr, cidrs[index], width):
            cidr = cidr_type.from_prefix_and_bits(cidr.prefix, cidr.bits - 1)
            del cidrs[index]
            merging = True
        if index > 0 and _sibling(cidrs[index - 1], cidr, width):
            previous = cidrs.pop(index - 1)
            index -= 1
            cidr = cidr_type.from_prefix_and_bits(previous.prefix, previous.bits - 1)
            merging = True

    cidrs.insert(index, cidr)


def _format(cidrs: Iterable) -> str:
    return "[" + ", ".join(str(cidr) for cidr in cidrs) + "]"


class Ipv4CidrCombiner:
    """Combine IPv4 CIDRs into supernetworks."""

    def __init__(self, cidrs: Iterable[Ipv4Cidr] | None = None) -> None:
        self._cidrs: list[Ipv4Cidr] = []
        for cidr in cidrs or ():
            self.push(cidr)

    @classmethod
    def from_cidrs(cls, cidrs: Iterable[Ipv4Cidr]) -> Ipv4CidrCombiner:
        """Wrap CIDRs that are already sorted, disjoint and merged, without checking that."""
        combiner = cls()
        combiner._cidrs = [_check_type(cidr, Ipv4Cidr) for cidr in cidrs]
        return combiner

    def push(self, cidr: Ipv4Cidr) -> None:
        """Add ``cidr``, dropping what it covers and merging adjacent halves."""
        _push(self._cidrs, _check_type(cidr, Ipv4Cidr), 32)

    def contains(self, ip) -> bool:
        """Tell whether the address ``ip`` lies in any of the combined CIDRs."""
        value = to_u32(ip)
        return any(cidr.contains(value) for cidr in self._cidrs)

    def __contains__(self, ip) -> bool:
        try:
            return self.contains(ip)
        except (TypeError, ValueError):
            return False

    @property
    def size(self) -> int:
        """The number of addresses covered."""
        return sum(cidr.size for cidr in self._cidrs)

    def __len__(self) -> int:
        return len(self._cidrs)

    def __getitem__(self, index):
        return self._cidrs[index]

    def __iter__(self) -> Iterator[Ipv4Cidr]:
        return iter(self._cidrs)

    def __str__(self) -> str:
        return _format(self._cidrs)

    def __repr__(self) -> str:
        return f"Ipv4CidrCombiner({self._cidrs!r})"


class Ipv6CidrCombiner:
    """Combine IPv6 CIDRs into supernetworks."""

    def __init__(self, cidrs: Iterable[Ipv6Cidr] | None = None) -> None:
        self._cidrs: list[Ipv6Cidr] = []
        for cidr in cidrs or ():
            self.push(cidr)

    @classmethod
    def from_cidrs(cls, cidrs: Iterable[Ipv6Cidr]) -> Ipv6CidrCombiner:
        """Wrap CIDRs that are already sorted, disjoint and merged, without checking that."""
        combiner = cls()
        combiner._cidrs = [_check_type(cidr, Ipv6Cidr) for cidr in cidrs]
        return combiner

    def push(self, cidr: Ipv6Cidr) -> None:
        """Add ``cidr``, dropping what it covers and merging adjacent halves."""
        _push(self._cidrs, _check_type(cidr, Ipv6Cidr), 128)

    def contains(self, ip) -> bool:
        """Tell whether the address ``ip`` lies in any of the combined CIDRs."""
        value = to_u128(ip)
        return any(cidr.contains(value) for cidr in self._cidrs)

    def __contains__(self, ip) -> bool:
        try:
            return self.contains(ip)
        except (TypeError, ValueError):
            return False

    @property
    def size(self) -> int:
        """The number of addresses covered."""
        return sum(cidr.size for cidr in self._cidrs)

    def __len__(self) -> int:
        return len(self._cidrs)

    def __getitem__(self, index):
        return self._cidrs[index]

    def __iter__(self) -> Iterator[Ipv6Cidr]:
        return iter(self._cidrs)

    def __str__(self) -> str:
        return _format(self._cidrs)

    def __repr__(self) -> str:
        return f"Ipv6CidrCombiner({self._cidrs!r})"


def _as_address(ip) -> IPv4Address | IPv6Address:
    if isinstance(ip, (IPv4Address, IPv6Address)):
        return ip
    if isinstance(ip, str):
        return ip_address(ip)
    raise TypeError(f"cannot take {type(ip).__name__} as an IP address")


class IpCidrCombiner:
    """Combine CIDRs of both families, keeping IPv4 and IPv6 apart."""

    def __init__(self) -> None:
        self._ipv4 = Ipv4CidrCombiner()
        self._ipv6 = Ipv6CidrCombiner()

    @classmethod
    def from_cidrs(cls, ipv4_cidrs: Iterable, ipv6_cidrs: Iterable) -> IpCidrCombiner:
        """Wrap already combined CIDRs of each family, without checking them."""
        combiner = cls()
        combiner._ipv4 = Ipv4CidrCombiner.from_cidrs(ipv4_cidrs)
        combiner._ipv6 = Ipv6CidrCombiner.from_cidrs(ipv6_cidrs)
        return combiner

    @property
    def ipv4_cidrs(self) -> tuple[Ipv4Cidr, ...]:
        return tuple(self._ipv4)

    @property
    def ipv6_cidrs(self) -> tuple[Ipv6Cidr, ...]:
        return tuple(self._ipv6)

    def push(self, cidr) -> None:
        """Add an ``IpCidr`` (or a family-specific CIDR) to the matching family."""
        if isinstance(cidr, IpCidr):
            cidr = cidr.cidr
        if isinstance(cidr, Ipv4Cidr):
            self._ipv4.push(cidr)
        elif isinstance(cidr, Ipv6Cidr):
            self._ipv6.push(cidr)
        else:
            raise TypeError(f"expected an IpCidr, not {type(cidr).__name__}")

    def contains(self, ip) -> bool:
        """Tell whether the address ``ip`` lies in any CIDR of its family."""
        address = _as_address(ip)
        if isinstance(address, IPv4Address):
            return self._ipv4.contains(address)
        return self._ipv6.contains(address)

    def __contains__(self, ip) -> bool:
        try:
            return self.contains(ip)
        except (TypeError, ValueError):
            return False

    @property
    def ipv4_size(self) -> int:
        return self._ipv4.size

    @property
    def ipv6_size(self) -> int:
        return self._ipv6.size

    def __len__(self) -> int:
        return len(self._ipv4) + len(self._ipv6)

    def __str__(self) -> str:
        parts = [str(cidr) for cidr in self._ipv4]
        parts.extend(str(cidr) for cidr in self._ipv6)
        return "[" + ", ".join(parts) + "]"

    def __repr__(self) -> str:
        return f"IpCidrCombiner({list(self._ipv4)!r}, {list(self._ipv6)!r})"