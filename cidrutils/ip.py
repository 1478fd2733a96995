"""CIDRs of either IP family behind one type."""

from __future__ import annotations

from collections.abc import Iterator
from functools import total_ordering
from ipaddress import IPv4Address, IPv6Address, ip_address

from .errors import ErrorKind, IpCidrError, Ipv4CidrError, Ipv6CidrError
from .ipv4 import Ipv4Cidr
from .ipv6 import Ipv6Cidr


def _as_address(ip) -> IPv4Address | IPv6Address:
    if isinstance(ip, (IPv4Address, IPv6Address)):
        return ip
    if isinstance(ip, str):
        return ip_address(ip)
    raise TypeError(f"cannot take {type(ip).__name__} as an IP address")


@total_ordering
class IpCidr:
    """An IPv4 or IPv6 CIDR; every IPv4 CIDR sorts before every IPv6 CIDR."""

    __slots__ = ("_cidr",)

    def __init__(self, cidr: Ipv4Cidr | Ipv6Cidr) -> None:
        if not isinstance(cidr, (Ipv4Cidr, Ipv6Cidr)):
            raise TypeError(f"expected an Ipv4Cidr or Ipv6Cidr, not {type(cidr).__name__}")
        self._cidr = cidr

    @classmethod
    def parse(cls, text: str) -> IpCidr:
        """Parse ``text`` as an IPv4 CIDR, or failing that as an IPv6 CIDR."""
        try:
            return cls(Ipv4Cidr.parse(text))
        except Ipv4CidrError as error:
            if error.kind is not ErrorKind.INCORRECT_STRING:
                raise IpCidrError.from_error(error) from None
        try:
            return cls(Ipv6Cidr.parse(text))
        except Ipv6CidrError as error:
            raise IpCidrError.from_error(error) from None

    @staticmethod
    def is_ip_cidr(text: str) -> bool:
        """Tell whether ``text`` parses as a CIDR of either family."""
        try:
            IpCidr.parse(text)
        except IpCidrError:
            return False
        return True

    @staticmethod
    def is_ipv4_cidr(text: str) -> bool:
        """Tell whether ``text`` parses as an IPv4 CIDR."""
        return Ipv4Cidr.is_ipv4_cidr(text)

    @staticmethod
    def is_ipv6_cidr(text: str) -> bool:
        """Tell whether ``text`` parses as an IPv6 CIDR."""
        return Ipv6Cidr.is_ipv6_cidr(text)

    @property
    def cidr(self) -> Ipv4Cidr | Ipv6Cidr:
        """The family-specific CIDR held."""
        return self._cidr

    @property
    def is_ipv4(self) -> bool:
        return isinstance(self._cidr, Ipv4Cidr)

    @property
    def _address_type(self):
        return IPv4Address if self.is_ipv4 else IPv6Address

    @property
    def bits(self) -> int:
        return self._cidr.bits

    @property
    def first_address(self) -> IPv4Address | IPv6Address:
        return self._cidr.first_address

    @property
    def last_address(self) -> IPv4Address | IPv6Address:
        return self._cidr.last_address

    @property
    def size(self) -> int:
        """The number of addresses in the network."""
        return self._cidr.size

    def contains(self, ip) -> bool:
        """Tell whether the address ``ip`` lies in this network; other families never do."""
        address = _as_address(ip)
        if not isinstance(address, self._address_type):
            return False
        return self._cidr.contains(address)

    def __contains__(self, ip) -> bool:
        try:
            return self.contains(ip)
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[IPv4Address | IPv6Address]:
        return self._cidr.iter_addresses()

    def __reversed__(self) -> Iterator[IPv4Address | IPv6Address]:
        address_type = self._address_type
        return (address_type(value) for value in reversed(self._cidr))

    def iter_addresses(self) -> Iterator[IPv4Address | IPv6Address]:
        return iter(self)

    @staticmethod
    def _unwrap(other):
        if isinstance(other, IpCidr):
            return other._cidr
        if isinstance(other, (Ipv4Cidr, Ipv6Cidr)):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        inner = self._unwrap(other)
        if inner is None:
            return NotImplemented
        return self._cidr == inner

    def __hash__(self) -> int:
        return hash(self._cidr)

    def __lt__(self, other: object) -> bool:
        inner = self._unwrap(other)
        if inner is None:
            return NotImplemented
        if type(self._cidr) is type(inner):
            return self._cidr < inner
        return self.is_ipv4

    def __str__(self) -> str:
        return str(self._cidr)

    def __repr__(self) -> str:
        return f"IpCidr({self._cidr!r})"