"""IPv4 CIDRs: parsing, masks, membership and iteration."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from functools import total_ordering
from ipaddress import IPv4Address

from .errors import ErrorKind, Ipv4CidrError

_MAX = 0xFFFFFFFF

_OCTET = r"(25[0-5]|2[0-4][0-9]|1(?:[0-9]){1,2}|[1-9]?[0-9])"
_RE_IPV4_CIDR = re.compile(
    rf"(?:{_OCTET}(?:\.{_OCTET}(?:\.{_OCTET}(?:\.{_OCTET})?)?)?)"
    rf"(?:/(?:([0-9]|30|31|32|(?:[1-2][0-9]))|(?:{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET})))?"
)


def get_mask(bits: int) -> int:
    """Return the 32-bit mask whose leading ``bits`` bits are set."""
    bits = max(0, min(bits, 32))
    return (_MAX << (32 - bits)) & _MAX


def mask_to_bits(mask: int) -> int | None:
    """Return the prefix length of ``mask``, or ``None`` if it is not contiguous."""
    inverted = ~mask & _MAX
    if inverted & (inverted + 1):
        return None
    return 32 - inverted.bit_length()


def to_u32(value) -> int:
    """Convert an int, a 4-byte sequence or an ``IPv4Address`` to a 32-bit integer."""
    if isinstance(value, IPv4Address):
        return int(value)
    if isinstance(value, bool):
        raise TypeError("a bool is not an IPv4 address")
    if isinstance(value, int):
        if not 0 <= value <= _MAX:
            raise ValueError(f"{value} is out of the IPv4 range")
        return value
    if isinstance(value, str):
        raise TypeError("strings are not accepted as IPv4 addresses; parse them first")
    try:
        octets = bytes(value)
    except TypeError:
        raise TypeError(f"cannot take {type(value).__name__} as an IPv4 address") from None
    if len(octets) != 4:
        raise ValueError(f"an IPv4 address has 4 octets, not {len(octets)}")
    return int.from_bytes(octets, "big")


@total_ordering
@dataclass(frozen=True, repr=False)
class Ipv4Cidr:
    """An IPv4 network given by its prefix and mask, both as 32-bit integers."""

    prefix: int
    mask: int

    def __post_init__(self) -> None:
        if mask_to_bits(to_u32(self.mask)) is None:
            raise Ipv4CidrError(ErrorKind.INCORRECT_MASK)
        object.__setattr__(self, "prefix", to_u32(self.prefix) & self.mask)

    @classmethod
    def from_prefix_and_bits(cls, prefix, bits: int) -> Ipv4Cidr:
        """Build a CIDR from an address and a prefix length."""
        if not 0 <= bits <= 32:
            raise Ipv4CidrError(ErrorKind.INCORRECT_BITS_RANGE)
        mask = get_mask(bits)
        return cls(to_u32(prefix) & mask, mask)

    @classmethod
    def from_prefix_and_mask(cls, prefix, mask) -> Ipv4Cidr:
        """Build a CIDR from an address and a network mask."""
        mask_value = to_u32(mask)
        if mask_to_bits(mask_value) is None:
            raise Ipv4CidrError(ErrorKind.INCORRECT_MASK)
        return cls(to_u32(prefix) & mask_value, mask_value)

    @classmethod
    def parse(cls, text: str) -> Ipv4Cidr:
        """Parse forms such as ``192.168.1.0/24``, ``10.0.0.0/255.0.0.0`` or ``192.168``."""
        match = _RE_IPV4_CIDR.fullmatch(text)
        if match is None:
            raise Ipv4CidrError(ErrorKind.INCORRECT_STRING)
        groups = match.groups()

        prefix = [0, 0, 0, 0]
        prefer_bits = None
        for position, octet in enumerate(groups[:4]):
            if octet is None:
                prefer_bits = 8 * position
                break
            prefix[position] = int(octet)

        bits_text = groups[4]
        if bits_text is not None:
            bits = int(bits_text)
            if prefer_bits is not None and bits != prefer_bits:
                raise Ipv4CidrError(ErrorKind.INCORRECT_STRING)
            return cls.from_prefix_and_bits(prefix, bits)

        if groups[5] is not None:
            mask = [int(octet) for octet in groups[5:9]]
            bits = mask_to_bits(to_u32(mask))
            if bits is None:
                raise Ipv4CidrError(ErrorKind.INCORRECT_STRING)
            if prefer_bits is not None and bits != prefer_bits:
                raise Ipv4CidrError(ErrorKind.INCORRECT_STRING)
            return cls.from_prefix_and_mask(prefix, mask)

        return cls.from_prefix_and_bits(prefix, 32 if prefer_bits is None else prefer_bits)

    @staticmethod
    def is_ipv4_cidr(text: str) -> bool:
        """Tell whether ``text`` parses as an IPv4 CIDR."""
        try:
            Ipv4Cidr.parse(text)
        except Ipv4CidrError:
            return False
        return True

    @property
    def bits(self) -> int:
        """The prefix length."""
        return mask_to_bits(self.mask)

    @property
    def prefix_bytes(self) -> bytes:
        return self.prefix.to_bytes(4, "big")

    @property
    def prefix_address(self) -> IPv4Address:
        return IPv4Address(self.prefix)

    @property
    def mask_bytes(self) -> bytes:
        return self.mask.to_bytes(4, "big")

    @property
    def mask_address(self) -> IPv4Address:
        return IPv4Address(self.mask)

    @property
    def first(self) -> int:
        """The lowest address of the network as an integer."""
        return self.prefix

    @property
    def first_bytes(self) -> bytes:
        return self.prefix_bytes

    @property
    def first_address(self) -> IPv4Address:
        return self.prefix_address

    @property
    def last(self) -> int:
        """The highest address of the network as an integer."""
        return (~self.mask & _MAX) | self.prefix

    @property
    def last_bytes(self) -> bytes:
        return self.last.to_bytes(4, "big")

    @property
    def last_address(self) -> IPv4Address:
        return IPv4Address(self.last)

    @property
    def size(self) -> int:
        """The number of addresses in the network."""
        return 2 ** (32 - self.bits)

    def contains(self, ip) -> bool:
        """Tell whether the address ``ip`` lies in this network."""
        return to_u32(ip) & self.mask == self.prefix

    def __contains__(self, ip) -> bool:
        try:
            return self.contains(ip)
        except (TypeError, ValueError):
            return False

    def _range(self) -> range:
        return range(self.first, self.last + 1)

    def __iter__(self) -> Iterator[int]:
        return iter(self._range())

    def __reversed__(self) -> Iterator[int]:
        return reversed(self._range())

    def __getitem__(self, index):
        """Address at ``index`` as an integer; a slice gives a ``range`` of them."""
        return self._range()[index]

    def iter_bytes(self) -> Iterator[bytes]:
        for value in self._range():
            yield value.to_bytes(4, "big")

    def iter_addresses(self) -> Iterator[IPv4Address]:
        for value in self._range():
            yield IPv4Address(value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ipv4Cidr):
            return NotImplemented
        return (self.prefix, self.bits) < (other.prefix, other.bits)

    def __str__(self) -> str:
        return f"{self.prefix_address}/{self.bits}"

    def __repr__(self) -> str:
        return (
            f"Ipv4Cidr(prefix={self.prefix_address}, "
            f"mask={self.mask_address}, bits={self.bits})"
        )