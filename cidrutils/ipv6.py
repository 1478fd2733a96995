"""IPv6 CIDRs: parsing, masks, membership and iteration."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from functools import total_ordering
from ipaddress import AddressValueError, IPv6Address

from .errors import ErrorKind, Ipv6CidrError

_MAX = (1 << 128) - 1

_RE_IPV6_CIDR = re.compile(r"([^/]+)(?:/(12[0-8]|1[0-1][0-9]|[1-9][0-9]|[0-9]))?")


def get_mask(bits: int) -> int:
    """Return the 128-bit mask whose leading ``bits`` bits are set."""
    bits = max(0, min(bits, 128))
    return (_MAX << (128 - bits)) & _MAX


def mask_to_bits(mask: int) -> int | None:
    """Return the prefix length of ``mask``, or ``None`` if it is not contiguous."""
    inverted = ~mask & _MAX
    if inverted & (inverted + 1):
        return None
    return 128 - inverted.bit_length()


def u128_to_u16_array(value: int) -> tuple[int, ...]:
    """Split a 128-bit integer into eight 16-bit segments, most significant first."""
    return tuple((value >> shift) & 0xFFFF for shift in range(112, -1, -16))


def u16_array_to_u128(segments) -> int:
    """Join eight 16-bit segments, most significant first, into a 128-bit integer."""
    segments = list(segments)
    if len(segments) != 8:
        raise ValueError(f"an IPv6 address has 8 segments, not {len(segments)}")
    result = 0
    for segment in segments:
        if not 0 <= segment <= 0xFFFF:
            raise ValueError(f"{segment} is not a 16-bit segment")
        result = (result << 16) | segment
    return result


def to_u128(value) -> int:
    """Convert an int, 16 bytes, 8 segments or an ``IPv6Address`` to a 128-bit integer."""
    if isinstance(value, IPv6Address):
        return int(value)
    if isinstance(value, bool):
        raise TypeError("a bool is not an IPv6 address")
    if isinstance(value, int):
        if not 0 <= value <= _MAX:
            raise ValueError(f"{value} is out of the IPv6 range")
        return value
    if isinstance(value, str):
        raise TypeError("strings are not accepted as IPv6 addresses; parse them first")
    if isinstance(value, (bytes, bytearray, memoryview)):
        octets = bytes(value)
        if len(octets) != 16:
            raise ValueError(f"an IPv6 address has 16 octets, not {len(octets)}")
        return int.from_bytes(octets, "big")
    try:
        items = list(value)
    except TypeError:
        raise TypeError(f"cannot take {type(value).__name__} as an IPv6 address") from None
    if len(items) == 16:
        try:
            return int.from_bytes(bytes(items), "big")
        except (TypeError, ValueError):
            raise ValueError("octets must be integers in 0..255") from None
    if len(items) == 8:
        return u16_array_to_u128(items)
    raise ValueError(f"an IPv6 address has 16 octets or 8 segments, not {len(items)} items")


def _format_segments(value: int) -> str:
    return ":".join(f"{segment:X}" for segment in u128_to_u16_array(value))


@total_ordering
@dataclass(frozen=True, repr=False)
class Ipv6Cidr:
    """An IPv6 network given by its prefix and mask, both as 128-bit integers."""

    prefix: int
    mask: int

    def __post_init__(self) -> None:
        if mask_to_bits(to_u128(self.mask)) is None:
            raise Ipv6CidrError(ErrorKind.INCORRECT_MASK)
        object.__setattr__(self, "prefix", to_u128(self.prefix) & self.mask)

    @classmethod
    def from_prefix_and_bits(cls, prefix, bits: int) -> Ipv6Cidr:
        """Build a CIDR from an address and a prefix length."""
        if not 0 <= bits <= 128:
            raise Ipv6CidrError(ErrorKind.INCORRECT_BITS_RANGE)
        mask = get_mask(bits)
        return cls(to_u128(prefix) & mask, mask)

    @classmethod
    def from_prefix_and_mask(cls, prefix, mask) -> Ipv6Cidr:
        """Build a CIDR from an address and a network mask."""
        mask_value = to_u128(mask)
        if mask_to_bits(mask_value) is None:
            raise Ipv6CidrError(ErrorKind.INCORRECT_MASK)
        return cls(to_u128(prefix) & mask_value, mask_value)

    @classmethod
    def parse(cls, text: str) -> Ipv6Cidr:
        """Parse forms such as ``2001:4f8:3:ba::/64`` or ``::ffff:1.2.3.4``."""
        match = _RE_IPV6_CIDR.fullmatch(text)
        if match is None:
            raise Ipv6CidrError(ErrorKind.INCORRECT_STRING)
        address_text, bits_text = match.groups()
        if "%" in address_text:
            raise Ipv6CidrError(ErrorKind.INCORRECT_STRING)
        try:
            address = IPv6Address(address_text)
        except AddressValueError:
            raise Ipv6CidrError(ErrorKind.INCORRECT_STRING) from None
        bits = 128 if bits_text is None else int(bits_text)
        return cls.from_prefix_and_bits(address, bits)

    @staticmethod
    def is_ipv6_cidr(text: str) -> bool:
        """Tell whether ``text`` parses as an IPv6 CIDR."""
        try:
            Ipv6Cidr.parse(text)
        except Ipv6CidrError:
            return False
        return True

    @property
    def bits(self) -> int:
        """The prefix length."""
        return mask_to_bits(self.mask)

    @property
    def prefix_bytes(self) -> bytes:
        return self.prefix.to_bytes(16, "big")

    @property
    def prefix_segments(self) -> tuple[int, ...]:
        return u128_to_u16_array(self.prefix)

    @property
    def prefix_address(self) -> IPv6Address:
        return IPv6Address(self.prefix)

    @property
    def mask_bytes(self) -> bytes:
        return self.mask.to_bytes(16, "big")

    @property
    def mask_segments(self) -> tuple[int, ...]:
        return u128_to_u16_array(self.mask)

    @property
    def mask_address(self) -> IPv6Address:
        return IPv6Address(self.mask)

    @property
    def first(self) -> int:
        """The lowest address of the network as an integer."""
        return self.prefix

    @property
    def first_bytes(self) -> bytes:
        return self.prefix_bytes

    @property
    def first_segments(self) -> tuple[int, ...]:
        return self.prefix_segments

    @property
    def first_address(self) -> IPv6Address:
        return self.prefix_address

    @property
    def last(self) -> int:
        """The highest address of the network as an integer."""
        return (~self.mask & _MAX) | self.prefix

    @property
    def last_bytes(self) -> bytes:
        return self.last.to_bytes(16, "big")

    @property
    def last_segments(self) -> tuple[int, ...]:
        return u128_to_u16_array(self.last)

    @property
    def last_address(self) -> IPv6Address:
        return IPv6Address(self.last)

    @property
    def size(self) -> int:
        """The number of addresses in the network."""
        return 2 ** (128 - self.bits)

    def contains(self, ip) -> bool:
        """Tell whether the address ``ip`` lies in this network."""
        return to_u128(ip) & self.mask == self.prefix

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
            yield value.to_bytes(16, "big")

    def iter_segments(self) -> Iterator[tuple[int, ...]]:
        for value in self._range():
            yield u128_to_u16_array(value)

    def iter_addresses(self) -> Iterator[IPv6Address]:
        for value in self._range():
            yield IPv6Address(value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ipv6Cidr):
            return NotImplemented
        return (self.prefix, self.bits) < (other.prefix, other.bits)

    def __str__(self) -> str:
        return f"{_format_segments(self.prefix)}/{self.bits}"

    def __repr__(self) -> str:
        return (
            f"Ipv6Cidr(prefix={_format_segments(self.prefix)}, "
            f"mask={_format_segments(self.mask)}, bits={self.bits})"
        )