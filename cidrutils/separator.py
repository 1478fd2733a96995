"""Split CIDRs into evenly sized parts or into subnetworks of a given length."""

from __future__ import annotations

from .combiner import IpCidrCombiner, Ipv4CidrCombiner, Ipv6CidrCombiner
from .errors import ErrorKind, Ipv4CidrError, Ipv6CidrError
from .ip import IpCidr
from .ipv4 import Ipv4Cidr
from .ipv6 import Ipv6Cidr


def _range_to_cidrs(cidr_type, width: int, start: int, end: int) -> list:
    """Cover the inclusive address range ``start``..``end`` with the fewest aligned CIDRs."""
    cidrs = []
    while start <= end:
        block = start & -start if start else 1 << width
        remaining = end - start + 1
        while block > remaining:
            block >>= 1
        bits = width - (block.bit_length() - 1)
        cidrs.append(cidr_type.from_prefix_and_bits(start, bits))
        start += block
    return cidrs


def _divide_by(cidr, n: int, combiner_type, width: int) -> list:
    size = cidr.size
    if n <= 0 or n > size:
        raise ValueError(f"cannot divide a network of {size} addresses into {n} parts")
    cidr_type = type(cidr)
    if n == 1:
        return [combiner_type([cidr])]

    d = size // n
    if d * n == size:
        bits = cidr.bits + (n.bit_length() - 1)
        return [
            combiner_type.from_cidrs([cidr_type.from_prefix_and_bits(ip, bits)])
            for ip in range(cidr.first, cidr.last + 1, d)
        ]

    # Consecutive chunks of d addresses; whatever is left over joins the last chunk.
    chunks = size // d
    output = []
    for index in range(chunks):
        start = cidr.first + index * d
        end = start + d - 1 if index < chunks - 1 else cidr.last
        output.append(combiner_type.from_cidrs(_range_to_cidrs(cidr_type, width, start, end)))
    return output


def _sub_networks(cidr, bits: int, width: int, error_type) -> list:
    if not 0 <= bits <= width:
        raise error_type(ErrorKind.INCORRECT_BITS_RANGE)
    cidr_bits = cidr.bits
    if cidr_bits > bits:
        raise ValueError(f"a /{cidr_bits} network has no /{bits} subnetworks")
    if cidr_bits == bits:
        return [cidr]
    step = cidr.size >> (bits - cidr_bits)
    cidr_type = type(cidr)
    return [
        cidr_type.from_prefix_and_bits(ip, bits)
        for ip in range(cidr.first, cidr.last + 1, step)
    ]


def _check(cidr, cidr_type) -> None:
    if not isinstance(cidr, cidr_type):
        raise TypeError(f"expected {cidr_type.__name__}, not {type(cidr).__name__}")


def ipv4_divide_by(cidr: Ipv4Cidr, n: int) -> list[Ipv4CidrCombiner]:
    """Evenly divide an IPv4 CIDR into ``n`` parts."""
    _check(cidr, Ipv4Cidr)
    return _divide_by(cidr, n, Ipv4CidrCombiner, 32)


def ipv4_sub_networks(cidr: Ipv4Cidr, bits: int) -> list[Ipv4Cidr]:
    """Divide an IPv4 CIDR into subnetworks with prefix length ``bits``."""
    _check(cidr, Ipv4Cidr)
    return _sub_networks(cidr, bits, 32, Ipv4CidrError)


def ipv6_divide_by(cidr: Ipv6Cidr, n: int) -> list[Ipv6CidrCombiner]:
    """Evenly divide an IPv6 CIDR into ``n`` parts."""
    _check(cidr, Ipv6Cidr)
    return _divide_by(cidr, n, Ipv6CidrCombiner, 128)


def ipv6_sub_networks(cidr: Ipv6Cidr, bits: int) -> list[Ipv6Cidr]:
    """Divide an IPv6 CIDR into subnetworks with prefix length ``bits``."""
    _check(cidr, Ipv6Cidr)
    return _sub_networks(cidr, bits, 128, Ipv6CidrError)


def _unwrap(cidr):
    if isinstance(cidr, IpCidr):
        return cidr.cidr
    if isinstance(cidr, (Ipv4Cidr, Ipv6Cidr)):
        return cidr
    raise TypeError(f"expected an IpCidr, not {type(cidr).__name__}")


def divide_by(cidr, n: int) -> list[IpCidrCombiner]:
    """Evenly divide a CIDR of either family into ``n`` parts."""
    inner = _unwrap(cidr)
    if isinstance(inner, Ipv4Cidr):
        return [IpCidrCombiner.from_cidrs(part, []) for part in ipv4_divide_by(inner, n)]
    return [IpCidrCombiner.from_cidrs([], part) for part in ipv6_divide_by(inner, n)]


def sub_networks(cidr, bits: int) -> list[IpCidr]:
    """Divide a CIDR of either family into subnetworks with prefix length ``bits``."""
    inner = _unwrap(cidr)
    if isinstance(inner, Ipv4Cidr):
        return [IpCidr(sub) for sub in ipv4_sub_networks(inner, bits)]
    return [IpCidr(sub) for sub in ipv6_sub_networks(inner, bits)]