# cidrutils

Data structures and helpers for IPv4 and IPv6 CIDR blocks:

- parse CIDR strings, including masks written as dotted quads (`192.168.1.0/255.255.255.0`)
  and shortened IPv4 prefixes (`192.168` means `192.168/16`)
- check whether an address falls inside a block
- iterate over every address of a block, forwards or backwards
- combine many blocks into the smallest set of supernetworks
- split a block into equal parts or into subnetworks of a given prefix length

The package depends only on the standard library. It is a library only; it
has no command-line tool.

## Installation

```
pip install cidrutils
```

## Modules

| Module                 | What it holds                                                        |
|------------------------|----------------------------------------------------------------------|
| `cidrutils.ipv4`       | `Ipv4Cidr`, and the helpers `get_mask`, `mask_to_bits`, `to_u32`     |
| `cidrutils.ipv6`       | `Ipv6Cidr`, and `get_mask`, `mask_to_bits`, `to_u128`, `u128_to_u16_array`, `u16_array_to_u128` |
| `cidrutils.ip`         | `IpCidr`, which holds a CIDR of either family                        |
| `cidrutils.combiner`   | `Ipv4CidrCombiner`, `Ipv6CidrCombiner`, `IpCidrCombiner`             |
| `cidrutils.separator`  | `ipv4_divide_by`, `ipv4_sub_networks`, `ipv6_divide_by`, `ipv6_sub_networks`, `divide_by`, `sub_networks` |
| `cidrutils.errors`     | `ErrorKind`, `CidrError`, `Ipv4CidrError`, `Ipv6CidrError`, `IpCidrError` |

## Parsing

```python
from cidrutils.ip import IpCidr

IpCidr.is_ip_cidr("192.168.1.0/24")              # True
IpCidr.is_ip_cidr("192.168.1.0/33")              # False
IpCidr.is_ip_cidr("192.168.1.0/255.255.254.0")   # True
IpCidr.is_ip_cidr("192.168.1.0/255.255.255.1")   # False
IpCidr.is_ip_cidr("192")                         # True, same as 192/8
IpCidr.is_ip_cidr("192/16")                      # False
IpCidr.is_ip_cidr("2001:4f8:3:ba::/64")          # True
IpCidr.is_ip_cidr("::ffff:1.2.3.0/129")          # False

cidr = IpCidr.parse("192.168.1.1/24")
str(cidr)                                        # '192.168.1.0/24'
```

`IpCidr.parse` tries IPv4 first and IPv6 second. `Ipv4Cidr.parse` and
`Ipv6Cidr.parse` parse one family only. Host bits are cleared, so
`192.168.1.1/24` becomes `192.168.1.0/24`.

Strings that do not parse raise a `CidrError` subclass from `cidrutils.errors`
(`Ipv4CidrError`, `Ipv6CidrError` or `IpCidrError`, all of them `ValueError`s).
Its `kind` is an `ErrorKind`: `INCORRECT_BITS_RANGE`, `INCORRECT_MASK` or
`INCORRECT_STRING`.

CIDRs can also be built directly:

```python
from cidrutils.ipv4 import Ipv4Cidr
from cidrutils.ipv6 import Ipv6Cidr

Ipv4Cidr.from_prefix_and_bits([192, 168, 51, 1], 24)         # 192.168.51.0/24
Ipv4Cidr.from_prefix_and_mask([192, 168, 43, 1], [255, 255, 255, 128])
Ipv6Cidr.from_prefix_and_bits([0, 0, 0, 0, 0, 65535, 65535, 0], 112)
```

## Membership, bounds and size

```python
from ipaddress import ip_address
from cidrutils.ip import IpCidr
from cidrutils.ipv4 import Ipv4Cidr

cidr = IpCidr.parse("192.168.51.0/24")
ip_address("192.168.51.103") in cidr   # True
ip_address("192.168.50.103") in cidr   # False
"192.168.51.7" in cidr                 # True; strings are parsed as addresses
ip_address("::1") in cidr              # False; other families never match

v4 = Ipv4Cidr.parse("192.168.51.0/24")
v4.contains([192, 168, 51, 103])       # True
v4.bits                                # 24
v4.size                                # 256
str(v4.mask_address)                   # '255.255.255.0'
str(v4.last_address)                   # '192.168.51.255'
```

`bits`, `size`, `first`, `last` and the `*_bytes`, `*_segments` and
`*_address` members are properties. `first` and `last` are integers.

`Ipv4Cidr.contains` accepts an integer, four bytes or an `IPv4Address`;
`Ipv6Cidr.contains` accepts an integer, sixteen bytes, eight 16-bit segments or
an `IPv6Address`. With the `in` operator an unusable value gives `False`
instead of an error.

IPv6 CIDRs print every segment in upper-case hex:
`str(Ipv6Cidr.parse("::ffff:0.128.0.128"))` is `'0:0:0:0:0:FFFF:80:80/128'`.

## Ordering

CIDRs of one family order by prefix, then by prefix length. `IpCidr` puts every
IPv4 CIDR before every IPv6 CIDR, and compares equal to the family-specific CIDR
it holds.

## Iteration

```python
from cidrutils.ipv4 import Ipv4Cidr

cidr = Ipv4Cidr.parse("192.168.0.0/30")
list(cidr.iter_addresses())   # 192.168.0.0 … 192.168.0.3
next(reversed(cidr))          # integer value of 192.168.0.3
cidr[2]                       # integer value of 192.168.0.2
```

Iterating an `Ipv4Cidr` or `Ipv6Cidr` gives integers; `iter_bytes`,
`iter_segments` (IPv6) and `iter_addresses` give other forms. Iterating an
`IpCidr` gives `ipaddress` objects.

## Combining

```python
from cidrutils.combiner import Ipv4CidrCombiner
from cidrutils.ipv4 import Ipv4Cidr

combiner = Ipv4CidrCombiner()
for text in ("192.168.51.100", "192.168.51.101", "192.168.51.102", "192.168.51.103"):
    combiner.push(Ipv4Cidr.parse(text))

len(combiner)                      # 1
str(combiner[0])                   # '192.168.51.100/30'
combiner.size                      # 4
[192, 168, 51, 102] in combiner    # True
str(combiner)                      # '[192.168.51.100/30]'
```

A combiner keeps its CIDRs sorted: a pushed CIDR already covered is dropped,
CIDRs it covers are removed, and adjacent halves are merged into their
supernetwork. `from_cidrs` wraps a list that is already combined, without
checking it.

`IpCidrCombiner` accepts `IpCidr` values of both families and keeps them apart;
see `ipv4_cidrs`, `ipv6_cidrs`, `ipv4_size` and `ipv6_size`.

## Splitting

```python
from cidrutils.ipv4 import Ipv4Cidr
from cidrutils.separator import ipv4_divide_by, ipv4_sub_networks

cidr = Ipv4Cidr.parse("192.168.56.0/24")

[str(part) for part in ipv4_divide_by(cidr, 4)]
# ['[192.168.56.0/26]', '[192.168.56.64/26]', '[192.168.56.128/26]', '[192.168.56.192/26]']

[part.size for part in ipv4_divide_by(cidr, 5)]
# [51, 51, 51, 51, 52]

[str(sub) for sub in ipv4_sub_networks(cidr, 26)]
# ['192.168.56.0/26', '192.168.56.64/26', '192.168.56.128/26', '192.168.56.192/26']
```

`*_divide_by` returns one combiner per part; when the block does not divide
evenly, the leftover addresses join the last part. `divide_by` and
`sub_networks` take an `IpCidr` of either family and return `IpCidrCombiner`
and `IpCidr` values.

Impossible splits raise `ValueError`: dividing into zero parts or into more
parts than the block has addresses, or asking for subnetworks shorter than the
block's own prefix. A prefix length outside the family's range raises
`Ipv4CidrError` or `Ipv6CidrError` with kind `INCORRECT_BITS_RANGE`.