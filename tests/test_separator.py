import pytest

from cidrutils.errors import Ipv4CidrError, Ipv6CidrError
from cidrutils.ip import IpCidr
from cidrutils.ipv4 import Ipv4Cidr
from cidrutils.ipv6 import Ipv6Cidr
from cidrutils.separator import (
    divide_by,
    ipv4_divide_by,
    ipv4_sub_networks,
    ipv6_divide_by,
    ipv6_sub_networks,
    sub_networks,
)


def test_ipv4_divide_by_four():
    cidr = Ipv4Cidr.parse("192.168.56.0/24")
    result = ipv4_divide_by(cidr, 4)
    assert len(result) == 4
    assert [part.size for part in result] == [64, 64, 64, 64]
    assert [str(part) for part in result] == [
        "[192.168.56.0/26]",
        "[192.168.56.64/26]",
        "[192.168.56.128/26]",
        "[192.168.56.192/26]",
    ]


def test_ipv4_divide_by_five():
    cidr = Ipv4Cidr.parse("192.168.56.0/24")
    result = ipv4_divide_by(cidr, 5)
    assert len(result) == 5
    assert [part.size for part in result] == [51, 51, 51, 51, 52]
    assert [str(part) for part in result] == [
        "[192.168.56.0/27, 192.168.56.32/28, 192.168.56.48/31, 192.168.56.50/32]",
        "[192.168.56.51/32, 192.168.56.52/30, 192.168.56.56/29, 192.168.56.64/27, "
        "192.168.56.96/30, 192.168.56.100/31]",
        "[192.168.56.102/31, 192.168.56.104/29, 192.168.56.112/28, 192.168.56.128/28, "
        "192.168.56.144/29, 192.168.56.152/32]",
        "[192.168.56.153/32, 192.168.56.154/31, 192.168.56.156/30, 192.168.56.160/27, "
        "192.168.56.192/29, 192.168.56.200/30]",
        "[192.168.56.204/30, 192.168.56.208/28, 192.168.56.224/27]",
    ]


def test_ipv4_divide_whole_space():
    cidr = Ipv4Cidr.parse("0.0.0.0/0")
    one = ipv4_divide_by(cidr, 1)
    assert len(one) == 1
    assert one[0].size == 2**32
    two = ipv4_divide_by(cidr, 2)
    assert len(two) == 2
    assert [part.size for part in two] == [2**31, 2**31]
    assert [str(part) for part in two] == ["[0.0.0.0/1]", "[128.0.0.0/1]"]


def test_ipv4_divide_covers_every_address():
    cidr = Ipv4Cidr.parse("10.0.0.0/24")
    result = ipv4_divide_by(cidr, 7)
    covered = sorted(ip for part in result for sub in part for ip in sub)
    assert covered == list(cidr)


@pytest.mark.parametrize("n", [0, 257])
def test_ipv4_divide_by_invalid_count(n):
    with pytest.raises(ValueError):
        ipv4_divide_by(Ipv4Cidr.parse("192.168.56.0/24"), n)


def test_ipv4_sub_networks():
    cidr = Ipv4Cidr.parse("192.168.56.0/24")
    result = ipv4_sub_networks(cidr, 26)
    assert len(result) == 4
    assert [sub.size for sub in result] == [64, 64, 64, 64]
    assert [str(sub) for sub in result] == [
        "192.168.56.0/26",
        "192.168.56.64/26",
        "192.168.56.128/26",
        "192.168.56.192/26",
    ]


def test_ipv4_sub_networks_same_bits():
    cidr = Ipv4Cidr.parse("192.168.56.0/24")
    assert ipv4_sub_networks(cidr, 24) == [cidr]


def test_ipv4_sub_networks_shorter_bits_fails():
    with pytest.raises(ValueError):
        ipv4_sub_networks(Ipv4Cidr.parse("192.168.56.0/24"), 23)


def test_ipv4_sub_networks_bits_out_of_range():
    with pytest.raises(Ipv4CidrError):
        ipv4_sub_networks(Ipv4Cidr.parse("192.168.56.0/24"), 33)


def test_ipv6_divide_by_four():
    cidr = Ipv6Cidr.parse("0:0:0:0:0:FFFF:FFFF:0/112")
    result = ipv6_divide_by(cidr, 4)
    assert len(result) == 4
    assert [part.size for part in result] == [16384] * 4


def test_ipv6_divide_by_five():
    cidr = Ipv6Cidr.parse("0:0:0:0:0:FFFF:FFFF:0/112")
    result = ipv6_divide_by(cidr, 5)
    assert len(result) == 5
    assert [part.size for part in result] == [13107, 13107, 13107, 13107, 13108]


def test_ipv6_divide_whole_space():
    cidr = Ipv6Cidr.parse("::0/0")
    one = ipv6_divide_by(cidr, 1)
    assert len(one) == 1
    assert one[0].size == 340282366920938463463374607431768211456
    two = ipv6_divide_by(cidr, 2)
    assert len(two) == 2
    assert [part.size for part in two] == [2**127, 2**127]


def test_ipv6_divide_whole_space_uneven_covers_all():
    result = ipv6_divide_by(Ipv6Cidr.parse("::/0"), 3)
    assert len(result) == 3
    assert sum(part.size for part in result) == 2**128


def test_ipv6_divide_by_invalid_count():
    with pytest.raises(ValueError):
        ipv6_divide_by(Ipv6Cidr.parse("::1/127"), 3)


def test_ipv6_sub_networks():
    cidr = Ipv6Cidr.parse("0:0:0:0:0:FFFF:FFFF:0/112")
    result = ipv6_sub_networks(cidr, 114)
    assert len(result) == 4
    assert [sub.size for sub in result] == [16384] * 4
    assert str(result[1]) == "0:0:0:0:0:FFFF:FFFF:4000/114"


def test_ipv6_sub_networks_errors():
    cidr = Ipv6Cidr.parse("0:0:0:0:0:FFFF:FFFF:0/112")
    with pytest.raises(ValueError):
        ipv6_sub_networks(cidr, 100)
    with pytest.raises(Ipv6CidrError):
        ipv6_sub_networks(cidr, 129)


def test_ip_divide_by():
    cidr = IpCidr.parse("192.168.56.0/24")
    assert len(divide_by(cidr, 4)) == 4
    assert len(divide_by(cidr, 5)) == 5

    cidr = IpCidr.parse("0.0.0.0/0")
    assert len(divide_by(cidr, 1)) == 1
    assert len(divide_by(cidr, 2)) == 2

    cidr = IpCidr.parse("0:0:0:0:0:FFFF:FFFF:0/112")
    assert len(divide_by(cidr, 4)) == 4
    assert len(divide_by(cidr, 5)) == 5

    cidr = IpCidr.parse("::0/0")
    assert len(divide_by(cidr, 1)) == 1
    assert len(divide_by(cidr, 2)) == 2


def test_ip_divide_by_keeps_family():
    v4 = divide_by(IpCidr.parse("192.168.56.0/24"), 2)
    assert [part.ipv4_size for part in v4] == [128, 128]
    assert all(part.ipv6_cidrs == () for part in v4)
    v6 = divide_by(IpCidr.parse("::/126"), 2)
    assert [part.ipv6_size for part in v6] == [2, 2]
    assert all(part.ipv4_cidrs == () for part in v6)


def test_ip_sub_networks():
    result = sub_networks(IpCidr.parse("192.168.56.0/24"), 26)
    assert len(result) == 4
    assert result[3] == IpCidr.parse("192.168.56.192/26")

    result = sub_networks(IpCidr.parse("0:0:0:0:0:FFFF:FFFF:0/112"), 114)
    assert len(result) == 4
    assert [sub.size for sub in result] == [16384] * 4


def test_ip_sub_networks_rejects_other_types():
    with pytest.raises(TypeError):
        sub_networks("192.168.56.0/24", 26)