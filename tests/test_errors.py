import pytest

from cidrutils.errors import (
    CidrError,
    ErrorKind,
    IpCidrError,
    Ipv4CidrError,
    Ipv6CidrError,
)


def test_common_messages():
    assert str(Ipv4CidrError(ErrorKind.INCORRECT_BITS_RANGE)) == (
        "The subnet size (bits) is out of range."
    )
    assert str(Ipv6CidrError(ErrorKind.INCORRECT_MASK)) == "The mask is incorrect."


def test_string_messages_per_family():
    assert str(Ipv4CidrError(ErrorKind.INCORRECT_STRING)) == (
        "The CIDR (IPv4) string is incorrect."
    )
    assert str(Ipv6CidrError(ErrorKind.INCORRECT_STRING)) == (
        "The CIDR (IPv6) string is incorrect."
    )
    assert str(IpCidrError(ErrorKind.INCORRECT_STRING)) == "The CIDR string is incorrect."


@pytest.mark.parametrize("error_class", [Ipv4CidrError, Ipv6CidrError, IpCidrError])
def test_errors_are_value_errors(error_class):
    error = error_class(ErrorKind.INCORRECT_MASK)
    assert isinstance(error, ValueError)
    assert isinstance(error, CidrError)
    assert error.kind is ErrorKind.INCORRECT_MASK
    assert str(error) == "The mask is incorrect."


@pytest.mark.parametrize("kind", list(ErrorKind))
@pytest.mark.parametrize("source", [Ipv4CidrError, Ipv6CidrError])
def test_from_error_keeps_kind(kind, source):
    converted = IpCidrError.from_error(source(kind))
    assert isinstance(converted, IpCidrError)
    assert converted.kind is kind


def test_from_error_uses_general_string_message():
    converted = IpCidrError.from_error(Ipv4CidrError(ErrorKind.INCORRECT_STRING))
    assert str(converted) == "The CIDR string is incorrect."


def test_kind_attribute():
    error = Ipv6CidrError(ErrorKind.INCORRECT_BITS_RANGE)
    assert error.kind is ErrorKind.INCORRECT_BITS_RANGE