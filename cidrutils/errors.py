"""Errors raised when building or parsing CIDRs."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """What went wrong while building a CIDR."""

    INCORRECT_BITS_RANGE = "incorrect_bits_range"
    INCORRECT_MASK = "incorrect_mask"
    INCORRECT_STRING = "incorrect_string"


_COMMON_MESSAGES = {
    ErrorKind.INCORRECT_BITS_RANGE: "The subnet size (bits) is out of range.",
    ErrorKind.INCORRECT_MASK: "The mask is incorrect.",
}


class CidrError(ValueError):
    """Base class of all CIDR errors; ``kind`` tells which one it is."""

    _string_message = "The CIDR string is incorrect."

    def __init__(self, kind: ErrorKind) -> None:
        self.kind = ErrorKind(kind)
        super().__init__(self._message())

    def _message(self) -> str:
        if self.kind is ErrorKind.INCORRECT_STRING:
            return self._string_message
        return _COMMON_MESSAGES[self.kind]

    def __str__(self) -> str:
        return self._message()


class Ipv4CidrError(CidrError):
    """An IPv4 CIDR could not be built."""

    _string_message = "The CIDR (IPv4) string is incorrect."


class Ipv6CidrError(CidrError):
    """An IPv6 CIDR could not be built."""

    _string_message = "The CIDR (IPv6) string is incorrect."


class IpCidrError(CidrError):
    """A CIDR of either family could not be built."""

    _string_message = "The CIDR string is incorrect."

    @classmethod
    def from_error(cls, error: CidrError) -> IpCidrError:
        """Turn a family-specific error into an ``IpCidrError`` of the same kind."""
        return cls(error.kind)