"""IPv4 and IPv6 CIDR parsing, iteration, combining and splitting."""

__version__ = "0.1.0"

__all__ = ["errors", "ipv4", "ipv6", "ip", "combiner", "separator"]