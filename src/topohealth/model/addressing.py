"""IP addressing utilities.

Derives the host addresses of point-to-point tunnel subnets so they
can be matched against IS-IS adjacency interface addresses.
"""

from ipaddress import AddressValueError, IPv4Network, NetmaskValueError


def slash31_addresses(tunnel_net: str | None) -> list[str]:
    """Get both host addresses of a /31 point-to-point subnet.

    The base address has its final bit cleared, the peer has it set,
    so an odd base such as ``10.0.0.5/31`` yields ``.4`` and ``.5``.

    Args:
        tunnel_net: Subnet string such as ``"172.16.0.0/31"``

    Returns:
        ``[low, high]`` as strings, or ``[]`` for missing, malformed
        or non-/31 input

    Example:
        >>> slash31_addresses("172.16.0.0/31")
        ['172.16.0.0', '172.16.0.1']
    """
    if not tunnel_net:
        return []

    base, sep, mask = tunnel_net.strip().partition("/")
    if not sep or mask != "31":
        return []

    try:
        network = IPv4Network(f"{base}/31", strict=False)
    except (AddressValueError, NetmaskValueError, ValueError):
        return []

    low = network.network_address
    return [str(low), str(low + 1)]
