"""
Lightweight presence probes for the IPMI ports.

These checks are a heuristic: any UDP reply or accepted TCP connection on
623/664 counts, whatever service produced it. Unrelated services listening on
the same ports will show up as possible BMCs.
"""

import asyncio
import socket
from typing import Optional

# RMCP header (version 6, no ack, class ASF) + ASF Presence Ping (IANA 4542)
RMCP_PRESENCE_PING = bytes.fromhex("0600ff06000011be80000000")


def _udp_probe_blocking(address: str, port: int, payload: bytes, timeout: float) -> bool:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.settimeout(timeout)
    try:
        sock.sendto(payload, (address, port))
        sock.recvfrom(4096)
        return True
    except OSError:
        return False
    finally:
        sock.close()


async def udp_probe(
    address: str, port: int, timeout: float = 1.0, payload: bytes = RMCP_PRESENCE_PING
) -> bool:
    """
    Send ``payload`` to ``address:port`` over UDP and wait for any reply.

    The socket work runs in the loop's default executor.

    Returns:
        True if any datagram came back within ``timeout``
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _udp_probe_blocking, address, port, payload, timeout)


async def tcp_probe(address: str, port: int, timeout: float = 1.0) -> bool:
    """
    Attempt a TCP connection to ``address:port``.

    Returns:
        True if the connection was accepted within ``timeout``
    """
    writer: Optional[asyncio.StreamWriter] = None
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(address, port), timeout=timeout)
        return True
    except (asyncio.TimeoutError, OSError):
        return False
    finally:
        if writer is not None:
            writer.close()
