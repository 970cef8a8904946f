"""A network interface that exchanges packets as UDP datagrams."""

from __future__ import annotations

import logging
import socket
from typing import Callable, Optional, Union

from meshkit.bytes import Bytes

log = logging.getLogger(__name__)

DEFAULT_UDP_PORT = 4242
DEFAULT_UDP_LOCAL_HOST = "0.0.0.0"
DEFAULT_UDP_REMOTE_HOST = "192.168.56.91"

_MAX_DATAGRAM = 65535

IncomingHandler = Callable[[Bytes], None]


def _resolve(host: str, role: str) -> str:
    """Return the dotted IPv4 address for ``host``, looking it up if needed."""
    try:
        return socket.inet_ntoa(socket.inet_aton(host))
    except OSError:
        pass
    try:
        return socket.gethostbyname(host)
    except OSError as exc:
        raise OSError(f"Unable to resolve {role} host {host}") from exc


class UDPInterface:
    """Sends datagrams to one remote address and receives on a bound local port."""

    BITRATE_GUESS = 10 * 1000 * 1000
    HW_MTU = 1064

    def __init__(
        self,
        name: str = "UDPInterface",
        incoming_handler: Optional[IncomingHandler] = None,
    ) -> None:
        self.name = name
        self.incoming_handler = incoming_handler
        self.IN = True
        self.OUT = True
        self.bitrate = self.BITRATE_GUESS
        self.online = False
        self.wifi_ssid = ""
        self.wifi_password = ""
        self.local_host = DEFAULT_UDP_LOCAL_HOST
        self.local_port = DEFAULT_UDP_PORT
        self.remote_host = DEFAULT_UDP_REMOTE_HOST
        self.remote_port = DEFAULT_UDP_PORT
        self._local_address = ""
        self._remote_address = ""
        self._socket: Optional[socket.socket] = None

    def start(
        self,
        wifi_ssid: Optional[str] = None,
        wifi_password: Optional[str] = None,
        port: int = DEFAULT_UDP_PORT,
        local_host: Optional[str] = None,
        remote_host: Optional[str] = None,
    ) -> None:
        """Bind the local socket and go online.

        Raises ``OSError`` if a host cannot be resolved or the socket cannot
        be created or bound; the interface then stays offline.
        """
        self.stop()
        if wifi_ssid is not None:
            self.wifi_ssid = wifi_ssid
        if wifi_password is not None:
            self.wifi_password = wifi_password
        if local_host is not None:
            self.local_host = local_host
        if remote_host is not None:
            self.remote_host = remote_host
        self.local_port = port
        self.remote_port = port
        log.debug("UDPInterface: local %s:%d", self.local_host, self.local_port)
        log.debug("UDPInterface: remote %s:%d", self.remote_host, self.remote_port)

        self._local_address = _resolve(self.local_host, "local")
        self._remote_address = _resolve(self.remote_host, "remote")

        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            log.info(
                "Binding UDP socket to %s:%d", self.local_host, self.local_port
            )
            sock.bind((self._local_address, self.local_port))
            sock.setblocking(False)
        except OSError:
            sock.close()
            log.error("Unable to bind socket to %s:%d", self.local_host, self.local_port)
            raise
        self._socket = sock
        self.online = True

    def stop(self) -> None:
        """Close the socket and go offline; safe to call repeatedly."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        self.online = False

    def loop(self) -> Optional[Bytes]:
        """Receive at most one pending datagram and pass it to the handler.

        Returns the data received, or ``None`` when nothing was waiting.
        """
        if not self.online or self._socket is None:
            return None
        try:
            payload = self._socket.recv(_MAX_DATAGRAM)
        except (BlockingIOError, InterruptedError):
            return None
        if not payload:
            return None
        data = Bytes(payload)
        self._on_incoming(data)
        return data

    def _on_incoming(self, data: Bytes) -> None:
        log.debug("%s.on_incoming: data: %s", self, data.to_hex())
        if self.incoming_handler is not None:
            self.incoming_handler(data)

    def send_outgoing(self, data: Union[Bytes, bytes, bytearray, str]) -> int:
        """Send ``data`` to the remote address; return the bytes sent (0 if offline)."""
        payload = bytes(Bytes(data))
        log.debug("%s.on_outgoing: data: %s", self, payload.hex())
        if not self.online or self._socket is None:
            return 0
        try:
            sent = self._socket.sendto(
                payload, (self._remote_address, self.remote_port)
            )
        except OSError as exc:
            log.error(
                "Could not transmit on %s. The contained exception was: %s", self, exc
            )
            return 0
        log.debug(
            "Sent %d bytes to %s:%d", sent, self.remote_host, self.remote_port
        )
        return sent

    def __str__(self) -> str:
        return f"UDPInterface[{self.name}/{self.local_host}:{self.local_port}]"