import asyncio
import logging
import ssl
from typing import Dict

import aiohttp
import certifi

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_exceptions import PredicateUsageError
from predicate.predicate_operand import OperandKind
from predicate.predicate_settings import PredicateSettings
from predicate.net.net_resolver import NetResolver


class NetPredicateCategory(PredicateCategory):
    """
    Network reachability predicates.

    Each predicate makes exactly one attempt on a private event loop.  The timeout
    bounds the whole attempt, name resolution included.  Unreachability of any kind
    (timeout, refused connection, DNS or TLS failure) is a false result, never an error.
    """

    def __init__(self, settings: PredicateSettings) -> None:
        """
        Initialize the net category.

        Args:
            settings: Evaluation settings holding probe endpoint and timeouts
        """
        super().__init__()
        self._settings = settings
        self._resolver = NetResolver()
        self._logger = logging.getLogger("NetPredicateCategory")

    def get_name(self) -> str:
        return "net"

    def get_description(self) -> str:
        return "Network reachability checks"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        return dict([
            self._define(
                "online", self._online, [],
                f"A well-known endpoint ({self._settings.online_probe_url}) answers within the probe timeout"
            ),
            self._define(
                "port-open", self._port_open,
                [("host", OperandKind.STRING), ("port", OperandKind.INTEGER), ("timeout-ms", OperandKind.INTEGER)],
                f"A TCP connection to host:port succeeds within timeout-ms "
                f"(default {self._settings.port_open_timeout_ms})",
                optional_operands=1
            ),
        ])

    def _online(self) -> bool:
        return asyncio.run(self._probe_url(self._settings.online_probe_url, self._settings.probe_timeout))

    def _port_open(self, host: str, port: int, timeout_ms: int | None = None) -> bool:
        if not 1 <= port <= 65535:
            raise PredicateUsageError(f"'port' must be between 1 and 65535, got {port}")

        if timeout_ms is None:
            timeout_ms = self._settings.port_open_timeout_ms

        if timeout_ms <= 0:
            raise PredicateUsageError(f"'timeout-ms' must be positive, got {timeout_ms}")

        if not host:
            return False

        return asyncio.run(self._probe_port(host, port, timeout_ms / 1000))

    async def _probe_url(self, url: str, timeout: float) -> bool:
        """
        Send a single HEAD request and report whether any response arrived in time.

        Args:
            url: Endpoint to contact
            timeout: Overall limit in seconds

        Returns:
            True if the endpoint responded with any status
        """
        try:
            # The outer bound also covers name resolution and TLS setup
            return await asyncio.wait_for(self._send_head(url, timeout), timeout=timeout)

        except asyncio.TimeoutError:
            self._logger.debug("Probe of %s timed out after %.1fs", url, timeout)
            return False

        except (aiohttp.ClientError, OSError, ValueError) as e:
            self._logger.debug("Probe of %s failed: %s", url, str(e))
            return False

    async def _send_head(self, url: str, timeout: float) -> bool:
        """Send the HEAD request for the online probe."""
        ssl_context = ssl.create_default_context(cafile=certifi.where())

        async with aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=ssl_context, resolver=self._resolver),
            timeout=aiohttp.ClientTimeout(total=timeout)
        ) as session:
            async with session.head(url, allow_redirects=False) as response:
                self._logger.debug("Probe of %s answered with status %d", url, response.status)
                return True

    async def _probe_port(self, host: str, port: int, timeout: float) -> bool:
        """
        Resolve the host, then open and immediately close a single TCP connection.

        Args:
            host: Host name or address
            port: TCP port
            timeout: Limit in seconds covering name resolution and connecting

        Returns:
            True if a connection was established in time
        """
        try:
            return await asyncio.wait_for(self._connect(host, port), timeout=timeout)

        except asyncio.TimeoutError:
            self._logger.debug("Connection to %s:%d timed out after %.3fs", host, port, timeout)
            return False

        except (OSError, ValueError) as e:
            self._logger.debug("Connection to %s:%d failed: %s", host, port, str(e))
            return False

    async def _connect(self, host: str, port: int) -> bool:
        """Try each resolved address in turn until one accepts a connection."""
        infos = await self._resolver.lookup(host, port)

        for family, _type, _proto, _canonname, address in infos:
            try:
                _reader, writer = await asyncio.open_connection(address[0], address[1], family=family)

            except OSError as e:
                self._logger.debug("Connection to %s (%s) failed: %s", host, address[0], str(e))
                continue

            writer.close()
            try:
                await writer.wait_closed()

            except OSError as e:
                self._logger.debug("Error closing connection to %s:%d: %s", host, port, str(e))

            return True

        return False
