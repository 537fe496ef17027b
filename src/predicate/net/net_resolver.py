import asyncio
import logging
import socket
import threading
from typing import Any, Dict, List, Tuple

from aiohttp.abc import AbstractResolver


class NetResolver(AbstractResolver):
    """
    Host name resolver that never blocks event loop shutdown.

    ``loop.getaddrinfo`` runs on the loop's default executor, and both ``asyncio.run``
    and interpreter exit wait for that executor's threads.  A hung DNS lookup would
    then hold the caller long after its timeout expired.  Each lookup here runs on its
    own daemon thread instead, so abandoning it after a timeout costs nothing.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger("NetResolver")

    async def lookup(
        self,
        host: str,
        port: int,
        family: int = socket.AF_UNSPEC
    ) -> List[Tuple[Any, ...]]:
        """
        Resolve a host for TCP connections.

        Args:
            host: Host name or address
            port: TCP port
            family: Address family to restrict results to

        Returns:
            Address info tuples as returned by ``socket.getaddrinfo``

        Raises:
            OSError: If the name cannot be resolved
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def deliver(infos: List[Tuple[Any, ...]] | None, error: BaseException | None) -> None:
            if future.done():
                return

            if error is not None:
                future.set_exception(error)

            else:
                future.set_result(infos)

        def resolve_in_thread() -> None:
            infos = None
            error = None
            try:
                infos = socket.getaddrinfo(host, port, family, socket.SOCK_STREAM)

            except Exception as e:  # pylint: disable=broad-exception-caught
                error = e

            try:
                loop.call_soon_threadsafe(deliver, infos, error)

            except RuntimeError:
                # The loop has already closed because the caller gave up waiting
                self._logger.debug("Lookup of %s finished after its caller stopped waiting", host)

        thread = threading.Thread(target=resolve_in_thread, name=f"resolve-{host}", daemon=True)
        thread.start()
        return await future

    async def resolve(self, host: str, port: int = 0, family: int = socket.AF_INET) -> List[Dict[str, Any]]:
        """
        Resolve a host for aiohttp connections.

        Args:
            host: Host name to resolve
            port: Port the connection will use
            family: Address family requested by the connector

        Returns:
            List of host entries in the form aiohttp connectors expect
        """
        infos = await self.lookup(host, port, family)
        return [
            {
                "hostname": host,
                "host": address[0],
                "port": address[1],
                "family": info_family,
                "proto": proto,
                "flags": socket.AI_NUMERICHOST | socket.AI_NUMERICSERV,
            }
            for info_family, _type, proto, _canonname, address in infos
        ]

    async def close(self) -> None:
        """Nothing to release: lookup threads end on their own."""
