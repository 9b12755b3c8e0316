"""
IPMI session handshake, run on a dedicated thread pool.

pyghmi establishes its RMCP+ session with blocking socket I/O, so each attempt
is pushed onto a private ThreadPoolExecutor and awaited with a timeout. The
event loop keeps serving the other hosts' probes while a BMC takes its time
answering.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from pyghmi.ipmi import command as ipmi_command

from ..config.config_loader import HandshakeConfig
from ..utils.logger import Logger, get_logger

# (host, port, user, password) -> True when a session was established
HandshakeClient = Callable[[str, int, str, str], bool]


def pyghmi_login(host: str, port: int, user: str, password: str) -> bool:
    """
    Open and close an IPMI session against ``host:port`` with pyghmi.

    Raises whatever pyghmi raises on a failed login; the caller treats any
    exception as a failed handshake.
    """
    cmd = ipmi_command.Command(
        bmc=host, userid=user, password=password, port=port, keepalive=False
    )
    session = cmd.ipmi_session
    try:
        return bool(getattr(session, "logged", 1))
    finally:
        session.logout()


class HandshakeValidator:
    """
    Attempts authenticated IPMI sessions without blocking the event loop.

    Attributes:
        config: Handshake port and timeout
        user: IPMI user name
        password: IPMI password
    """

    def __init__(
        self,
        user: str,
        password: str,
        config: Optional[HandshakeConfig] = None,
        max_threads: int = 32,
        client: Optional[HandshakeClient] = None,
        logger: Optional[Logger] = None,
    ):
        self.user = user
        self.password = password
        self.config = config or HandshakeConfig()
        self.client = client or pyghmi_login
        self.logger = logger or get_logger(__name__)
        self.max_threads = max_threads
        self._executor = ThreadPoolExecutor(
            max_workers=max_threads, thread_name_prefix="ipmi-handshake"
        )
        # Idle pool threads, tracked per event loop
        self._free_threads: Optional[asyncio.Semaphore] = None
        self._free_threads_loop: Optional[asyncio.AbstractEventLoop] = None

    async def attempt(self, address: str) -> bool:
        """
        Try to establish an IPMI session with ``address``.

        Args:
            address: IPv4 address of the candidate BMC

        Returns:
            True on a successful login within the timeout, False otherwise
        """
        loop = asyncio.get_running_loop()
        free_threads = self._free_threads_for(loop)

        # The timeout covers the login itself, not time queued behind
        # abandoned sessions that still hold a pool thread.
        await free_threads.acquire()
        try:
            job = self._executor.submit(
                self.client, address, self.config.port, self.user, self.password
            )
        except BaseException:
            free_threads.release()
            raise
        job.add_done_callback(lambda _: self._release_thread(loop, free_threads))

        try:
            return bool(await asyncio.wait_for(asyncio.wrap_future(job), timeout=self.config.timeout))
        except asyncio.TimeoutError:
            self.logger.debug(f"IPMI handshake with {address} timed out after {self.config.timeout}s")
            return False
        except Exception as e:
            self.logger.debug(f"IPMI handshake with {address} failed: {type(e).__name__}: {e}")
            return False

    def _free_threads_for(self, loop: asyncio.AbstractEventLoop) -> asyncio.Semaphore:
        if self._free_threads is None or self._free_threads_loop is not loop:
            self._free_threads = asyncio.Semaphore(self.max_threads)
            self._free_threads_loop = loop
        return self._free_threads

    @staticmethod
    def _release_thread(loop: asyncio.AbstractEventLoop, free_threads: asyncio.Semaphore) -> None:
        # Runs on the pool thread once the login call has really returned
        if loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(free_threads.release)
        except RuntimeError:
            pass  # loop closed between the check and the call

    def close(self) -> None:
        """
        Stop accepting handshakes.

        Does not interrupt logins already running: concurrent.futures joins
        its worker threads at interpreter exit, so a stuck pyghmi session
        still delays process exit until pyghmi gives up on it.
        """
        self._executor.shutdown(wait=False)

    def __enter__(self) -> "HandshakeValidator":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
