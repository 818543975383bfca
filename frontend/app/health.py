"""Periodic backend reachability probe."""
import asyncio
import contextlib
import logging
from typing import Optional

from . import config
from .api_client import ResourceClient
from .errors import ClientError

logger = logging.getLogger(__name__)

ONLINE_TEXT = "backend online ✅"
OFFLINE_TEXT = "backend offline ❌"


class HealthMonitor:
    def __init__(self, client: ResourceClient, interval: float = config.HEALTH_INTERVAL,
                 timeout: float = config.HEALTH_TIMEOUT):
        self.client = client
        self.interval = interval
        self.timeout = timeout
        self.online: Optional[bool] = None
        self.status = ""
        self._task: Optional[asyncio.Task] = None

    async def check(self) -> bool:
        """Probe /health once; anything but a 2xx within the timeout is offline"""
        try:
            await asyncio.wait_for(self.client.send("GET", "/health", timeout=self.timeout), self.timeout)
            online = True
        except (ClientError, asyncio.TimeoutError) as e:
            if self.online is not False:
                logger.warning("Backend unreachable: %s", str(e) or type(e).__name__)
            online = False
        self.online = online
        self.status = ONLINE_TEXT if online else OFFLINE_TEXT
        return online

    async def _run(self) -> None:
        while True:
            await self.check()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        """Start probing now and every interval; needs a running loop"""
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
