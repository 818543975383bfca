import asyncio

import httpx

from frontend.app.api_client import ResourceClient
from frontend.app.health import OFFLINE_TEXT, ONLINE_TEXT, HealthMonitor


def _check(scripted):
    async def scenario():
        async with scripted.client() as client:
            monitor = HealthMonitor(client)
            online = await monitor.check()
            return online, monitor.status
    return asyncio.run(scenario())


def test_online(scripted):
    scripted.on('GET', '/health')
    assert _check(scripted) == (True, ONLINE_TEXT)


def test_error_status_is_offline(scripted):
    scripted.on('GET', '/health', status=503)
    assert _check(scripted) == (False, OFFLINE_TEXT)


def test_unreachable_is_offline(scripted):
    scripted.on('GET', '/health', error=httpx.ConnectError)
    assert _check(scripted) == (False, OFFLINE_TEXT)


def test_slow_probe_is_abandoned():
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200)

    async def scenario():
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with ResourceClient('http://testserver', http=http) as client:
            monitor = HealthMonitor(client, timeout=0.05)
            return await monitor.check(), monitor.status

    assert asyncio.run(scenario()) == (False, OFFLINE_TEXT)


def test_periodic_probe_runs_until_stopped(scripted):
    scripted.on('GET', '/health')

    async def scenario():
        async with scripted.client() as client:
            monitor = HealthMonitor(client, interval=0.01)
            task = monitor.start()
            assert monitor.start() is task
            await asyncio.sleep(0.1)
            await monitor.stop()
            count = scripted.count('GET', '/health')
            await asyncio.sleep(0.05)
            return count, scripted.count('GET', '/health'), task.cancelled()

    probes, later, cancelled = asyncio.run(scenario())
    assert probes >= 2
    assert later == probes
    assert cancelled


def test_against_backend(connect):
    async def scenario():
        async with connect(signed_in=False) as client:
            return await HealthMonitor(client).check()

    assert asyncio.run(scenario()) is True
