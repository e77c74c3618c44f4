import logging
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit

from aiohttp import web

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_health_app(bot, started_at: Optional[datetime] = None) -> web.Application:
    """Build the health/status application for ``bot``.

    ``bot`` only needs ``is_ready()``, ``guilds``, ``latency`` and
    ``settings.worker_url``; tests pass a stand-in.
    """
    started_at = started_at or _utcnow()
    app = web.Application()

    def uptime() -> int:
        return int((_utcnow() - started_at).total_seconds())

    async def handle_root(request):
        return web.Response(text='OK', content_type='text/plain')

    async def handle_health(request):
        """Fast liveness probe: no Discord or tracker calls."""
        logger.debug("Health check: OK (uptime: %ss)", uptime())
        return web.json_response({
            'status': 'healthy',
            'uptime_seconds': uptime(),
            'timestamp': _utcnow().isoformat(),
        })

    async def handle_status(request):
        ready = bot.is_ready()
        latency = bot.latency
        resp = {
            'status': 'ok' if ready else 'starting',
            'uptime_seconds': uptime(),
            'time': _utcnow().isoformat(),
            'discord_ready': ready,
            'guild_count': len(bot.guilds) if ready else 0,
            # latency is nan until the first heartbeat
            'latency_ms': round(latency * 1000) if ready and latency == latency else None,
            'tracker_host': urlsplit(bot.settings.worker_url).netloc,
        }
        return web.json_response(resp)

    app.add_routes([
        web.get('/', handle_root),
        web.get('/health', handle_health),
        web.get('/status', handle_status),
    ])
    return app


async def start_health_server(bot, port: int) -> Optional[web.AppRunner]:
    """Start the health server on 0.0.0.0:``port``.

    Returns the runner so the caller can clean it up, or None when the
    server could not be started (for example, the port is already in use).
    """
    runner = web.AppRunner(create_health_app(bot))
    await runner.setup()
    site = web.TCPSite(runner, '0.0.0.0', port)
    try:
        await site.start()
    except OSError as e:
        logger.warning("Health server could not bind to 0.0.0.0:%s: %s", port, e)
        await runner.cleanup()
        return None

    logger.info("Health server started on port %s", port)
    logger.info("  - Health check: http://0.0.0.0:%s/health (fast)", port)
    logger.info("  - Status: http://0.0.0.0:%s/status (detailed)", port)
    return runner
