"""Bot configuration.

All operator-controlled settings come from the environment (a local `.env`
file is loaded by `app.main()` before this module is consulted). The three
credentials/endpoints the bot cannot run without are required; everything
else has a conservative default.

Required:
    DISCORD_TOKEN   bot token
    CLIENT_ID       application id used to register slash commands
    WORKER_URL      base URL of the player tracker (``/?action=list`` is appended)

Optional:
    DEV_GUILD_ID             sync commands to this guild only (instant refresh)
    TRACKER_TIMEOUT_SECONDS  total timeout for one roster request (default 15)
    LOG_LEVEL                console log level (default INFO)
    HEALTH_SERVER_ENABLED    start the /health HTTP server (default false)
    PORT                     health server port (default 8080)
"""

from dataclasses import dataclass
from typing import Optional, Mapping
import os

DEFAULT_TRACKER_TIMEOUT = 15.0
DEFAULT_HEALTH_PORT = 8080

_TRUTHY = ('1', 'true', 'yes', 'on')


class ConfigError(Exception):
    """Raised when required settings are missing or malformed."""


def _parse_bool(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    discord_token: str
    client_id: int
    worker_url: str
    dev_guild_id: Optional[int] = None
    tracker_timeout: float = DEFAULT_TRACKER_TIMEOUT
    log_level: str = 'INFO'
    health_server_enabled: bool = False
    port: int = DEFAULT_HEALTH_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Every problem is collected first so the operator sees the full list
        in one error instead of fixing variables one restart at a time.
        """
        env = os.environ if environ is None else environ
        problems = []

        def required(name: str) -> str:
            value = (env.get(name) or '').strip()
            if not value:
                problems.append(f'{name} is not set')
            return value

        def as_int(name: str, raw: Optional[str]) -> Optional[int]:
            if raw is None or not str(raw).strip():
                return None
            try:
                return int(str(raw).strip())
            except ValueError:
                problems.append(f'{name} must be an integer, got {raw!r}')
                return None

        token = required('DISCORD_TOKEN')
        client_id_raw = required('CLIENT_ID')
        worker_url = required('WORKER_URL')

        client_id = as_int('CLIENT_ID', client_id_raw) if client_id_raw else None
        dev_guild_id = as_int('DEV_GUILD_ID', env.get('DEV_GUILD_ID'))
        port = as_int('PORT', env.get('PORT'))

        timeout = DEFAULT_TRACKER_TIMEOUT
        timeout_raw = env.get('TRACKER_TIMEOUT_SECONDS')
        if timeout_raw and timeout_raw.strip():
            try:
                timeout = float(timeout_raw)
            except ValueError:
                problems.append(f'TRACKER_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}')
            else:
                if timeout <= 0:
                    problems.append('TRACKER_TIMEOUT_SECONDS must be positive')

        if worker_url and not worker_url.lower().startswith(('http://', 'https://')):
            problems.append(f'WORKER_URL must be an http(s) URL, got {worker_url!r}')

        if problems:
            raise ConfigError('; '.join(problems))

        return cls(
            discord_token=token,
            client_id=client_id,
            worker_url=worker_url,
            dev_guild_id=dev_guild_id,
            tracker_timeout=timeout,
            log_level=(env.get('LOG_LEVEL') or 'INFO').strip().upper(),
            health_server_enabled=_parse_bool(env.get('HEALTH_SERVER_ENABLED')),
            port=port if port is not None else DEFAULT_HEALTH_PORT,
        )
