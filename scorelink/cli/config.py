"""
Configuration management for scorelink CLI.

Handles:
- .scorelink INI file reading/writing
- Relay and player resolution (global option -> config file -> default)
"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any

from scorelink.utils.constants import (
    DEFAULT_RELAY_HOST, DEFAULT_RELAY_PORT, DEFAULT_PLAYER_NUMBER,
    VALID_PLAYER_NUMBERS, ENV_FILE_NAME, ENV_DIR_NAME,
)
from scorelink.utils.exceptions import ValidationError


# ============================================================================
# Resolved Configuration
# ============================================================================

@dataclass(frozen=True)
class ClientConfig:
    """Where to find the relay and which player we are."""
    host: str = DEFAULT_RELAY_HOST
    port: int = DEFAULT_RELAY_PORT
    player_number: int = DEFAULT_PLAYER_NUMBER

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


# ============================================================================
# Global Options (set by CLI callback)
# ============================================================================

class GlobalOptions:
    """Global CLI options storage."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._host = None
            cls._instance._port = None
            cls._instance._player = None
        return cls._instance

    @property
    def host(self) -> Optional[str]:
        return self._host

    @property
    def port(self) -> Optional[int]:
        return self._port

    @property
    def player(self) -> Optional[int]:
        return self._player

    def set(self, host: str = None, port: int = None, player: int = None):
        """Set global options."""
        self._host = host
        self._port = port
        self._player = player

    def get(self) -> Dict[str, Any]:
        """Get all global options as dict."""
        return {
            'host': self._host,
            'port': self._port,
            'player': self._player,
        }

    def clear(self):
        """Clear all global options."""
        self._host = None
        self._port = None
        self._player = None


# Singleton instance
GLOBAL_OPTIONS = GlobalOptions()


# ============================================================================
# Config File Management
# ============================================================================

def _parse_port(value, source: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid relay port {value!r} in {source}") from None
    if not 0 < port < 65536:
        raise ValidationError(f"Relay port {port} out of range in {source}")
    return port


def _parse_player(value, source: str) -> int:
    try:
        player = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid player number {value!r} in {source}") from None
    if player not in VALID_PLAYER_NUMBERS:
        raise ValidationError(
            f"Player number {player} in {source} must be one of {VALID_PLAYER_NUMBERS}"
        )
    return player


class ConfigManager:
    """
    Manages the .scorelink configuration file (INI format).

    File format:
        [RELAY]
        HOST=relay.example.net
        PORT=13000

        [PLAYER]
        NUMBER=2
    """

    @staticmethod
    def find_env_file(start: Optional[str] = None) -> Optional[str]:
        """Find .scorelink (or .vscode/.scorelink) by searching up from start.

        Handles symlinks properly on all platforms.
        """
        current = os.path.realpath(start or os.getcwd())

        visited = set()
        while current not in visited:
            visited.add(current)
            for env_path in (
                os.path.join(current, ENV_FILE_NAME),
                os.path.join(current, ENV_DIR_NAME, ENV_FILE_NAME),
            ):
                if os.path.isfile(env_path):
                    return env_path
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        return None

    @staticmethod
    def read(env_path: str) -> dict:
        """
        Read INI-style .scorelink file.

        Returns:
            dict with structure:
            {
                'host': 'relay.example.net' or None,
                'port': 13000 or None,
                'player': 2 or None
            }
        """
        result = {
            'host': None,
            'port': None,
            'player': None,
        }

        if not os.path.exists(env_path):
            return result

        try:
            with open(env_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ValidationError(f"Cannot read config file {env_path}: {e}") from e

        current_section = None

        for line in content.splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith(('#', ';')):
                continue

            # Section header
            if line.startswith('[') and line.endswith(']'):
                current_section = line[1:-1].strip().upper()
                continue

            # Key=Value pairs
            if '=' in line and current_section:
                key, value = line.split('=', 1)
                key = key.strip().upper()
                value = value.strip()

                if current_section == 'RELAY':
                    if key == 'HOST':
                        result['host'] = value or None
                    elif key == 'PORT':
                        result['port'] = _parse_port(value, env_path)
                elif current_section == 'PLAYER':
                    if key == 'NUMBER':
                        result['player'] = _parse_player(value, env_path)

        return result

    @staticmethod
    def write(env_path: str, host: Optional[str] = None, port: Optional[int] = None,
              player: Optional[int] = None):
        """
        Write INI-style .scorelink file. Values left as None are omitted.
        """
        lines = []

        if host or port:
            lines.append('[RELAY]')
            if host:
                lines.append(f'HOST={host}')
            if port:
                lines.append(f'PORT={_parse_port(port, "arguments")}')
            lines.append('')

        if player:
            lines.append('[PLAYER]')
            lines.append(f'NUMBER={_parse_player(player, "arguments")}')
            lines.append('')

        parent = os.path.dirname(env_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        with open(env_path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))

    @staticmethod
    def update(env_path: str, host: Optional[str] = None, port: Optional[int] = None,
               player: Optional[int] = None):
        """Merge the given values into the existing file."""
        current = ConfigManager.read(env_path)
        ConfigManager.write(
            env_path,
            host=host if host is not None else current['host'],
            port=port if port is not None else current['port'],
            player=player if player is not None else current['player'],
        )


# ============================================================================
# Resolution
# ============================================================================

def resolve_config(host: Optional[str] = None, port: Optional[int] = None,
                   player: Optional[int] = None, env_path: Optional[str] = None) -> ClientConfig:
    """
    Resolve the client configuration.

    Priority per value:
    1. Explicit argument
    2. Global CLI option (--host / --port / --player)
    3. .scorelink file (env_path, or discovered from the current directory)
    4. Built-in default
    """
    options = GLOBAL_OPTIONS.get()

    if env_path is None:
        env_path = ConfigManager.find_env_file()
    file_values = ConfigManager.read(env_path) if env_path else {'host': None, 'port': None, 'player': None}

    def pick(explicit, key, default):
        for candidate in (explicit, options[key], file_values[key]):
            if candidate is not None:
                return candidate
        return default

    return ClientConfig(
        host=pick(host, 'host', DEFAULT_RELAY_HOST),
        port=_parse_port(pick(port, 'port', DEFAULT_RELAY_PORT), "options"),
        player_number=_parse_player(pick(player, 'player', DEFAULT_PLAYER_NUMBER), "options"),
    )
