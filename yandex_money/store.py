"""
On-disk token storage for the command-line client.

The token lives in ``config.toml`` under the user's config directory
(``~/.config/yandex-money-cli`` on Linux) as a single ``token`` key.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Mapping, Optional

import platformdirs
import tomli_w

from .errors import YandexMoneyConfigError

logger = logging.getLogger(__name__)

APP_NAME = "yandex-money-cli"
CONFIG_FILE = "config.toml"
TOKEN_ENV = "TOKEN"


def config_location() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILE


def load_token(path: Optional[Path] = None) -> Optional[str]:
    """
    Token stored on disk, or None when the file is absent or holds no token.

    A file that exists but cannot be parsed raises ``YandexMoneyConfigError``.
    """
    path = path or config_location()
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise YandexMoneyConfigError(f"Cannot read {path}: {e}") from e
    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise YandexMoneyConfigError(f"Malformed token file {path}: {e}") from e
    token = data.get("token")
    return token if isinstance(token, str) and token else None


def save_token(token: str, path: Optional[Path] = None) -> Path:
    """
    Write the token file, readable by the owner only from the moment it
    exists. Filesystem failures raise ``YandexMoneyConfigError``.
    """
    path = path or config_location()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # O_CREAT's mode does not apply to a file that already exists
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(tomli_w.dumps({"token": token}))
    except OSError as e:
        raise YandexMoneyConfigError(f"Cannot write {path}: {e}") from e
    logger.info("Token saved to %s", path)
    return path


def resolve_token(env: Optional[Mapping[str, str]] = None, path: Optional[Path] = None) -> Optional[str]:
    """``TOKEN`` from the environment, else the token file, else None."""
    env = os.environ if env is None else env
    token = env.get(TOKEN_ENV)
    if token:
        return token
    return load_token(path)


__all__ = ["config_location", "load_token", "save_token", "resolve_token", "TOKEN_ENV"]
