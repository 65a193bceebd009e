# chunkjson/settings.py
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional
import os

from .errors import SettingsError
from .fragments import DEFAULT_MAX_DEPTH

ENV_DEBUG = "CHUNKJSON_DEBUG"
ENV_MAX_DEPTH = "CHUNKJSON_MAX_DEPTH"
ENV_FILE = "CHUNKJSON_ENV_FILE"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


def _load_env(env_path: Path) -> Dict[str, str]:
    env: Dict[str, str] = {}
    try:
        text = env_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SettingsError(f"Failed to read env file {env_path}: {e}") from e
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip()
        # Strip optional quotes
        if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
            v = v[1:-1]
        env[k] = v
    return env


def load_env_file(environ: MutableMapping[str, str], env_path: Optional[Path] = None) -> None:
    """Fill environ from a .env file without overwriting already-exported vars."""
    if env_path is None:
        env_path = Path(environ.get(ENV_FILE) or ".env")
    if not env_path.is_file():
        return
    for k, v in _load_env(env_path).items():
        if environ.get(k) is None:
            environ[k] = v


def _parse_bool(name: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise SettingsError(f"{name} must be a boolean, got {raw!r}")


def _parse_depth(name: str, raw: str) -> int:
    try:
        n = int(raw.strip())
    except ValueError:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from None
    if n < 1:
        raise SettingsError(f"{name} must be >= 1, got {n}")
    return n


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    env = os.environ if environ is None else environ
    return {
        "debug": _parse_bool(ENV_DEBUG, env.get(ENV_DEBUG, "")),
        "max_depth": _parse_depth(ENV_MAX_DEPTH, env[ENV_MAX_DEPTH]) if env.get(ENV_MAX_DEPTH) else DEFAULT_MAX_DEPTH,
    }
