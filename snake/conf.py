"""Application configuration loaded from YAML."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

DEFAULT_CONFIG_DIR = "config"
DEFAULT_CONFIG_NAME = "config"
_EXTENSIONS = (".yaml", ".yml")


class ConfigNotFoundError(FileNotFoundError):
    """No configuration file could be found."""

    def __init__(self, message: str = "config file not found") -> None:
        super().__init__(message)


@dataclass
class AppConfig:
    """General application settings. Durations are in seconds."""

    name: str = ""
    version: str = ""
    mode: str = ""
    pprof_port: str = ""
    url: str = ""
    jwt_secret: str = ""
    jwt_timeout: int = 0
    ssl: bool = False
    ctx_default_timeout: float = 0.0
    csrf: bool = False
    debug: bool = False


@dataclass
class ServerConfig:
    """Listen address and timeouts of a server, in seconds."""

    addr: str = ""
    read_timeout: float = 0.0
    write_timeout: float = 0.0


@dataclass
class MySQLConfig:
    """MySQL connection settings."""

    name: str = ""
    addr: str = ""
    user_name: str = ""
    password: str = ""
    show_log: bool = False
    max_idle_conn: int = 0
    max_open_conn: int = 0
    conn_max_life_time: float = 0.0

    def dsn(self) -> str:
        """The data source name used to open the connection."""
        return (
            f"{self.user_name}:{self.password}@tcp({self.addr})/{self.name}"
            "?charset=utf8mb4&parseTime=true&loc=Local"
        )


@dataclass
class EmailConfig:
    """Outgoing mail settings."""

    host: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    name: str = ""
    address: str = ""
    reply_to: str = ""
    keep_alive: int = 0


@dataclass
class WebConfig:
    """Web site settings."""

    name: str = ""
    domain: str = ""
    secret: str = ""
    static: str = ""


@dataclass
class CookieConfig:
    """Session cookie settings."""

    name: str = ""
    max_age: int = 0
    secure: bool = False
    http_only: bool = False
    domain: str = ""
    secret: str = ""


@dataclass
class QiNiuConfig:
    """Credentials and identifiers of the SMS and storage provider."""

    access_key: str = ""
    secret_key: str = ""
    cdn_url: str = ""
    signature_id: str = ""
    template_id: str = ""


@dataclass
class Config:
    """The whole configuration.

    Sections whose layout belongs to other components are kept as plain mappings.
    """

    app: AppConfig = field(default_factory=AppConfig)
    http: ServerConfig = field(default_factory=ServerConfig)
    grpc: ServerConfig = field(default_factory=ServerConfig)
    logger: dict[str, Any] = field(default_factory=dict)
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    redis: dict[str, Any] = field(default_factory=dict)
    email: EmailConfig = field(default_factory=EmailConfig)
    web: WebConfig = field(default_factory=WebConfig)
    cookie: CookieConfig = field(default_factory=CookieConfig)
    qiniu: QiNiuConfig = field(default_factory=QiNiuConfig)
    jaeger: dict[str, Any] = field(default_factory=dict)
    mongodb: dict[str, Any] = field(default_factory=dict)


CONF = Config()
"""The configuration loaded by :func:`init`."""

_SECTION_TYPES: dict[str, type] = {
    "app": AppConfig,
    "http": ServerConfig,
    "grpc": ServerConfig,
    "mysql": MySQLConfig,
    "email": EmailConfig,
    "web": WebConfig,
    "cookie": CookieConfig,
    "qiniu": QiNiuConfig,
}
_RAW_SECTIONS = frozenset({"logger", "redis", "jaeger", "mongodb"})

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_TRUE = frozenset({"1", "t", "true", "yes", "on"})
_FALSE = frozenset({"0", "f", "false", "no", "off", ""})


def _norm(key: Any) -> str:
    return str(key).replace("_", "").replace("-", "").lower()


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    return int(str(value).strip())


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_duration(value: Any) -> float:
    """Seconds from a number of seconds or a text such as ``"1h30m"`` or ``"500ms"``."""
    if isinstance(value, bool):
        raise ValueError(f"not a duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    try:
        return float(text)
    except ValueError:
        pass
    sign = 1.0
    if text and text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return sign * total


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "str": _to_str,
    "int": _to_int,
    "bool": _to_bool,
    "float": _parse_duration,
}


def _build(cls: type, data: Any, section: str) -> Any:
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise ValueError(f"config section {section!r} must be a mapping")
    given = {_norm(key): value for key, value in data.items()}
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        key = _norm(f.name)
        if key not in given:
            continue
        convert = _CONVERTERS[str(f.type)]
        try:
            kwargs[f.name] = convert(given[key])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"cannot decode {section}.{f.name}: {exc}") from exc
    return cls(**kwargs)


def _find_default() -> Path:
    base = Path(DEFAULT_CONFIG_DIR)
    for ext in _EXTENSIONS:
        candidate = base / f"{DEFAULT_CONFIG_NAME}{ext}"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError()


def load_config(conf_path: str | Path | None = None) -> dict[str, Any]:
    """Read the YAML file at ``conf_path``, or ``config/config.yaml`` when none is given."""
    if conf_path:
        path = Path(conf_path)
        if not path.is_file():
            raise ConfigNotFoundError()
    else:
        path = _find_default()
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("config file must hold a mapping at the top level")
    return dict(data)


def parse_config(data: Mapping[str, Any] | None) -> Config:
    """Build a Config from loaded data; keys match field names ignoring case and underscores."""
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError("config must be a mapping")
    sections = {_norm(key): value for key, value in data.items()}
    kwargs: dict[str, Any] = {}
    for f in fields(Config):
        key = _norm(f.name)
        if key not in sections:
            continue
        value = sections[key]
        if f.name in _RAW_SECTIONS:
            if value is None:
                value = {}
            if not isinstance(value, Mapping):
                raise ValueError(f"config section {f.name!r} must be a mapping")
            kwargs[f.name] = dict(value)
        else:
            kwargs[f.name] = _build(_SECTION_TYPES[f.name], value, f.name)
    return Config(**kwargs)


def init(config_path: str | Path | None = None) -> Config:
    """Load and parse the configuration and make it the global :data:`CONF`."""
    global CONF
    CONF = parse_config(load_config(config_path))
    return CONF