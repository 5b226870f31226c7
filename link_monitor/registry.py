from __future__ import annotations

from pathlib import Path
import yaml
from link_monitor.config import Settings, settings as default_settings
from link_monitor.models import Defaults, EffectiveDefaults, Registry

REGISTRY_PATH = Path(__file__).resolve().parents[1] / "targets.yml"

DEFAULT_TARGETS: tuple[str, ...] = (
    "http://google.com",
    "http://facebook.com",
    "http://stackoverflow.com",
    "http://golang.org",
    "http://amazon.com",
)


def registry_path(cfg: Settings = default_settings) -> Path:
    if cfg.LINK_MONITOR_TARGETS_PATH:
        return Path(cfg.LINK_MONITOR_TARGETS_PATH).expanduser()
    return REGISTRY_PATH


def load_registry(path: Path = REGISTRY_PATH) -> Registry:
    if not path.exists():
        raise FileNotFoundError(f"Missing targets file at {path}")

    data = yaml.safe_load(path.read_text()) or {}
    return Registry.model_validate(data)


def load_registry_if_present(cfg: Settings = default_settings) -> Registry:
    path = registry_path(cfg)
    if not path.exists():
        return Registry()
    return load_registry(path)


def resolve_targets(
    cfg: Settings = default_settings, reg: Registry | None = None
) -> tuple[str, ...]:
    """
    Pick the configured Targets, in order of precedence:
    environment list, targets file, built-in defaults.
    Order is preserved and duplicates are kept as given.
    """
    if cfg.LINK_MONITOR_TARGETS:
        return tuple(cfg.LINK_MONITOR_TARGETS)

    if reg is None:
        reg = load_registry_if_present(cfg)
    if reg.targets:
        return tuple(reg.targets)

    return DEFAULT_TARGETS


def effective_defaults(
    cfg: Settings = default_settings, file_defaults: Defaults | None = None
) -> EffectiveDefaults:
    d = file_defaults or Defaults()
    builtin = EffectiveDefaults()

    def pick(env_value, file_value, fallback):
        if env_value is not None:
            return env_value
        if file_value is not None:
            return file_value
        return fallback

    return EffectiveDefaults(
        delay_s=pick(cfg.RECHECK_DELAY_S, d.delay_s, builtin.delay_s),
        timeout_s=pick(cfg.CHECK_TIMEOUT_S, d.timeout_s, builtin.timeout_s),
        connect_timeout_s=pick(
            cfg.CONNECT_TIMEOUT_S, d.connect_timeout_s, builtin.connect_timeout_s
        ),
    )
