import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    LINK_MONITOR_TARGETS: tuple[str, ...] = tuple(
        target.strip()
        for target in os.getenv("LINK_MONITOR_TARGETS", "").split(",")
        if target.strip()
    )
    LINK_MONITOR_TARGETS_PATH: str | None = os.getenv("LINK_MONITOR_TARGETS_PATH")
    RECHECK_DELAY_S: float | None = _optional_float("RECHECK_DELAY_S")
    CHECK_TIMEOUT_S: float | None = _optional_float("CHECK_TIMEOUT_S")
    CONNECT_TIMEOUT_S: float | None = _optional_float("CONNECT_TIMEOUT_S")
    MAX_IN_FLIGHT: int = int(os.getenv("MAX_IN_FLIGHT", 0))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
