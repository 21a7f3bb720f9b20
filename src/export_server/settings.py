from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cycly_export.cycly_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, CyclyConfig


SETTINGS: Optional["Settings"] = None

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    port: int = 4100
    host: str = "0.0.0.0"
    cycly_token: str = ""
    cycly_base_url: str = DEFAULT_BASE_URL
    cycly_branch_id: str = "1"
    cycly_timeout: float = DEFAULT_TIMEOUT
    sort_by_id: bool = False
    log_level: str = "INFO"

    def cycly_config(self) -> CyclyConfig:
        return CyclyConfig(
            token=self.cycly_token,
            base_url=self.cycly_base_url,
            branch_id=self.cycly_branch_id,
            timeout=self.cycly_timeout,
        )


def load_env_file(env_path: Optional[str]) -> None:
    """Load simple KEY=VALUE lines into os.environ. Ignores comments and blank lines."""
    if not env_path:
        return
    p = Path(env_path)
    if not p.is_file():
        return
    for raw in p.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")
        if key:
            os.environ[key] = val


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from the environment, after applying an optional .env file."""
    load_env_file(env_file)
    env = os.environ
    return Settings(
        port=int(env.get("PORT", "4100")),
        host=env.get("HOST", "0.0.0.0"),
        cycly_token=env.get("CYCLY_TOKEN", "").strip(),
        cycly_base_url=env.get("CYCLY_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        cycly_branch_id=env.get("CYCLY_BRANCH_ID", "1").strip() or "1",
        cycly_timeout=float(env.get("CYCLY_TIMEOUT", str(DEFAULT_TIMEOUT))),
        sort_by_id=env.get("CYCLY_SORT_BY_ID", "").strip().lower() in _TRUE,
        log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def init_settings(settings: Optional[Settings] = None) -> Settings:
    global SETTINGS
    SETTINGS = settings if settings is not None else load_settings(os.getenv("ENV_FILE", ".env"))
    return SETTINGS


def get_settings() -> Settings:
    if SETTINGS is None:
        return init_settings()
    return SETTINGS


def configure_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=lvl, format="%(asctime)s %(levelname)s %(message)s")
    for name in ("cycly_export", "export_server"):
        logging.getLogger(name).setLevel(lvl)
