"""Centralised application settings (dotenv + env overrides)."""
from __future__ import annotations
import os
from pathlib import Path
from dotenv import load_dotenv

ROOT = Path(__file__).parents[1]
load_dotenv(ROOT / ".env", override=False)

class settings:                            # pylint: disable=too-few-public-methods
    CREDENTIALS_PATH = Path(os.getenv("CREDENTIALS_PATH", "~/.credentials/lg.yaml")).expanduser()
    LOG_FILE         = Path(os.getenv("LOG_FILE", "~/.log/lg.log")).expanduser()
    LOG_LEVEL        = os.getenv("LOG_LEVEL", "INFO").upper()
    INFLUX_HOST      = os.getenv("INFLUX_HOST", "localhost")
    INFLUX_PORT      = int(os.getenv("INFLUX_PORT", 8086))
    INFLUX_USER      = os.getenv("INFLUX_USER", "")
    INFLUX_PWD       = os.getenv("INFLUX_PWD", "")
    INFLUX_DATABASE  = os.getenv("INFLUX_DATABASE", "lge")
    MAX_RETRIES      = int(os.getenv("MAX_RETRIES", 5))
    POLL_INTERVAL    = float(os.getenv("POLL_INTERVAL", 1.0))
    MAX_POLLS        = int(os.getenv("MAX_POLLS", 0))
