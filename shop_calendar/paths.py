from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "SHOP_CALENDAR_HOME"
APP_ENV_CONFIG = "SHOP_CALENDAR_CONFIG"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains shop_calendar/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def app_home() -> Path:
    """
    Base directory holding config/.
    Override with SHOP_CALENDAR_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return project_root()


def config_dir() -> Path:
    return app_home() / "config"


def calendar_config_path() -> Path:
    """
    Calendar config path.

    Resolution order:
    1. SHOP_CALENDAR_CONFIG env var (explicit override)
    2. <app_home>/config/calendar.yaml (default)
    """
    if os.environ.get(APP_ENV_CONFIG):
        return Path(os.environ[APP_ENV_CONFIG]).expanduser().resolve()
    return config_dir() / "calendar.yaml"
