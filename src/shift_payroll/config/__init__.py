import importlib
import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "shift_payroll.config.production"

    if env in {"test", "testing"}:
        return "shift_payroll.config.testing"

    return "shift_payroll.config.development"


@dataclass(frozen=True)
class EngineSettings:
    legacy_standard_hours: Decimal
    normal_work_hours_per_day: Decimal
    normal_work_hours_per_month: Decimal
    debug: bool = False


def load_settings() -> EngineSettings:
    """Read the active settings module; a local .env file is honoured but never overrides the environment."""
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    return EngineSettings(
        legacy_standard_hours=Decimal(str(settings.LEGACY_STANDARD_HOURS)),
        normal_work_hours_per_day=Decimal(str(settings.NORMAL_WORK_HOURS_PER_DAY)),
        normal_work_hours_per_month=Decimal(str(settings.NORMAL_WORK_HOURS_PER_MONTH)),
        debug=bool(settings.DEBUG),
    )
