"""Configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from cm_calculators.exceptions import ConfigurationError

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

APP_ENV: str = os.getenv("APP_ENV", "production")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# HTTP settings
HTTP_TIMEOUT_SECONDS: float = 30.0
HOLIDAY_API_URL: str = "https://date.nager.at/api/v3/PublicHolidays/{year}/AU"
EXCHANGE_RATE_API_URL: str = "https://api.frankfurter.app/latest"

# CV converter
CV_CONTAINER_NAME: str = os.getenv("CV_CONTAINER_NAME", "converted-cvs")
SAS_EXPIRY_MINUTES: int = 60
DEFAULT_POSITION_TITLE: str = "Senior Automation Test Analyst"
CONVERTED_SUFFIX: str = "cloudmarc"
CONVERT_CV_API_URL: str = os.getenv("CONVERT_CV_API_URL", "http://localhost:8000/api/convert-cv")
DATA_DIR: Path = _base / "data"
ASSETS_DIR: Path = _base / "assets"

# Branding
BRAND_NAME: str = "CloudMarc"
BRAND_TAGLINE: str = "FOSTERING TRUST - CLIENT SUCCESS - QUALITY FOCUS - CONTINUOUS INNOVATION"
BRAND_NAVY: str = "1B3C7C"
BRAND_GREY: str = "666666"
BRAND_ORANGE: str = "F15A29"

# On-cost rates applied to annual income
PAYROLL_TAX_RATE: float = 0.0485
WORKCOVER_RATE: float = 0.0055
LEAVE_MOVEMENTS_RATE: float = 0.0050
LSL_MOVEMENTS_RATE: float = 0.0005

WORKING_DAYS_PER_MONTH: int = 20
PHP_FTE_INCOME_DAYS: int = 240

# Local currency -> AUD, used when the exchange API is unreachable
FALLBACK_EXCHANGE_RATES: dict = {
    "LKR": 0.0054,
    "VND": 0.000062,
    "INR": 0.019,
    "NZD": 0.91,
    "PHP": 0.028,
}

OFFSHORE_COUNTRIES: dict = {
    "Sri Lanka": "LKR",
    "Vietnam": "VND",
    "India": "INR",
    "New Zealand": "NZD",
}

AUSTRALIAN_STATES: List[str] = ["NSW", "VIC", "QLD", "SA", "WA", "TAS", "NT", "ACT"]
DEFAULT_HOURS_PER_DAY: float = 8.0

# Built-in public holidays, used when the holiday API cannot be reached
FALLBACK_PUBLIC_HOLIDAYS: list = [
    ("2025-01-01", "New Year's Day"),
    ("2025-01-27", "Australia Day (observed)"),
    ("2025-04-18", "Good Friday"),
    ("2025-04-19", "Easter Saturday"),
    ("2025-04-21", "Easter Monday"),
    ("2025-04-25", "Anzac Day"),
    ("2025-06-09", "King's Birthday"),
    ("2025-12-25", "Christmas Day"),
    ("2025-12-26", "Boxing Day"),
]

_REQUIRED_CONVERTER_VARS = {
    "form_recognizer_endpoint": "FORM_RECOGNIZER_ENDPOINT",
    "form_recognizer_key": "FORM_RECOGNIZER_KEY",
    "storage_connection_string": "AZURE_STORAGE_CONNECTION_STRING",
}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class ConverterSettings(BaseModel):
    """Settings for the CV conversion service, read once at startup."""

    form_recognizer_endpoint: str = Field(default="", description="Azure Form Recognizer endpoint")
    form_recognizer_key: str = Field(default="", description="Azure Form Recognizer API key")
    storage_connection_string: str = Field(default="", description="Azure Blob Storage connection string")
    container_name: str = Field(default=CV_CONTAINER_NAME)
    app_env: str = Field(default=APP_ENV)
    soffice_binary: str = Field(default="soffice", description="LibreOffice executable")
    local_analysis: bool = Field(default=False, description="Analyze documents with pdfplumber instead of Azure")
    account_managers_path: Path = Field(default=DATA_DIR / "account_managers.json")
    logo_path: Optional[Path] = Field(default=ASSETS_DIR / "logo.png")

    @classmethod
    def from_env(cls) -> "ConverterSettings":
        """Build settings from the process environment (after .env loading)."""
        kwargs = {
            "form_recognizer_endpoint": os.getenv("FORM_RECOGNIZER_ENDPOINT", ""),
            "form_recognizer_key": os.getenv("FORM_RECOGNIZER_KEY", ""),
            "storage_connection_string": os.getenv("AZURE_STORAGE_CONNECTION_STRING", ""),
            "container_name": os.getenv("CV_CONTAINER_NAME", CV_CONTAINER_NAME),
            "app_env": os.getenv("APP_ENV", "production"),
            "soffice_binary": os.getenv("SOFFICE_BINARY", "soffice"),
            "local_analysis": _env_flag("LOCAL_ANALYSIS"),
        }
        if os.getenv("ACCOUNT_MANAGERS_PATH"):
            kwargs["account_managers_path"] = Path(os.environ["ACCOUNT_MANAGERS_PATH"])
        if os.getenv("LOGO_PATH"):
            kwargs["logo_path"] = Path(os.environ["LOGO_PATH"])
        return cls(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    def missing_variables(self) -> List[str]:
        """Names of required environment variables that are unset."""
        missing = []
        for attr, env_name in _REQUIRED_CONVERTER_VARS.items():
            if attr == "form_recognizer_endpoint" or attr == "form_recognizer_key":
                if self.local_analysis:
                    continue
            if not getattr(self, attr):
                missing.append(env_name)
        return missing

    def validate_required(self) -> None:
        """Raise ConfigurationError naming every missing required variable."""
        missing = self.missing_variables()
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: " + ", ".join(missing)
            )
