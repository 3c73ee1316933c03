"""Account manager lookup from the JSON list shipped with the package."""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from cm_calculators.exceptions import ConfigurationError
from cm_calculators.schemas.cv_data import AccountManager
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)


def load_account_managers(path: Path) -> List[AccountManager]:
    """Parse the account manager list; anything but a non-empty list is a configuration error."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError("account managers file must contain a JSON list")
        managers = [AccountManager(**item) for item in data]
    except (OSError, ValueError, TypeError, ValidationError) as e:
        logger.exception("Failed to load account managers from %s", path)
        raise ConfigurationError(f"Failed to load account manager configuration: {e}", cause=e) from e
    if not managers:
        raise ConfigurationError("No valid account managers found in configuration")
    return managers


def resolve_account_manager(managers: List[AccountManager], manager_id: Optional[str]) -> AccountManager:
    """Manager whose id equals manager_id, else the first one."""
    if not managers:
        raise ConfigurationError("No valid account managers found in configuration")
    if manager_id:
        for manager in managers:
            if manager.id == str(manager_id).strip():
                return manager
        logger.warning("Account manager %s not found; using %s", manager_id, managers[0].id)
    return managers[0]
