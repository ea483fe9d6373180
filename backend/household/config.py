import json
import logging
import os
from pathlib import Path
from pydantic import BaseModel, ValidationError
from datetime import datetime

from .models.expense import Participant

logger = logging.getLogger(__name__)

# Config directory: use HOUSEHOLD_DATA_DIR env var if set (e.g. /data in Docker),
# otherwise fall back to ~/.config/household for local dev
_data_dir = os.environ.get("HOUSEHOLD_DATA_DIR")
CONFIG_DIR = Path(_data_dir) if _data_dir else Path.home() / ".config" / "household"
IDENTITY_FILE = CONFIG_DIR / "identity.json"

# Partition shared by both participants; one ledger can hold several budgets
BUDGET_ID = os.environ.get("HOUSEHOLD_BUDGET_ID", "shared")


class Identity(BaseModel):
    """Which of the two participants is using this client."""
    participant: Participant
    chosen_at: datetime


def ensure_config_dir() -> None:
    """Ensure the config directory exists."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def get_ledger_path() -> Path:
    """Path of the SQLite ledger, overridable with HOUSEHOLD_LEDGER."""
    override = os.environ.get("HOUSEHOLD_LEDGER")
    if override:
        return Path(override)
    ensure_config_dir()
    return CONFIG_DIR / "household.db"


def load_identity() -> Identity | None:
    """Load the participant chosen on this client, if any."""
    if not IDENTITY_FILE.exists():
        return None

    try:
        with open(IDENTITY_FILE, "r") as f:
            return Identity(**json.load(f))
    except (json.JSONDecodeError, ValidationError, TypeError):
        logger.warning("Ignoring unreadable identity file %s", IDENTITY_FILE)
        return None


def save_identity(participant: Participant) -> Identity:
    """Remember the participant for subsequent writes."""
    ensure_config_dir()
    identity = Identity(participant=participant, chosen_at=datetime.utcnow())
    with open(IDENTITY_FILE, "w") as f:
        json.dump(identity.model_dump(mode="json"), f, indent=2)
    return identity


def clear_identity() -> None:
    """Forget the chosen participant."""
    if IDENTITY_FILE.exists():
        IDENTITY_FILE.unlink()


def current_participant() -> Participant | None:
    identity = load_identity()
    return identity.participant if identity else None
