import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    # Directory holding storage.json; tests point this at tmp_path.
    STATE_DIR: Path = Path(os.getenv("STEADY_STATE_DIR") or (Path.home() / ".steady"))
    # Fixed period length, one history slot per day.
    DAYS_IN_PERIOD: int = int(os.getenv("STEADY_DAYS_IN_PERIOD", "31"))
    DEFAULT_GOAL: int = int(os.getenv("STEADY_DEFAULT_GOAL", "20"))
    # Empty means random first-run demo data; an integer makes it repeatable.
    SEED: str = os.getenv("STEADY_SEED", "")
    LOG_LEVEL: str = os.getenv("STEADY_LOG_LEVEL", "INFO").upper()


settings = Settings()
