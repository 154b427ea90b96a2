"""
config.py — Environment configuration for the layout engine.

Settings are read once from environment variables (optionally seeded from a
.env file) and handed to the engine factory. Layout and validation functions
never read settings themselves; they receive the theme and measurer they need.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

ENV_PREFIX = "SLIDELAYOUT_"


# Load .env file if it exists
def _load_dotenv():
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key.startswith(ENV_PREFIX) and value and key not in os.environ:
                        os.environ[key] = value

_load_dotenv()


class Settings:
    """Engine settings loaded from environment variables."""

    def __init__(self):
        # Theme used when a requested theme id cannot be resolved
        self.default_theme_id: str = os.environ.get(f"{ENV_PREFIX}DEFAULT_THEME", "neutral")

        # Text measurement provider: "heuristic" or "pillow"
        self.measurement: str = os.environ.get(f"{ENV_PREFIX}MEASUREMENT", "heuristic").lower()
        self.font_dir: Optional[str] = os.environ.get(f"{ENV_PREFIX}FONT_DIR") or None

        # Logging
        self.log_level: str = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper()

        # Layout quality thresholds
        self.max_elements: int = int(os.environ.get(f"{ENV_PREFIX}MAX_ELEMENTS", "5"))

        # Deck layout fan-out (1 = sequential)
        self.max_workers: int = int(os.environ.get(f"{ENV_PREFIX}MAX_WORKERS", "1"))

    @property
    def uses_real_fonts(self) -> bool:
        """Check if the Pillow font-metric measurer is selected."""
        return self.measurement == "pillow"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
