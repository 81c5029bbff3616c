"""Application configuration, read from the environment."""

import os

DATABASE_URL = os.getenv("ZONE_EDITOR_DATABASE_URL", "sqlite:///./zone_editor.db")

LOG_LEVEL = os.getenv("ZONE_EDITOR_LOG_LEVEL", "INFO")

# Root key under which per-monitor settings are stored
SETTINGS_ROOT = os.getenv("ZONE_EDITOR_SETTINGS_ROOT", "SOFTWARE\\SuperFancyZones")

# Work area used when the editor is started without monitor arguments
DEFAULT_WORK_AREA = (0, 0, 1920, 1080)

DEFAULT_ZONE_COUNT = 3
DEFAULT_SPACING = 16
DEFAULT_SHOW_SPACING = True
