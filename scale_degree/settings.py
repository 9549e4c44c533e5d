"""Persistent user preferences for the command line tools.

Settings are stored as JSON. The location defaults to
``~/.scale_degree_settings.json`` and can be moved with the
``SCALE_DEGREE_SETTINGS_FILE`` environment variable or the CLI's
``--settings-file`` option.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

__all__ = ["DEFAULT_SETTINGS", "DEFAULT_SETTINGS_FILE", "load_settings", "save_settings"]

# Default path for storing user preferences
env_path = os.environ.get("SCALE_DEGREE_SETTINGS_FILE")
if env_path:
    DEFAULT_SETTINGS_FILE = Path(env_path).expanduser()
else:
    DEFAULT_SETTINGS_FILE = Path.home() / ".scale_degree_settings.json"

# ``root_octave`` applies to scale and chord roots given without an octave,
# ``bass_octave`` to walking bass lines. ``bpm`` and ``beats`` drive MIDI export.
DEFAULT_SETTINGS = {
    "root_octave": 4,
    "bass_octave": 3,
    "bpm": 120,
    "beats": 1.0,
}


def load_settings(path: Path = DEFAULT_SETTINGS_FILE) -> dict:
    """Load saved user settings from ``path`` merged over the defaults.

    @param path (Path): Location of the settings file.
    @returns dict: ``DEFAULT_SETTINGS`` updated with any stored values.
    """
    settings = dict(DEFAULT_SETTINGS)
    path = Path(path)
    if path.is_file():
        try:
            with open(path, "r", encoding="utf-8") as fh:
                stored = json.load(fh)
        except (OSError, ValueError) as exc:
            logging.error(f"Could not load settings: {exc}")
            return settings
        if isinstance(stored, dict):
            settings.update(stored)
        else:
            logging.error(f"Could not load settings: {path} does not hold a JSON object")
    return settings


def save_settings(settings: dict, path: Path = DEFAULT_SETTINGS_FILE) -> None:
    """Save user ``settings`` to ``path`` as JSON.

    @param settings (dict): Options to be persisted.
    @param path (Path): Destination file path.
    @returns None: Function does not return a value.
    """
    # Failing to save preferences never stops the command that triggered it.
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh, indent=2)
    except (OSError, TypeError) as exc:
        logging.error(f"Could not save settings: {exc}")
