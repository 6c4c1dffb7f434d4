"""Reader settings: constants overlaid with an optional JSON settings file."""

import json
import logging
import os

from bilingual_reader.constants import (
    DEFAULT_PITCH,
    DEFAULT_RATE,
    KOREAN_VOICE,
    LATIN_VOICE,
    SETTINGS_FILE,
    TRANSLATE_LANGPAIR,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "korean_voice": KOREAN_VOICE,
    "latin_voice": LATIN_VOICE,
    "rate": DEFAULT_RATE,
    "pitch": DEFAULT_PITCH,
    "split_sentences": False,
    "translate": False,
    "langpair": TRANSLATE_LANGPAIR,
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from a JSON file, falling back to defaults.

    Missing file → defaults. Malformed file → warning + defaults.
    Unknown keys are ignored with a warning.
    """
    settings = dict(DEFAULT_SETTINGS)
    if path is None:
        path = SETTINGS_FILE
    if not os.path.exists(path):
        return settings

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.warning("Malformed settings file: %s — using defaults", path)
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a JSON object — using defaults", path)
        return settings

    for key, value in data.items():
        if key not in DEFAULT_SETTINGS:
            logger.warning("Unknown setting %r in %s — ignored", key, path)
            continue
        settings[key] = value
    return settings
