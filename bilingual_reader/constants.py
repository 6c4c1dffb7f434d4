"""All magic numbers and configuration constants."""

KOREAN = "ko"                                # language tag for Hangul text
LATIN = "en"                                 # language tag for everything else
NEUTRAL = "neutral"                          # char class that never forces a split

KOREAN_RANGES = (
    (0xAC00, 0xD7AF),                        # Hangul syllables
    (0x1100, 0x11FF),                        # Hangul Jamo
    (0x3130, 0x318F),                        # Hangul compatibility Jamo
)
NEUTRAL_PUNCTUATION = frozenset(".,!?@#$%^&*()_-+=:;\"'<>[]{}")
SENTENCE_TERMINATORS = frozenset(".!?\n")

KOREAN_VOICE = "ko-KR-SunHiNeural"
LATIN_VOICE = "en-US-AriaNeural"
KOREAN_PREFERRED_NAMES = ("SunHi", "InJoon")
LATIN_PREFERRED_NAMES = ("Aria", "Jenny")

DEFAULT_RATE = 1.0                           # UI range 0.5–2.0
DEFAULT_PITCH = 1.0                          # UI range 0–2
PITCH_HZ_PER_UNIT = 50                       # Hz offset per pitch unit away from 1.0

TTS_RETRY_COUNT = 3                          # max retries per TTS segment
TTS_RETRY_BASE_DELAY = 1.0                   # seconds, doubled per retry

PAUSE_SAME_LANGUAGE_MS = 150                 # ms pause between same-language clips
PAUSE_LANGUAGE_CHANGE_MS = 300               # ms pause at a language switch
TARGET_DBFS = -20.0                          # loudness target across voices

TRANSLATE_URL = "https://api.mymemory.translated.net/get"
TRANSLATE_LANGPAIR = "ko|en"
TRANSLATE_TIMEOUT = 10.0                     # seconds

OUTPUT_BITRATE = "192k"                      # MP3 output bitrate
OUTPUT_DIR = "output"
SETTINGS_FILE = "reader.json"
VERSION = "0.1.0"
