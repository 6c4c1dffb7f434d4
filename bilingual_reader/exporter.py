"""Export the assembled reading as MP3 with a provenance manifest."""

import json
import os
from datetime import datetime, timezone

from pydub import AudioSegment

from bilingual_reader.constants import KOREAN, OUTPUT_BITRATE, VERSION
from bilingual_reader.models import Segment


def export(
    assembled: AudioSegment,
    output_dir: str,
    slug: str,
    segments: list[Segment],
    settings: dict,
) -> str:
    """Export assembled audio as MP3 with a title tag.

    Creates:
      - <output_dir>/<slug>.mp3 (the reading)
      - <output_dir>/output.json (provenance manifest)

    Returns path to the MP3 file.
    """
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, f"{slug}.mp3")

    assembled.export(
        output_path,
        format="mp3",
        bitrate=OUTPUT_BITRATE,
        tags={"title": slug},
    )

    korean_count = sum(1 for s in segments if s.language == KOREAN)
    manifest = {
        "project": slug,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "reader_version": VERSION,
        "settings": settings,
        "segments": [{"text": s.text, "language": s.language} for s in segments],
        "stats": {
            "segments": len(segments),
            "korean_segments": korean_count,
            "latin_segments": len(segments) - korean_count,
            "duration_seconds": round(len(assembled) / 1000, 1),
        },
    }

    manifest_path = os.path.join(output_dir, "output.json")
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)

    return output_path
