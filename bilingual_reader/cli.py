"""CLI interface with subcommand routing and the read-aloud pipeline."""

import argparse
import asyncio
import json
import logging
import os
import re
import shutil
import sys

from bilingual_reader.assembly import assemble, load_clips
from bilingual_reader.config import load_settings
from bilingual_reader.constants import KOREAN, LATIN, OUTPUT_DIR, VERSION
from bilingual_reader.exporter import export
from bilingual_reader.playback import PlaybackController
from bilingual_reader.segmenter import segment_text
from bilingual_reader.translation import with_translation
from bilingual_reader.tts import EdgeSpeechEngine
from bilingual_reader.voices import VOICE_POOL, fetch_voices, filter_voices, resolve_voice


def _check_ffmpeg():
    """Verify ffmpeg is installed."""
    if not shutil.which("ffmpeg"):
        print("Error: ffmpeg is required but not found.", file=sys.stderr)
        print("Install with: brew install ffmpeg", file=sys.stderr)
        raise SystemExit(1)


def slug_from_path(path: str | None) -> str:
    """Convert an input filename to an output slug.

    "My Notes.txt" → "my_notes"; no file → "reading".
    """
    if not path:
        return "reading"
    basename = os.path.splitext(os.path.basename(path))[0]
    slug = re.sub(r"[^a-zA-Z0-9]+", "_", basename).strip("_").lower()
    return slug or "reading"


def _read_input(args) -> str:
    """Text from the positional argument, --file, or stdin ("-")."""
    if args.file:
        if not os.path.exists(args.file):
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            raise SystemExit(1)
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
    elif args.text == "-":
        text = sys.stdin.read()
    else:
        text = args.text or ""

    if not text.strip():
        print("Error: No text to read.", file=sys.stderr)
        raise SystemExit(1)
    return text


def _merge_settings(args) -> dict:
    """Settings file values, overridden by any flags given on the command line."""
    settings = load_settings(getattr(args, "config", None))
    overrides = {
        "korean_voice": getattr(args, "ko_voice", None),
        "latin_voice": getattr(args, "en_voice", None),
        "rate": getattr(args, "rate", None),
        "pitch": getattr(args, "pitch", None),
        "split_sentences": getattr(args, "sentences", None),
        "translate": getattr(args, "translate", None),
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings


def cmd_segments(args):
    """Show how the text splits into language segments."""
    text = _read_input(args)
    split = _merge_settings(args)["split_sentences"]
    segments = segment_text(text, split_sentences=split)

    if args.json:
        print(json.dumps(
            [{"text": s.text, "language": s.language} for s in segments],
            ensure_ascii=False,
            indent=2,
        ))
        return

    print(f"{len(segments)} segments ({'sentence' if split else 'language'} split)")
    for i, seg in enumerate(segments):
        print(f"  {i + 1:>3} [{seg.language}] {seg.text!r}")


async def _read_aloud(text: str, settings: dict, clip_dir: str):
    """Queue text on an edge-tts engine and wait for the queue to drain.

    Returns (segments, clips). Both are empty when there was nothing to speak.
    """
    if settings["translate"]:
        print("Translating...")
        text = await with_translation(text, langpair=settings["langpair"])

    engine = EdgeSpeechEngine(clip_dir)

    def on_segment_start(index, segment):
        total = len(controller.session.segments)
        preview = segment.text.strip().replace("\n", " ")[:40]
        print(f"  Speaking segment {index + 1}/{total} [{segment.language}]: {preview}")

    controller = PlaybackController(engine, on_segment_start=on_segment_start)
    session = controller.start(
        text,
        korean_voice=settings["korean_voice"],
        latin_voice=settings["latin_voice"],
        rate=settings["rate"],
        pitch=settings["pitch"],
        split_sentences=settings["split_sentences"],
    )
    if session is None:
        return [], []

    try:
        await engine.join()
    except asyncio.CancelledError:
        controller.stop()
        raise
    return session.segments, engine.clips


def cmd_speak(args):
    """Read text aloud into an MP3 with per-language voices."""
    _check_ffmpeg()
    text = _read_input(args)
    settings = _merge_settings(args)
    settings["korean_voice"] = resolve_voice(settings["korean_voice"], KOREAN)
    settings["latin_voice"] = resolve_voice(settings["latin_voice"], LATIN)

    slug = slug_from_path(args.file)
    project_dir = os.path.join(args.output or OUTPUT_DIR, slug)
    clip_dir = os.path.join(project_dir, "segments")
    if os.path.exists(clip_dir):
        shutil.rmtree(clip_dir)

    segments, clips = asyncio.run(_read_aloud(text, settings, clip_dir))
    if not segments:
        print("Error: Nothing speakable in input.", file=sys.stderr)
        raise SystemExit(1)
    if not clips:
        print("Error: Every segment failed to render.", file=sys.stderr)
        raise SystemExit(1)
    if len(clips) < len(segments):
        print(f"Warning: {len(segments) - len(clips)} segment(s) failed and were skipped.", file=sys.stderr)

    languages, audio = load_clips(clips)
    assembled = assemble(languages, audio)
    output_path = export(assembled, project_dir, slug, segments, settings)
    print(f"Done: {output_path}")


def cmd_voices(args):
    """List available voices."""
    voices = asyncio.run(fetch_voices()) if args.online else VOICE_POOL
    if args.lang:
        voices = filter_voices(voices, args.lang)
    if args.filter:
        needle = args.filter.lower()
        voices = [v for v in voices if needle in v.id.lower() or needle in v.name.lower()]
    if not voices:
        print("No matching voices found.")
        return
    print("Available voices:")
    for v in voices:
        print(f"  {v.id:<34} {v.lang}")


def _add_text_arguments(parser):
    parser.add_argument("text", nargs="?", help="Text to read ('-' for stdin)")
    parser.add_argument("--file", help="Read text from a UTF-8 file instead")
    parser.add_argument("--config", help="Settings JSON file (default: reader.json)")
    parser.add_argument(
        "--sentences", action="store_true", default=None,
        help="Also split at sentence ends and re-detect language per sentence",
    )


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="reader",
        description="Bilingual Reader — read mixed Korean/English text aloud",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # segments
    seg_parser = subparsers.add_parser("segments", help="Show language segments for text")
    _add_text_arguments(seg_parser)
    seg_parser.add_argument("--json", action="store_true", help="Print segments as JSON")
    seg_parser.set_defaults(func=cmd_segments)

    # speak
    speak_parser = subparsers.add_parser("speak", help="Read text aloud into an MP3")
    _add_text_arguments(speak_parser)
    speak_parser.add_argument("--ko-voice", help="Voice id for Korean segments")
    speak_parser.add_argument("--en-voice", help="Voice id for English segments")
    speak_parser.add_argument("--rate", type=float, help="Speech rate multiplier (0.5–2.0)")
    speak_parser.add_argument("--pitch", type=float, help="Pitch multiplier (0–2)")
    speak_parser.add_argument(
        "--translate", action="store_true", default=None,
        help="Append a translation and read both",
    )
    speak_parser.add_argument("-o", "--output", help=f"Output base directory (default: {OUTPUT_DIR})")
    speak_parser.set_defaults(func=cmd_speak)

    # voices
    voices_parser = subparsers.add_parser("voices", help="List available voices")
    voices_parser.add_argument("--lang", help="Locale prefix, e.g. ko or en-GB")
    voices_parser.add_argument("--filter", help="Filter voices by substring")
    voices_parser.add_argument("--online", action="store_true", help="Query the edge-tts voice list")
    voices_parser.set_defaults(func=cmd_voices)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    args.func(args)
