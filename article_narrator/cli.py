"""CLI interface: config resolution, subcommand routing, exit status."""

import argparse
import os
import re
import shutil
import sys

from article_narrator.chunker import split_into_chunks
from article_narrator.constants import (
    API_KEY_ENV,
    CHUNK_DIR,
    CHUNK_SIZE,
    DEFAULT_PROVIDER,
    EDGE_VOICE,
    ELEVENLABS_VOICE_ID,
    PROVIDER_ENV,
    PROVIDERS,
    SPEECH_RATE,
    TTS_TIMEOUT_SECONDS,
    VERSION,
    VOICE_ID_ENV,
)
from article_narrator.errors import ConfigError, NarratorError
from article_narrator.models import PipelineConfig
from article_narrator.pipeline import Pipeline, read_article


def _check_ffmpeg():
    """Verify ffmpeg is installed."""
    if not shutil.which("ffmpeg"):
        print("Error: ffmpeg is required but not found.", file=sys.stderr)
        print("Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Debian/Ubuntu)", file=sys.stderr)
        raise SystemExit(1)


def slug_from_path(article_path: str) -> str:
    """Convert article filename to an output basename.

    "My Article.txt" → "my_article"
    """
    basename = os.path.splitext(os.path.basename(article_path))[0]
    slug = re.sub(r"[^a-zA-Z0-9]+", "_", basename).strip("_").lower()
    return slug or "article"


def build_config(args) -> PipelineConfig:
    """Resolve CLI arguments and environment into one immutable config."""
    provider = args.provider or os.getenv(PROVIDER_ENV) or DEFAULT_PROVIDER

    voice = args.voice
    if not voice:
        voice = os.getenv(VOICE_ID_ENV, ELEVENLABS_VOICE_ID) if provider == "elevenlabs" else EDGE_VOICE

    output_path = args.output or os.path.join(
        os.path.dirname(os.path.abspath(args.file)), f"{slug_from_path(args.file)}.mp3"
    )
    chunk_dir = args.chunk_dir or os.path.join(os.path.dirname(os.path.abspath(output_path)), CHUNK_DIR)

    return PipelineConfig(
        input_path=args.file,
        output_path=output_path,
        intermediate_dir=chunk_dir,
        max_chunk_size=args.chunk_size,
        speech_rate=args.speed,
        voice_id=voice,
        api_key=os.getenv(API_KEY_ENV, ""),
        provider=provider,
        model_id=args.model or "",
        timeout=args.timeout,
        max_attempts=args.retries + 1,
        keep_intermediates=args.keep_chunks,
    )


def _fail(error: NarratorError):
    """Report a failed stage and exit non-zero."""
    print(f"Error: {error.stage} failed: {error}", file=sys.stderr)
    if getattr(error, "detail", None) and error.detail not in str(error):
        print(f"  detail: {error.detail}", file=sys.stderr)
    raise SystemExit(2 if isinstance(error, ConfigError) else 1)


def cmd_run(args):
    """Narrate an article into a single MP3."""
    _check_ffmpeg()

    config = build_config(args)
    try:
        config.validate()
    except NarratorError as e:
        if isinstance(e, ConfigError) and config.provider == "elevenlabs" and not config.api_key:
            print(f"Set {API_KEY_ENV} in your environment, or use --provider edge.", file=sys.stderr)
        _fail(e)

    pipeline = Pipeline(config)
    try:
        result = pipeline.run()
    except NarratorError as e:
        if pipeline.segments or os.path.isdir(config.intermediate_dir):
            print(f"Intermediate files left in {config.intermediate_dir}", file=sys.stderr)
        _fail(e)

    print(f"Done: {result.output_path} ({result.chunk_count} chunks, {result.duration_seconds}s)")


def cmd_chunks(args):
    """Print the chunk plan for an article without calling any service."""
    try:
        text = read_article(args.file)
        chunks = split_into_chunks(text, args.chunk_size)
    except NarratorError as e:
        _fail(e)

    if not chunks:
        print("No text to narrate.")
        return

    print(f"{len(chunks)} chunks (max {args.chunk_size} chars):")
    for i, chunk in enumerate(chunks):
        marker = " [oversized word]" if len(chunk) > args.chunk_size else ""
        preview = chunk if len(chunk) <= 60 else chunk[:57] + "..."
        print(f"  {i + 1:>4}  {len(chunk):>6} chars{marker}  {preview}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="narrate",
        description="Article Narrator: turn a text article into a single narrated MP3",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    run_parser = subparsers.add_parser("run", help="Narrate an article")
    run_parser.add_argument("file", help="Path to the article text file (UTF-8)")
    run_parser.add_argument("-o", "--output", help="Output MP3 path (default: <article>.mp3 beside the input)")
    run_parser.add_argument("--chunk-dir", help=f"Scratch directory for per-chunk audio (default: {CHUNK_DIR}/ beside the output)")
    run_parser.add_argument("--chunk-size", type=int, default=CHUNK_SIZE, help=f"Maximum characters per chunk (default: {CHUNK_SIZE})")
    run_parser.add_argument("--speed", type=float, default=SPEECH_RATE, help="Tempo multiplier, 1.0 = unchanged")
    run_parser.add_argument("--voice", help=f"Voice id (default: ${VOICE_ID_ENV} or a stock voice)")
    run_parser.add_argument("--provider", choices=PROVIDERS, help=f"TTS provider (default: ${PROVIDER_ENV} or {DEFAULT_PROVIDER})")
    run_parser.add_argument("--model", help="ElevenLabs model id")
    run_parser.add_argument("--timeout", type=float, default=TTS_TIMEOUT_SECONDS, help="Seconds per TTS request")
    run_parser.add_argument("--retries", type=int, default=0, help="Retries per chunk on synthesis failure")
    run_parser.add_argument("--keep-chunks", action="store_true", help="Keep per-chunk audio after merging")
    run_parser.set_defaults(func=cmd_run)

    # chunks
    chunks_parser = subparsers.add_parser("chunks", help="Show how an article would be chunked")
    chunks_parser.add_argument("file", help="Path to the article text file (UTF-8)")
    chunks_parser.add_argument("--chunk-size", type=int, default=CHUNK_SIZE, help=f"Maximum characters per chunk (default: {CHUNK_SIZE})")
    chunks_parser.set_defaults(func=cmd_chunks)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    args.func(args)
