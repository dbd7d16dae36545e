"""Concatenate per-chunk audio into the final MP3."""

import os
import tempfile

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError

from article_narrator.constants import OUTPUT_BITRATE
from article_narrator.errors import MergeError


def _load_all(ordered_files: list[str]) -> list[AudioSegment]:
    """Decode every file up front so a bad input fails before anything is written."""
    audio_files = []
    for path in ordered_files:
        if not os.path.isfile(path):
            raise MergeError(f"input file not found: {path}")
        try:
            audio_files.append(AudioSegment.from_file(path))
        except (CouldntDecodeError, OSError) as e:
            raise MergeError(f"could not decode {path}: {e}") from e
    return audio_files


def concatenate(audio_files: list[AudioSegment]) -> AudioSegment:
    """Join audio back to back in list order, no pauses."""
    result = AudioSegment.empty()
    for audio in audio_files:
        result += audio
    return result


def merge(
    ordered_files: list[str],
    output_path: str,
    bitrate: str = OUTPUT_BITRATE,
) -> float:
    """Merge ordered_files into a single MP3 at output_path.

    The MP3 is encoded to a temporary file next to output_path and only moved
    into place once ffmpeg succeeds. Returns the merged duration in seconds.
    """
    if not ordered_files:
        raise MergeError("nothing to merge")

    merged = concatenate(_load_all(ordered_files))

    out_dir = os.path.dirname(os.path.abspath(output_path))
    tmp_path = None
    # ffmpeg runs through pydub, which takes no timeout
    try:
        os.makedirs(out_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(suffix=".mp3", prefix=".merge_", dir=out_dir)
        os.close(fd)
        merged.export(tmp_path, format="mp3", bitrate=bitrate).close()
        os.replace(tmp_path, output_path)
    except (CouldntEncodeError, OSError) as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise MergeError(f"could not write {output_path}: {e}") from e

    return round(len(merged) / 1000, 1)
