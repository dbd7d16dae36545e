"""Audio effects: tempo adjustment via ffmpeg's atempo filter."""

import math
import os

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError

from article_narrator.constants import ATEMPO_MAX, ATEMPO_MIN, OUTPUT_BITRATE
from article_narrator.errors import PostProcessError


def atempo_chain(factor: float) -> str:
    """Build an ffmpeg filter string for an arbitrary positive tempo factor.

    A single atempo instance only accepts 0.5–2.0, so larger or smaller
    factors are split into a product of in-range steps.
    """
    if not math.isfinite(factor) or factor <= 0:
        raise PostProcessError(f"tempo factor must be a positive finite number, got {factor}")

    steps = []
    while factor > ATEMPO_MAX:
        steps.append(ATEMPO_MAX)
        factor /= ATEMPO_MAX
    while factor < ATEMPO_MIN:
        steps.append(ATEMPO_MIN)
        factor /= ATEMPO_MIN
    steps.append(factor)

    return ",".join(f"atempo={step:.6g}" for step in steps)


def adjust_tempo(
    input_path: str,
    output_path: str,
    factor: float,
    bitrate: str = OUTPUT_BITRATE,
) -> None:
    """Re-encode input_path at factor times the speed, pitch unchanged.

    Output duration is roughly input duration / factor.
    ffmpeg is driven through pydub, which takes no timeout, so the call is
    bounded only by ffmpeg itself.
    """
    filters = atempo_chain(factor)

    if not os.path.exists(input_path):
        raise PostProcessError(f"input file not found: {input_path}")

    try:
        audio = AudioSegment.from_file(input_path)
        audio.export(
            output_path,
            format="mp3",
            bitrate=bitrate,
            parameters=["-filter:a", filters],
        ).close()
    except CouldntDecodeError as e:
        raise PostProcessError(f"could not decode {input_path}: {e}") from e
    except CouldntEncodeError as e:
        raise PostProcessError(f"ffmpeg failed writing {output_path}: {e}") from e
    except OSError as e:
        raise PostProcessError(f"tempo adjustment failed for {input_path}: {e}") from e
