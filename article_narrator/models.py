"""Data models for article narration."""

import enum
import math
from dataclasses import dataclass, field

from article_narrator.constants import (
    CHUNK_DIR,
    CHUNK_SIZE,
    DEFAULT_PROVIDER,
    OUTPUT_BITRATE,
    PROVIDERS,
    SPEECH_RATE,
    TTS_RETRY_COUNT,
    TTS_TIMEOUT_SECONDS,
)
from article_narrator.errors import ChunkingError, ConfigError


@dataclass(frozen=True)
class PipelineConfig:
    """Everything a run needs, resolved once before the pipeline starts."""

    input_path: str
    output_path: str
    intermediate_dir: str = CHUNK_DIR
    max_chunk_size: int = CHUNK_SIZE
    speech_rate: float = SPEECH_RATE
    voice_id: str = ""
    api_key: str = field(default="", repr=False)
    provider: str = DEFAULT_PROVIDER
    model_id: str = ""
    timeout: float = TTS_TIMEOUT_SECONDS
    max_attempts: int = TTS_RETRY_COUNT
    bitrate: str = OUTPUT_BITRATE
    keep_intermediates: bool = False

    @property
    def adjusts_tempo(self) -> bool:
        return self.speech_rate != 1.0

    def validate(self) -> None:
        """Raise ChunkingError/ConfigError for values a run cannot use."""
        if isinstance(self.max_chunk_size, bool) or not isinstance(self.max_chunk_size, int) \
                or self.max_chunk_size <= 0:
            raise ChunkingError(f"max chunk size must be a positive integer, got {self.max_chunk_size!r}")
        if not math.isfinite(self.speech_rate) or self.speech_rate <= 0:
            raise ConfigError(f"speech rate must be a positive finite number, got {self.speech_rate}")
        if self.provider not in PROVIDERS:
            raise ConfigError(f"unknown provider {self.provider!r} (expected one of {', '.join(PROVIDERS)})")
        if not self.voice_id:
            raise ConfigError("no voice id configured")
        if self.provider == "elevenlabs" and not self.api_key:
            raise ConfigError("ElevenLabs provider needs an API key")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError(f"timeout must be a positive finite number, got {self.timeout}")
        if self.max_attempts < 1:
            raise ConfigError(f"max attempts must be at least 1, got {self.max_attempts}")


@dataclass
class Segment:
    index: int         # position of the chunk in reading order, 0-based
    text: str
    path: str          # current audio file; replaced after tempo adjustment


class PipelineState(enum.Enum):
    IDLE = "idle"
    READING_INPUT = "reading_input"
    CHUNKING = "chunking"
    SYNTHESIZING = "synthesizing"
    POST_PROCESSING = "post_processing"
    MERGING = "merging"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    output_path: str
    chunk_count: int
    duration_seconds: float
    cleanup_errors: list[str] = field(default_factory=list)
