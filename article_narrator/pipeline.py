"""Sequential narration pipeline: read → chunk → synthesize → tempo → merge → clean up."""

import os
from typing import Callable

from article_narrator.assembly import merge as merge_files
from article_narrator.chunker import split_into_chunks
from article_narrator.constants import CHUNK_FILENAME, TEMPO_FILENAME
from article_narrator.effects import adjust_tempo
from article_narrator.errors import (
    CleanupError,
    InputError,
    NarratorError,
    PostProcessError,
)
from article_narrator.models import PipelineConfig, PipelineState, RunResult, Segment
from article_narrator.tts import synthesize_with_retry


def read_article(path: str) -> str:
    """Read the whole article as UTF-8, mapping every failure to InputError."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError as e:
        raise InputError(f"file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"not valid UTF-8: {path}") from e
    except OSError as e:
        raise InputError(f"could not read {path}: {e}") from e


class Pipeline:
    """Runs one article through the narration stages, one chunk at a time.

    Stage callables can be swapped out (tests do this); by default they are
    the real TTS client, tempo filter and concatenator bound to the config.
    Any stage failure moves the pipeline to FAILED and re-raises; files
    written so far are left on disk.
    """

    def __init__(
        self,
        config: PipelineConfig,
        synthesize: Callable[[str, str], None] | None = None,
        post_process: Callable[[str, str, float], None] | None = None,
        merge: Callable[[list[str], str], float] | None = None,
        echo: Callable[[str], None] = print,
    ):
        self.config = config
        self.synthesize = synthesize or self._synthesize
        self.post_process = post_process or self._post_process
        self.merge = merge or self._merge
        self.echo = echo

        self.state = PipelineState.IDLE
        self.current_index: int | None = None
        self.error: NarratorError | None = None
        self.segments: list[Segment] = []
        self._created_dir = False

    # --- default stages ---

    def _synthesize(self, text: str, output_path: str) -> None:
        cfg = self.config
        synthesize_with_retry(
            text, output_path, cfg.voice_id,
            api_key=cfg.api_key,
            provider=cfg.provider,
            model_id=cfg.model_id,
            timeout=cfg.timeout,
            max_attempts=cfg.max_attempts,
        )

    def _post_process(self, input_path: str, output_path: str, factor: float) -> None:
        adjust_tempo(input_path, output_path, factor, bitrate=self.config.bitrate)

    def _merge(self, ordered_files: list[str], output_path: str) -> float:
        return merge_files(ordered_files, output_path, bitrate=self.config.bitrate)

    # --- stages ---

    def read_input(self) -> str:
        path = self.config.input_path
        text = read_article(path)
        if not text.strip():
            raise InputError(f"file contains no text: {path}")
        return text

    def _segment_path(self, index: int, template: str = CHUNK_FILENAME) -> str:
        return os.path.join(self.config.intermediate_dir, template.format(index + 1))

    def prepare_chunk_dir(self) -> None:
        chunk_dir = self.config.intermediate_dir
        self._created_dir = not os.path.isdir(chunk_dir)
        try:
            os.makedirs(chunk_dir, exist_ok=True)
        except OSError as e:
            raise NarratorError(f"could not create chunk directory {chunk_dir}: {e}") from e

    def synthesize_chunks(self, chunks: list[str]) -> None:
        total = len(chunks)
        for i, chunk in enumerate(chunks):
            self.current_index = i
            self.state = PipelineState.SYNTHESIZING
            path = self._segment_path(i)
            self.echo(f"Converting chunk {i + 1}/{total} to audio...")
            try:
                self.synthesize(chunk, path)
            except NarratorError as e:
                e.index = i
                raise
            segment = Segment(index=i, text=chunk, path=path)
            self.segments.append(segment)

            if self.config.adjusts_tempo:
                self.state = PipelineState.POST_PROCESSING
                self._apply_tempo(segment)

    def _apply_tempo(self, segment: Segment) -> None:
        tempo_path = self._segment_path(segment.index, TEMPO_FILENAME)
        try:
            self.post_process(segment.path, tempo_path, self.config.speech_rate)
        except NarratorError as e:
            e.index = segment.index
            raise
        raw_path = segment.path
        segment.path = tempo_path
        try:
            os.remove(raw_path)
        except OSError as e:
            raise PostProcessError(f"could not remove {raw_path}: {e}", index=segment.index) from e

    def cleanup(self) -> list[str]:
        """Delete intermediate files. Failures are reported, never raised."""
        problems = []
        for segment in self.segments:
            try:
                os.remove(segment.path)
            except FileNotFoundError:
                continue
            except OSError as e:
                problems.append(str(CleanupError(f"could not delete {segment.path}: {e}", index=segment.index)))

        chunk_dir = self.config.intermediate_dir
        if self._created_dir and os.path.isdir(chunk_dir) and not os.listdir(chunk_dir):
            try:
                os.rmdir(chunk_dir)
            except OSError as e:
                problems.append(str(CleanupError(f"could not remove {chunk_dir}: {e}")))

        for problem in problems:
            self.echo(f"Warning: {problem}")
        return problems

    # --- driver ---

    def run(self) -> RunResult:
        """Run every stage in order. Returns a RunResult once the output exists."""
        try:
            self.config.validate()

            self.state = PipelineState.READING_INPUT
            text = self.read_input()
            self.echo("Article read successfully.")

            self.state = PipelineState.CHUNKING
            chunks = split_into_chunks(text, self.config.max_chunk_size)
            self.echo(f"Article split into {len(chunks)} chunks.")

            self.prepare_chunk_dir()
            self.synthesize_chunks(chunks)
            self.current_index = None

            self.state = PipelineState.MERGING
            self.echo("Combining audio chunks...")
            duration = self.merge([s.path for s in self.segments], self.config.output_path)
        except NarratorError as e:
            self.error = e
            self.state = PipelineState.FAILED
            raise
        except Exception:
            self.state = PipelineState.FAILED
            raise

        self.state = PipelineState.CLEANING_UP
        problems = [] if self.config.keep_intermediates else self.cleanup()

        self.state = PipelineState.DONE
        self.echo(f"Final audio saved to {self.config.output_path}")
        return RunResult(
            output_path=self.config.output_path,
            chunk_count=len(self.segments),
            duration_seconds=duration,
            cleanup_errors=problems,
        )
