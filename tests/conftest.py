"""Shared fixtures for article narrator tests."""

import pytest
from pydub import AudioSegment
from pydub.generators import Sine

from article_narrator.models import PipelineConfig


@pytest.fixture
def tiny_mp3(tmp_path):
    """Generate a 100ms silent MP3 for testing."""
    path = tmp_path / "test.mp3"
    silence = AudioSegment.silent(duration=100)
    silence.export(str(path), format="mp3")
    return path


@pytest.fixture
def make_mp3(tmp_path):
    """Factory: write an MP3 of the given duration, silent or a 440Hz tone."""
    def factory(name, duration_ms=500, tone=False):
        path = tmp_path / name
        if tone:
            audio = Sine(440).to_audio_segment(duration=duration_ms, volume=-6)
        else:
            audio = AudioSegment.silent(duration=duration_ms)
        audio.export(str(path), format="mp3")
        return str(path)
    return factory


@pytest.fixture
def article(tmp_path):
    """Article that splits into 4 chunks at max_chunk_size=8."""
    path = tmp_path / "article.txt"
    path.write_text("one two three four five six", encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path, article):
    return PipelineConfig(
        input_path=str(article),
        output_path=str(tmp_path / "out" / "article.mp3"),
        intermediate_dir=str(tmp_path / "chunks"),
        max_chunk_size=8,
        voice_id="test-voice",
        api_key="test-key",
    )
