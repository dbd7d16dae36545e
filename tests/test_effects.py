"""Tests for effects module (tempo adjustment)."""

import pytest
from pydub import AudioSegment

from article_narrator.effects import adjust_tempo, atempo_chain
from article_narrator.errors import PostProcessError


@pytest.mark.parametrize("factor, expected", [
    (1.5, "atempo=1.5"),
    (0.75, "atempo=0.75"),
    (2.0, "atempo=2"),
    (3.0, "atempo=2,atempo=1.5"),
    (4.0, "atempo=2,atempo=2"),
    (0.25, "atempo=0.5,atempo=0.5"),
])
def test_atempo_chain(factor, expected):
    assert atempo_chain(factor) == expected


@pytest.mark.parametrize("factor", [0, -1.0, float("inf"), float("-inf"), float("nan")])
def test_atempo_chain_rejects_unusable_factor(factor):
    with pytest.raises(PostProcessError):
        atempo_chain(factor)


def test_adjust_tempo_speeds_up(make_mp3, tmp_path):
    """Factor 2.0 roughly halves the duration."""
    source = make_mp3("source.mp3", duration_ms=2000, tone=True)
    output = tmp_path / "fast.mp3"
    adjust_tempo(source, str(output), 2.0)
    result = AudioSegment.from_mp3(str(output))
    assert abs(len(result) - 1000) < 200


def test_adjust_tempo_slows_down(make_mp3, tmp_path):
    source = make_mp3("source.mp3", duration_ms=1000, tone=True)
    output = tmp_path / "slow.mp3"
    adjust_tempo(source, str(output), 0.5)
    result = AudioSegment.from_mp3(str(output))
    assert abs(len(result) - 2000) < 300


def test_adjust_tempo_missing_input(tmp_path):
    with pytest.raises(PostProcessError, match="not found"):
        adjust_tempo(str(tmp_path / "missing.mp3"), str(tmp_path / "out.mp3"), 1.25)


def test_adjust_tempo_undecodable_input(tmp_path):
    bogus = tmp_path / "bogus.mp3"
    bogus.write_bytes(b"this is not audio")
    with pytest.raises(PostProcessError):
        adjust_tempo(str(bogus), str(tmp_path / "out.mp3"), 1.25)
