"""Tests for assembly module (merge)."""

import os

import pytest
from pydub import AudioSegment

from article_narrator.assembly import concatenate, merge
from article_narrator.errors import MergeError


def test_concatenate_no_gaps():
    parts = [AudioSegment.silent(duration=d) for d in (300, 500, 700)]
    assert len(concatenate(parts)) == 1500


def test_concatenate_empty():
    assert len(concatenate([])) == 0


def test_merge_creates_single_file(make_mp3, tmp_path):
    files = [make_mp3(f"chunk_{i}.mp3", duration_ms=d) for i, d in enumerate((300, 500, 700))]
    output = tmp_path / "final" / "article.mp3"
    duration = merge(files, str(output))

    assert output.exists()
    merged = AudioSegment.from_mp3(str(output))
    assert abs(len(merged) - 1500) < 250
    assert abs(duration - 1.5) < 0.25


def test_merge_preserves_order(make_mp3, tmp_path):
    """Tone first, silence second: loudness follows input order."""
    files = [
        make_mp3("a_tone.mp3", duration_ms=1000, tone=True),
        make_mp3("b_silence.mp3", duration_ms=1000),
    ]
    output = tmp_path / "ordered.mp3"
    merge(files, str(output))

    merged = AudioSegment.from_mp3(str(output))
    head = merged[100:800]
    tail = merged[-800:-100]
    assert head.dBFS > tail.dBFS + 20


def test_merge_missing_input(make_mp3, tmp_path):
    files = [make_mp3("ok.mp3"), str(tmp_path / "missing.mp3")]
    output = tmp_path / "out.mp3"
    with pytest.raises(MergeError, match="missing.mp3"):
        merge(files, str(output))
    assert not output.exists()


def test_merge_undecodable_input_leaves_no_output(make_mp3, tmp_path):
    bogus = tmp_path / "bogus.mp3"
    bogus.write_bytes(b"not audio at all")
    output = tmp_path / "out.mp3"
    with pytest.raises(MergeError):
        merge([make_mp3("ok.mp3"), str(bogus)], str(output))
    assert not output.exists()
    assert not [f for f in os.listdir(tmp_path) if f.startswith(".merge_")]


def test_merge_empty_list(tmp_path):
    with pytest.raises(MergeError, match="nothing to merge"):
        merge([], str(tmp_path / "out.mp3"))


def test_merge_output_dir_blocked_by_file(make_mp3, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    output = blocker / "article.mp3"
    with pytest.raises(MergeError, match="could not write"):
        merge([make_mp3("ok.mp3")], str(output))
    assert not output.exists()
