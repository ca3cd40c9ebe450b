"""
Tests for the input collector and request building.

Run with:
    python -m pytest tests/test_input_collector.py -v
"""

import base64
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.video_generation.inputs import InputCollector, coerce_duration
from services.video_generation.models import GenerationRequest, InputSnapshot


class TestInputCollector:
    """Each field follows its own latest change."""

    def test_defaults(self):
        snapshot = InputCollector().snapshot()
        assert snapshot == InputSnapshot(prompt="", image_bytes_b64=None, duration_seconds=5, aspect_ratio="1:1")

    def test_fields_update_independently(self):
        collector = InputCollector()
        collector.set_aspect_ratio("16:9")
        collector.set_prompt("first")
        collector.set_duration("8")
        collector.set_prompt("second")
        collector.set_aspect_ratio("9:16")

        snapshot = collector.snapshot()
        assert snapshot.prompt == "second"
        assert snapshot.duration_seconds == 8
        assert snapshot.aspect_ratio == "9:16"
        assert snapshot.image_bytes_b64 is None

    def test_image_is_base64_encoded(self):
        collector = InputCollector()
        collector.set_image(b"\x89PNG fake")
        assert collector.snapshot().image_bytes_b64 == base64.b64encode(b"\x89PNG fake").decode()

    def test_no_file_keeps_previous_image(self):
        collector = InputCollector()
        collector.set_image(b"one")
        collector.set_image(None)
        assert base64.b64decode(collector.snapshot().image_bytes_b64) == b"one"

    def test_image_file(self, tmp_path):
        path = tmp_path / "frame.png"
        path.write_bytes(b"pixels")

        collector = InputCollector()
        collector.set_image_file(path)
        assert base64.b64decode(collector.snapshot().image_bytes_b64) == b"pixels"

    def test_empty_prompt_is_allowed(self):
        collector = InputCollector()
        collector.set_prompt("")
        assert collector.snapshot().prompt == ""

    def test_snapshot_is_frozen(self):
        collector = InputCollector()
        snapshot = collector.snapshot()
        collector.set_prompt("later")
        assert snapshot.prompt == ""


class TestCoerceDuration:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("8", 8),
            (" 6 ", 6),
            ("7.9", 7),
            ("10s", 10),
            (5, 5),
            (6.5, 6),
            ("abc", None),
            ("\u0663", None),
            ("\uff18", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, raw, expected):
        assert coerce_duration(raw) == expected


class TestGenerationRequest:

    def test_text_to_video_omits_image(self):
        request = GenerationRequest.from_snapshot(
            InputSnapshot(prompt="a cat", duration_seconds=5, aspect_ratio="16:9"),
            model="veo-2.0-generate-001",
        )
        assert request.source_image is None
        assert request.prompt == "a cat"
        assert request.aspect_ratio == "16:9"
        assert request.number_of_videos == 1

    def test_image_to_video_attaches_png(self):
        request = GenerationRequest.from_snapshot(
            InputSnapshot(prompt="", image_bytes_b64="aGVsbG8="),
            model="veo-2.0-generate-001",
        )
        assert request.source_image.image_bytes_b64 == "aGVsbG8="
        assert request.source_image.mime_type == "image/png"
