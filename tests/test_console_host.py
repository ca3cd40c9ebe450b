"""
Tests for the terminal form host.

Run with:
    python -m pytest tests/test_console_host.py -v
"""

import io
import os
import sys
from unittest.mock import patch

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.console_host import QUOTA_NOTICE, Colors, ConsoleFormHost
from services.video_generation.session import STATUS_DONE, STATUS_GENERATING


def make_host(tmp_path):
    stream = io.StringIO()
    return ConsoleFormHost(output_dir=str(tmp_path / "out"), stream=stream, use_color=False), stream


class TestConsoleFormHost:

    def test_download_writes_file(self, tmp_path):
        host, stream = make_host(tmp_path)

        location = host.download("video0.mp4", b"mp4-bytes")

        assert (tmp_path / "out" / "video0.mp4").read_bytes() == b"mp4-bytes"
        assert location == str(tmp_path / "out" / "video0.mp4")
        assert "video0.mp4" in stream.getvalue()

    def test_show_and_hide_video(self, tmp_path):
        host, stream = make_host(tmp_path)

        host.show_video("out/video0.mp4")
        assert host.video_visible
        assert host.video_source == "out/video0.mp4"
        assert "Video ready: out/video0.mp4" in stream.getvalue()

        host.hide_video()
        assert not host.video_visible

    def test_status_lines(self, tmp_path):
        host, stream = make_host(tmp_path)

        host.set_status("Generating...")
        host.set_status("")
        host.set_status("Done.")

        assert stream.getvalue().splitlines() == ["Generating...", "Done."]
        assert host.status == "Done."

    def test_quota_notice_printed_once(self, tmp_path):
        host, stream = make_host(tmp_path)

        host.set_quota_notice_visible(True)
        host.set_quota_notice_visible(True)

        assert stream.getvalue().count(QUOTA_NOTICE) == 1
        host.set_quota_notice_visible(False)
        assert not host.quota_notice_visible

    def test_controls(self, tmp_path):
        host, _ = make_host(tmp_path)
        host.set_controls_enabled(False)
        assert not host.controls_enabled
        host.set_controls_enabled(True)
        assert host.controls_enabled

    def test_key_selection(self, tmp_path):
        host, _ = make_host(tmp_path)

        with patch("cli.console_host.getpass.getpass", return_value="  secret  "):
            assert host.open_key_selection() == "secret"

        with patch("cli.console_host.getpass.getpass", return_value=""):
            assert host.open_key_selection() is None

        with patch("cli.console_host.getpass.getpass", side_effect=EOFError):
            assert host.open_key_selection() is None

    def test_session_status_colors(self, tmp_path):
        stream = io.StringIO()
        host = ConsoleFormHost(output_dir=str(tmp_path / "out"), stream=stream, use_color=True)

        host.set_status(STATUS_GENERATING)
        host.set_status(STATUS_DONE)
        host.set_status("boom")

        lines = stream.getvalue().splitlines()
        assert lines[0] == f"{Colors.CYAN}{STATUS_GENERATING}{Colors.RESET}"
        assert lines[1] == f"{Colors.GREEN}{STATUS_DONE}{Colors.RESET}"
        assert lines[2] == f"{Colors.RED}boom{Colors.RESET}"
