"""Tests for the built-in file tools."""

import json
import os
import shutil
import subprocess
import sys
from unittest.mock import patch

import pytest

from coding_agent.tools.base import ToolError
from coding_agent.tools.edit_file import EditFileInput, edit_file
from coding_agent.tools.list_files import ListFilesInput, list_files
from coding_agent.tools.read_file import ReadFileInput, read_file
from coding_agent.tools.search import NO_MATCHES, SearchInput, build_command, search


@pytest.fixture
def workspace(tmp_path):
    """Create a small directory tree."""
    (tmp_path / "a.txt").write_text("alpha\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("bravo\nBRAVO again\n")
    return tmp_path


class TestReadFile:
    """Tests for read_file."""

    def test_reads_full_contents(self, workspace):
        """Test reading a file returns its contents."""
        assert read_file(ReadFileInput(path=str(workspace / "sub" / "b.txt"))) == "bravo\nBRAVO again\n"

    def test_preserves_crlf(self, tmp_path):
        """Test that line endings are returned as stored."""
        target = tmp_path / "dos.txt"
        target.write_bytes(b"one\r\ntwo\r\n")
        assert read_file(ReadFileInput(path=str(target))) == "one\r\ntwo\r\n"

    def test_missing_file(self, tmp_path):
        """Test reading a missing file fails."""
        with pytest.raises(ToolError, match="failed to read file"):
            read_file(ReadFileInput(path=str(tmp_path / "nope.txt")))

    def test_directory(self, workspace):
        """Test reading a directory fails."""
        with pytest.raises(ToolError, match="failed to read file"):
            read_file(ReadFileInput(path=str(workspace / "sub")))


class TestListFiles:
    """Tests for list_files."""

    def test_lists_recursively_with_directory_marker(self, workspace):
        """Test files and directories are listed relative to the root."""
        entries = json.loads(list_files(ListFilesInput(path=str(workspace))))
        assert entries == ["a.txt", "sub/", "sub/b.txt"]

    def test_defaults_to_current_directory(self, workspace, monkeypatch):
        """Test that an empty path lists the working directory."""
        monkeypatch.chdir(workspace)
        entries = json.loads(list_files(ListFilesInput()))
        assert "a.txt" in entries
        assert "sub/" in entries
        assert "sub/b.txt" in entries

    def test_empty_directory(self, tmp_path):
        """Test listing an empty directory."""
        assert json.loads(list_files(ListFilesInput(path=str(tmp_path)))) == []

    def test_missing_directory(self, tmp_path):
        """Test listing a missing path fails."""
        with pytest.raises(ToolError, match="failed to list files"):
            list_files(ListFilesInput(path=str(tmp_path / "missing")))

    def test_file_path(self, workspace):
        """Test listing a regular file fails."""
        with pytest.raises(ToolError, match="not a directory"):
            list_files(ListFilesInput(path=str(workspace / "a.txt")))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_does_not_follow_symlinked_directories(self, workspace):
        """Test that symlinked directories are listed but not descended into."""
        os.symlink(workspace / "sub", workspace / "link")
        entries = json.loads(list_files(ListFilesInput(path=str(workspace))))
        assert "link" in entries
        assert "link/b.txt" not in entries


class TestEditFile:
    """Tests for edit_file."""

    def test_replaces_single_occurrence(self, tmp_path):
        """Test that only the matched span changes."""
        target = tmp_path / "main.py"
        original = b"def main():\r\n    print('hello')\r\n"
        target.write_bytes(original)

        result = edit_file(EditFileInput(path=str(target), old_str="hello", new_str="world"))

        assert result == "File edited successfully"
        assert target.read_bytes() == original.replace(b"hello", b"world")

    def test_replaces_first_match_only(self, tmp_path):
        """Test that only the first occurrence is replaced."""
        target = tmp_path / "notes.txt"
        target.write_text("x x x")

        edit_file(EditFileInput(path=str(target), old_str="x", new_str="y"))

        assert target.read_text() == "y x x"

    def test_missing_string_leaves_file_untouched(self, tmp_path):
        """Test that a missing old_str fails without writing."""
        target = tmp_path / "notes.txt"
        target.write_bytes(b"unchanged\n")
        mtime = target.stat().st_mtime_ns

        with pytest.raises(ToolError, match="not found in file"):
            edit_file(EditFileInput(path=str(target), old_str="absent", new_str="present"))

        assert target.read_bytes() == b"unchanged\n"
        assert target.stat().st_mtime_ns == mtime

    def test_identical_replacement_fails(self, tmp_path):
        """Test that a replacement that changes nothing is reported."""
        target = tmp_path / "notes.txt"
        target.write_text("same")

        with pytest.raises(ToolError, match="not found in file"):
            edit_file(EditFileInput(path=str(target), old_str="same", new_str="same"))

    def test_missing_file(self, tmp_path):
        """Test editing a missing file fails."""
        with pytest.raises(ToolError, match="for editing"):
            edit_file(EditFileInput(path=str(tmp_path / "nope.txt"), old_str="a", new_str="b"))


class TestSearch:
    """Tests for the ripgrep-backed search tool."""

    def test_build_command_defaults(self):
        """Test the default ripgrep invocation."""
        assert build_command(SearchInput(query="TODO")) == [
            "rg",
            "--no-heading",
            "--with-filename",
            "--line-number",
            "--",
            "TODO",
            ".",
        ]

    def test_build_command_flags(self):
        """Test case-insensitivity, match limiting and path scoping."""
        command = build_command(SearchInput(query="-x", path="src", ignore_case=True, max_count=3))
        assert command[-3:] == ["--", "-x", "src"]
        assert "--ignore-case" in command
        assert "--max-count=3" in command

    def test_exit_code_one_is_no_matches(self):
        """Test that ripgrep's no-match exit status is a benign result."""
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="")
        with patch("coding_agent.tools.search.subprocess.run", return_value=completed):
            assert search(SearchInput(query="zzz")) == NO_MATCHES

    def test_other_exit_code_fails_with_stderr(self):
        """Test that other failures carry ripgrep's diagnostics."""
        completed = subprocess.CompletedProcess(args=[], returncode=2, stdout="", stderr="regex parse error\n")
        with patch("coding_agent.tools.search.subprocess.run", return_value=completed):
            with pytest.raises(ToolError, match="exit code 2: regex parse error"):
                search(SearchInput(query="("))

    def test_missing_executable(self):
        """Test a missing ripgrep binary is a tool error."""
        with patch("coding_agent.tools.search.subprocess.run", side_effect=FileNotFoundError("rg")):
            with pytest.raises(ToolError, match="failed to execute ripgrep"):
                search(SearchInput(query="x"))

    def test_returns_stdout(self):
        """Test matches are returned as printed by ripgrep."""
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="a.txt:1:alpha\n", stderr="")
        with patch("coding_agent.tools.search.subprocess.run", return_value=completed):
            assert search(SearchInput(query="alpha")) == "a.txt:1:alpha\n"

    def test_output_decoded_leniently(self):
        """Test that ripgrep output is decoded without failing on invalid UTF-8."""
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="a.txt:1:alpha\n", stderr="")
        with patch("coding_agent.tools.search.subprocess.run", return_value=completed) as run:
            search(SearchInput(query="alpha"))

        kwargs = run.call_args.kwargs
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        assert "text" not in kwargs

    def test_non_utf8_output_keeps_all_matches(self):
        """Test that undecodable bytes in matched lines are replaced, not fatal."""
        script = "import sys; sys.stdout.buffer.write(b'good.txt:1:needle\\nlegacy.txt:1:caf\\xe9\\n')"
        with patch("coding_agent.tools.search.build_command", return_value=[sys.executable, "-c", script]):
            output = search(SearchInput(query="needle"))

        assert output == "good.txt:1:needle\nlegacy.txt:1:caf\ufffd\n"

    @pytest.mark.skipif(shutil.which("rg") is None, reason="ripgrep not installed")
    def test_real_search_with_non_utf8_file(self, tmp_path):
        """Test that a Latin-1 file does not discard matches from other files."""
        (tmp_path / "good.txt").write_text("needle here\n")
        (tmp_path / "legacy.txt").write_bytes(b"needle caf\xe9\n")

        output = search(SearchInput(query="needle", path=str(tmp_path)))

        assert "good.txt:1:needle here" in output
        assert "legacy.txt:1:needle caf\ufffd" in output

    @pytest.mark.skipif(shutil.which("rg") is None, reason="ripgrep not installed")
    def test_real_search(self, workspace):
        """Test a real ripgrep run with filename and line numbers."""
        output = search(SearchInput(query="bravo", path=str(workspace), ignore_case=True))
        lines = output.splitlines()
        assert len(lines) == 2
        assert all("b.txt:" in line for line in lines)
        assert any(":2:BRAVO again" in line for line in lines)

    @pytest.mark.skipif(shutil.which("rg") is None, reason="ripgrep not installed")
    def test_real_search_no_matches(self, workspace):
        """Test a real ripgrep run with no matches."""
        assert search(SearchInput(query="charlie", path=str(workspace))) == NO_MATCHES
