"""
命令列介面測試
"""
import io

import pytest

from boxfix import __version__
from boxfix.cli import build_parser, main

MISALIGNED = "+-------+\n| hi|\n+-------+\n"
FIXED = "+-------+\n| hi    |\n+-------+\n"


def _feed_stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(text.encode("utf-8")), encoding="utf-8"))


@pytest.fixture
def diagram_file(tmp_path):
    path = tmp_path / "diagram.md"
    path.write_text(MISALIGNED, encoding="utf-8")
    return path


class TestOutput:
    """輸出模式測試"""

    def test_file_to_stdout(self, diagram_file, capsys):
        assert main([str(diagram_file)]) == 0

        assert capsys.readouterr().out == FIXED
        assert diagram_file.read_text(encoding="utf-8") == MISALIGNED

    def test_stdin_to_stdout(self, monkeypatch, capsys):
        _feed_stdin(monkeypatch, MISALIGNED)

        assert main([]) == 0
        assert capsys.readouterr().out == FIXED

    def test_stdin_keeps_crlf(self, monkeypatch, capsys):
        _feed_stdin(monkeypatch, MISALIGNED.replace("\n", "\r\n"))

        assert main([]) == 0
        assert capsys.readouterr().out == FIXED.replace("\n", "\r\n")

    def test_stdin_diff_labels(self, monkeypatch, capsys):
        _feed_stdin(monkeypatch, MISALIGNED)

        assert main(["--diff"]) == 0

        out = capsys.readouterr().out
        assert "--- a/stdin" in out
        assert "+++ b/stdin" in out

    def test_diff(self, diagram_file, capsys):
        assert main(["--diff", str(diagram_file)]) == 0

        out = capsys.readouterr().out
        assert f"--- a/{diagram_file}" in out
        assert f"+++ b/{diagram_file}" in out
        assert "-| hi|" in out
        assert "+| hi    |" in out

    def test_diff_empty_when_unchanged(self, tmp_path, capsys):
        path = tmp_path / "plain.txt"
        path.write_text("nothing to see here\n", encoding="utf-8")

        assert main(["--diff", str(path)]) == 0
        assert capsys.readouterr().out == ""

    def test_min_score_option(self, diagram_file, capsys):
        assert main(["-s", "0.8", str(diagram_file)]) == 0

        assert capsys.readouterr().out == MISALIGNED


class TestInPlace:
    """就地寫回測試"""

    def test_in_place(self, diagram_file, capsys):
        assert main(["-i", str(diagram_file)]) == 0

        assert diagram_file.read_text(encoding="utf-8") == FIXED
        assert capsys.readouterr().out == ""

    def test_backup(self, diagram_file):
        assert main(["-i", "--backup", ".orig", str(diagram_file)]) == 0

        backup = diagram_file.with_name(diagram_file.name + ".orig")
        assert backup.read_text(encoding="utf-8") == MISALIGNED
        assert diagram_file.read_text(encoding="utf-8") == FIXED

    def test_in_place_requires_file(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["-i"])

        assert exc_info.value.code == 2

    def test_backup_requires_in_place(self, diagram_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["--backup", ".orig", str(diagram_file)])

        assert exc_info.value.code == 2


class TestErrors:
    """錯誤處理測試"""

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.txt")]) == 1

    @pytest.mark.parametrize("argv", [["-m", "0"], ["-s", "1.5"], ["-t", "0"]])
    def test_invalid_config(self, argv, diagram_file):
        with pytest.raises(SystemExit) as exc_info:
            main(argv + [str(diagram_file)])

        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestParser:
    """參數解析預設值"""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.input is None
        assert args.max_iters == 10
        assert args.min_score == 0.5
        assert args.tab_width == 4
        assert not args.all
        assert not args.in_place
        assert not args.diff
