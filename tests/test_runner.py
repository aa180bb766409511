import os
import stat
import sys

import pytest

from pipexpy.config import PipexConfig
from pipexpy.runner import StageError, run_pipeline

_SCRIPTS = {
    "upper": "import sys\nsys.stdout.write(sys.stdin.read().upper())\n",
    "count": "import sys\nprint(len(sys.stdin.readlines()))\n",
    "echoargs": "import sys\nprint('|'.join(sys.argv[1:]))\n",
    "exitwith": "import sys\nsys.stdin.read()\nsys.exit(int(sys.argv[1]))\n",
}


@pytest.fixture
def bin_dir(tmp_path):
    directory = tmp_path / "bin"
    directory.mkdir()
    for name, body in _SCRIPTS.items():
        script = directory / name
        script.write_text(f"#!{sys.executable}\n{body}")
        script.chmod(0o755)
    return directory


def _config(tmp_path, bin_dir, cmd1, cmd2, infile="in.txt", outfile="out.txt"):
    return PipexConfig.from_argv(
        [str(tmp_path / infile), cmd1, cmd2, str(tmp_path / outfile)],
        {"PATH": str(bin_dir)},
    )


def test_pipeline_passes_data_through_both_commands(tmp_path, bin_dir):
    text = "hello\nworld\n"
    (tmp_path / "in.txt").write_text(text)
    config = _config(tmp_path, bin_dir, "upper", "upper")
    assert run_pipeline(config) == 0
    assert (tmp_path / "out.txt").read_text() == text.upper()


def test_pipeline_splits_arguments(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("")
    config = _config(tmp_path, bin_dir, "echoargs a  b", "upper")
    run_pipeline(config)
    assert (tmp_path / "out.txt").read_text() == "A|B\n"


def test_pipeline_returns_status_of_second_command(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("x\n")
    config = _config(tmp_path, bin_dir, "upper", "exitwith 3")
    assert run_pipeline(config) == 3


def test_pipeline_truncates_existing_output(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("one\n")
    (tmp_path / "out.txt").write_text("old content that is longer\n")
    run_pipeline(_config(tmp_path, bin_dir, "upper", "upper"))
    assert (tmp_path / "out.txt").read_text() == "ONE\n"


def test_output_file_mode(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("")
    old_mask = os.umask(0)
    try:
        run_pipeline(_config(tmp_path, bin_dir, "upper", "upper"))
    finally:
        os.umask(old_mask)
    mode = stat.S_IMODE(os.stat(tmp_path / "out.txt").st_mode)
    assert mode == 0o644


def test_missing_infile_still_runs_second_command(tmp_path, bin_dir):
    config = _config(tmp_path, bin_dir, "upper", "count", infile="absent.txt")
    with pytest.raises(StageError) as info:
        run_pipeline(config)
    assert info.value.stage == "cmd1"
    assert info.value.message == "Failed to open file1."
    assert isinstance(info.value.cause, FileNotFoundError)
    assert info.value.related == ()
    assert (tmp_path / "out.txt").read_text() == "0\n"


def test_unknown_second_command_creates_empty_output(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("data\n")
    (tmp_path / "out.txt").write_text("stale\n")
    config = _config(tmp_path, bin_dir, "upper", "no-such-command")
    with pytest.raises(StageError) as info:
        run_pipeline(config)
    assert info.value.stage == "cmd2"
    assert info.value.message == "Failed to execute cmd2."
    assert (tmp_path / "out.txt").read_text() == ""


def test_unknown_first_command_gives_empty_input(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("a\nb\n")
    config = _config(tmp_path, bin_dir, "no-such-command", "count")
    with pytest.raises(StageError) as info:
        run_pipeline(config)
    assert info.value.stage == "cmd1"
    assert (tmp_path / "out.txt").read_text() == "0\n"


def test_empty_command_is_a_stage_error(tmp_path, bin_dir):
    (tmp_path / "in.txt").write_text("a\n")
    config = _config(tmp_path, bin_dir, "   ", "upper")
    with pytest.raises(StageError) as info:
        run_pipeline(config)
    assert info.value.stage == "cmd1"


def test_both_stages_failing_are_reported(tmp_path, bin_dir):
    config = _config(
        tmp_path, bin_dir, "upper", "upper", infile="absent.txt",
        outfile="missing-dir/out.txt",
    )
    with pytest.raises(StageError) as info:
        run_pipeline(config)
    assert info.value.stage == "cmd1"
    assert [e.stage for e in info.value.related] == ["cmd2"]
    assert info.value.related[0].message == "Failed to open file2."


def test_stage_error_message_reads_like_perror():
    cause = FileNotFoundError(2, "No such file or directory")
    error = StageError("cmd1", "Failed to open file1.", cause)
    assert str(error) == "Failed to open file1.: No such file or directory"