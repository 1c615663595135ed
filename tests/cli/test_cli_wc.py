"""End-to-end tests for the mywc command."""

from typer.testing import CliRunner

from shelltools.cli.wc import app

runner = CliRunner()


def test_counts_words_by_default(write_file):
    a = write_file("a.txt", "one two\nthree\n")
    b = write_file("b.txt", "four\n")

    result = runner.invoke(app, [str(a), str(b)])

    assert result.exit_code == 0
    assert result.stdout == f"3\t{a}\n1\t{b}\n"


def test_line_mode(write_file):
    a = write_file("a.txt", "1\n2\n3\n")
    result = runner.invoke(app, ["-l", str(a)])
    assert result.stdout == f"3\t{a}\n"


def test_char_mode(write_file):
    a = write_file("a.txt", "héllo\n")
    result = runner.invoke(app, ["-m", str(a)])
    assert result.stdout == f"6\t{a}\n"


def test_conflicting_modes_fail(write_file):
    a = write_file("a.txt", "x\n")
    result = runner.invoke(app, ["-l", "-w", str(a)])
    assert result.exit_code == 1
    assert "Only one of -l, -w, -m can be specified" in result.stderr
    assert result.stdout == ""


def test_bad_paths_reported_and_skipped(write_file, tmp_path):
    good = write_file("good.txt", "a b c\n")
    missing = tmp_path / "missing.txt"

    result = runner.invoke(app, [str(missing), str(tmp_path), str(good)])

    assert result.exit_code == 0
    assert result.stdout == f"3\t{good}\n"
    assert f"{missing}: No such file or directory" in result.stderr
    assert f"{tmp_path} is not a file" in result.stderr


def test_duplicate_paths_printed_once(write_file):
    a = write_file("a.txt", "x y\n")
    result = runner.invoke(app, [str(a), str(a)])
    assert result.stdout == f"2\t{a}\n"


def test_requires_files():
    result = runner.invoke(app, [])
    assert result.exit_code == 2


def test_workers_option(write_file):
    paths = [str(write_file(f"f{i}.txt", "w\n")) for i in range(10)]
    result = runner.invoke(app, ["--workers", "2", *paths])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [f"1\t{p}" for p in paths]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("shelltools ")
