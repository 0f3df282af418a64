import io
import os

import pytest

from osdemo.intro import (
    cpu_loop,
    main,
    mem_loop,
    print_layout,
    tlb_measure,
    write_file,
)


def test_write_file_round_trip(tmp_path):
    path = tmp_path / "file"
    text = "hello world\n"
    assert write_file(path, text) == len(text.encode())
    assert path.read_text() == text


def test_write_file_truncates_previous_content(tmp_path):
    path = tmp_path / "file"
    path.write_text("a much longer previous content\n")
    write_file(path, "short\n")
    assert path.read_text() == "short\n"


def test_write_file_into_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        write_file(tmp_path / "nope" / "file", "x")


def test_cpu_loop_zero_times_prints_nothing():
    out = io.StringIO()
    cpu_loop("A", 0, out)
    assert out.getvalue() == ""


def test_cpu_loop_prints_text_once_per_round():
    out = io.StringIO()
    cpu_loop("A", 1, out)
    assert out.getvalue() == "A\n"


def test_mem_loop_counts_up():
    out = io.StringIO()
    result = mem_loop(7, 1, out)
    lines = out.getvalue().splitlines()
    pid = os.getpid()
    assert result == 7 + 1
    assert lines[0].startswith(f"({pid}) addr pointed to by p: 0x")
    assert lines[1] == f"({pid}) value of p: {7 + 1}"


def test_mem_loop_without_rounds_keeps_value():
    out = io.StringIO()
    assert mem_loop(42, 0, out) == 42
    assert len(out.getvalue().splitlines()) == 1


def test_print_layout_prints_what_it_returns():
    out = io.StringIO()
    layout = print_layout(out)
    assert out.getvalue().splitlines() == [
        f"location of code : {hex(layout['code'])}",
        f"location of heap : {hex(layout['heap'])}",
        f"location of stack: {hex(layout['stack'])}",
    ]


def test_tlb_measure_gives_positive_time():
    assert tlb_measure(4, 10) > 0.0


@pytest.mark.parametrize("pages, iterations", [(0, 1), (1, 0), (-1, 5)])
def test_tlb_measure_rejects_non_positive_counts(pages, iterations):
    with pytest.raises(ValueError):
        tlb_measure(pages, iterations)


def test_main_io_writes_hello_world(tmp_path):
    path = tmp_path / "file"
    assert main(["io", "--path", str(path)]) == 0
    assert path.read_text() == "hello world\n"


def test_main_tlb_prints_time(capsys):
    assert main(["tlb", "2", "3"]) == 0
    assert capsys.readouterr().out.startswith("Time per access: ")


def test_main_tlb_reports_bad_arguments(capsys):
    assert main(["tlb", "0", "3"]) == 1
    assert "intro:" in capsys.readouterr().err