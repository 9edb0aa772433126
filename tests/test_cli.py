# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from gnuplotter.cli import build_parser, main
from gnuplotter.config.plotter_config_settings import PlotterConfigSettings
from gnuplotter.version import __version__


@pytest.fixture(autouse=True)
def _restore_settings() -> Iterator[None]:
    original = PlotterConfigSettings._cfg
    yield
    PlotterConfigSettings._cfg = original


def test_demo_sends_example_sequence(fake_gnuplot) -> None:
    rc = main(["demo", "--output", "out.pdf"])

    assert rc == 0
    assert fake_gnuplot.instances[0].stdin.lines == [
        "plot 23.000000*x",
        "plot 32.000000 * cos(-3.000000 * x)",
        "set terminal pdf",
        "set output 'out.pdf'",
        "replot",
        "q",
    ]
    assert fake_gnuplot.instances[0].stdin.closed is True


def test_demo_default_output(fake_gnuplot) -> None:
    assert main(["demo"]) == 0
    assert "set output 'plot001.pdf'" in fake_gnuplot.instances[0].stdin.lines


def test_cmd_sends_each_line(fake_gnuplot) -> None:
    rc = main(["--persist", "cmd", "set title 'hello'", "plot sin(x)"])

    assert rc == 0
    assert fake_gnuplot.instances[0].args == ["/usr/bin/gnuplot", "-persist"]
    assert fake_gnuplot.instances[0].stdin.lines == ["set title 'hello'", "plot sin(x)"]


def test_debug_flag_echoes_commands(fake_gnuplot, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--debug", "cmd", "set grid"]) == 0
    out = capsys.readouterr().out
    assert "cmd> set grid" in out
    assert "res> 9" in out


def test_missing_gnuplot_returns_error(fake_gnuplot, monkeypatch: pytest.MonkeyPatch,
                                       capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("gnuplotter.lib.executable.shutil.which", lambda name: None)

    assert main(["cmd", "plot x"]) == 1
    assert "could not find path to 'gnuplot'" in capsys.readouterr().err


def test_gnuplot_failure_on_close_returns_error(fake_gnuplot) -> None:
    fake_gnuplot.exit_code = 1
    assert main(["cmd", "plot x"]) == 1


def test_config_file_option(fake_gnuplot, tmp_path: Path) -> None:
    cfg = tmp_path / "system.json"
    cfg.write_text(json.dumps({"Gnuplot": {"executable": "gnuplot", "persist": True}}), encoding="utf-8")

    assert main(["--config", str(cfg), "cmd", "plot x"]) == 0
    assert fake_gnuplot.instances[0].args == ["/usr/bin/gnuplot", "-persist"]


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--version"])
    assert __version__ in capsys.readouterr().out


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
