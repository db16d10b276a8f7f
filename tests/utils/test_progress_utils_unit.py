from __future__ import annotations

from src.utils.progress import progress_iter


def test_progress_iter_disabled_yields_everything():
    assert list(progress_iter(iter(range(4)), total=4, disable=True)) == [0, 1, 2, 3]


def test_progress_iter_env_flag_disables(monkeypatch, capsys):
    monkeypatch.setenv("APEXDOC_PROGRESS", "off")
    assert list(progress_iter(["a", "b"], total=2, desc="x")) == ["a", "b"]
    assert capsys.readouterr().err == ""


def test_progress_iter_enabled_consumes_generator_once(capsys):
    def gen():
        yield from ("x", "y", "z")

    assert list(progress_iter(gen(), total=3, desc="Extracting", disable=False)) == ["x", "y", "z"]
    assert "Extracting" in capsys.readouterr().err
