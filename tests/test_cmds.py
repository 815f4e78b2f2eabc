import sys

import yargs
from yargs import cmds, const


def _main(monkeypatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", [const.ARGV0, *args])
    return yargs.main()


def test_probe(monkeypatch, capsys):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    code = _main(
        monkeypatch,
        *["-f", "f,fetch", "-o", "i", "-o", "k", "-o", "x", "--"],
        *["--fetch", "-i", "5", "--k=", "extra"],
    )
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "flag f,fetch: true",
        "value i: '5'",
        "value k: ''",
        "value x: (absent)",
        "remaining: ['extra']",
    ]


def test_probe_multi_and_truncate(monkeypatch, capsys):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    code = _main(
        monkeypatch,
        *["-m", "k", "-t", "++", "--"],
        *["--k=1", "a", "-k", "2", "++", "b"],
    )
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "values k: ['1', '2']",
        "truncate ++: ['b']",
        "remaining: ['a']",
    ]


def test_probe_extra_args_from_env(monkeypatch, capsys):
    monkeypatch.setenv(const.EXTRA_ARGS_ENV, "-f v")
    assert _main(monkeypatch, "--", "-v") == 0
    assert capsys.readouterr().out.splitlines() == [
        "flag v: true",
        "remaining: []",
    ]


def test_probe_without_separator(monkeypatch, capsys):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    assert _main(monkeypatch, "-f", "v") == 1
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "Usage: yargs" in err


def test_probe_help(monkeypatch, capsys):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    assert _main(monkeypatch, "--help") == 0
    assert "Query a flag" in capsys.readouterr().out


def test_probe_parser_collects_queries():
    args = cmds.ProbeArgs()
    cmds.probeParser(args).parse(["-f", "a,b", "--flag=c", "-v", "--", "x"])
    assert args.flags == [["a", "b"], ["c"]]
    assert args.verbose is True
    assert args.tokens == ["x"]
