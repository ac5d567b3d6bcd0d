import json

from loguru import logger
from qualfsa import cli


def test_cli_prints_table(capsys):
    status = cli.main(["ab", "-q", "starts with:a", "-q", "ends with:b"])
    captured = capsys.readouterr()
    assert status == 0
    lines = captured.out.splitlines()
    assert lines[0] == "Start state: Q0"
    assert lines[1] == "Final states: {Q3}"
    assert lines[2] == "State  a     b"
    assert lines[3] == "-> Q0  {Q1}  {Q2}"
    assert len(lines) == 8


def test_cli_json(capsys):
    status = cli.main(["01", "-q", "ends_with:11", "--json"])
    captured = capsys.readouterr()
    assert status == 0
    payload = json.loads(captured.out)
    assert payload["states"] == ["Q0", "Q1", "Q2"]
    assert payload["alphabet"] == ["0", "1"]
    assert payload["startState"] == "Q0"
    assert payload["finalStates"] == ["Q2"]
    assert payload["deadState"] is None
    assert payload["transitions"]["Q2"] == {"0": ["Q0"], "1": ["Q2"]}


def test_cli_no_qualities(capsys):
    assert cli.main(["ab"]) == 0
    out = capsys.readouterr().out
    assert "Final states: {Q0}" in out


def test_cli_bad_alphabet(capsys):
    status = cli.main(["aab", "-q", "contains:a"])
    captured = capsys.readouterr()
    assert status == 2
    assert captured.out == ""
    assert captured.err.strip() == "error: Alphabet has duplicate symbols: a"


def test_cli_bad_quality(capsys):
    status = cli.main(["ab", "-q", "contains:"])
    captured = capsys.readouterr()
    assert status == 2
    assert captured.out == ""
    assert captured.err.startswith("error: ")


def test_cli_state_limit(capsys):
    status = cli.main(
        ["ab", "-q", "starts with:a", "-q", "ends with:b", "--max-states", "3"]
    )
    captured = capsys.readouterr()
    assert status == 2
    assert captured.out == ""
    assert "exceeded 3 states" in captured.err


def test_cli_verbose(capsys):
    try:
        assert cli.main(["ab", "-q", "contains:ab", "-v"]) == 0
    finally:
        logger.disable("qualfsa")
    assert "Final states: {Q2}" in capsys.readouterr().out
