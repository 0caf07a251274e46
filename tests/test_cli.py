import io
import json

import pytest

from gemcalc.__main__ import main

PHRASE = "נכנס יין יצא סוד"


def test_calculate(capsys):
    assert main(["calculate", "בעזרת השם"]) == 0
    assert capsys.readouterr().out == "1024\n"


def test_calculate_with_method(capsys):
    assert main(["-m", "mispar-gadol", "calculate", "בעזרת השם"]) == 0
    assert capsys.readouterr().out == "1584\n"


def test_calculate_verbose(capsys):
    assert main(["-v", "calculate", "שלום"]) == 0
    assert capsys.readouterr().out == "Gematria value for 'שלום': 376\n"


def test_calculate_json_keeps_vowels_when_asked(capsys):
    shalom = "ש\u05B8\u05C1לו\u05B9ם"
    assert main(["-p", "-c", "calculate", shalom, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"text": shalom, "word": shalom, "method": "mispar-hechrechi", "value": 376}


def test_search_match(capsys):
    assert main(["search-match", "יין", PHRASE]) == 0
    assert capsys.readouterr().out == "יין\nסוד\n"


def test_search_match_reads_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(PHRASE + "\n"))
    assert main(["search-match", "יין", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == ["יין", "סוד"]


def test_group_words(capsys):
    assert main(["group-words", PHRASE]) == 0
    assert capsys.readouterr().out == "  70 -> יין, סוד\n"


def test_group_words_verbose_from_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(PHRASE))
    assert main(["--verbose", "group-words"]) == 0
    assert capsys.readouterr().out == "Gematria value   70: יין, סוד\n"


def test_unimplemented_method_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["-m", "mispar-siduri", "calculate", "א"])
    assert exc.value.code == 2


def test_method_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("GEMCALC_METHOD", "mispar-gadol")
    assert main(["calculate", "ם"]) == 0
    assert capsys.readouterr().out == "600\n"


def test_unimplemented_method_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("GEMCALC_METHOD", "mispar-boneh")
    with pytest.raises(SystemExit) as exc:
        main(["calculate", "א"])
    assert exc.value.code == 2
    assert "mispar-boneh" in capsys.readouterr().err


def test_preserve_vowels_from_environment_can_be_turned_off(capsys, monkeypatch):
    monkeypatch.setenv("GEMCALC_PRESERVE_VOWELS", "1")
    shalom = "ש\u05B8\u05C1לו\u05B9ם"

    assert main(["calculate", shalom, "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["word"] == shalom

    assert main(["--no-preserve-vowels", "calculate", shalom, "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["word"] == "שלום"


def test_value_error_inside_command_is_not_a_usage_error(monkeypatch):
    def broken(args):
        raise ValueError("boom")

    monkeypatch.setattr("gemcalc.__main__.cmd_calculate", broken)
    with pytest.raises(ValueError, match="boom"):
        main(["calculate", "א"])
