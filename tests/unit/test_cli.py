"""
Тесты для CLI (hugenum)

Команды вызываются через main(argv); вывод проверяется через capsys.
"""

import json
import logging

import pytest

from src.hugenum.cli import BINARY_OPS, build_parser, main


@pytest.fixture(autouse=True)
def reset_logging():
    """main() настраивает логгер hugenum; после теста снимаем handlers."""
    yield
    logging.getLogger("hugenum").handlers.clear()


class TestFactorialCommand:
    """Тесты hugenum factorial"""

    def test_human_output(self, capsys):
        assert main(["factorial", "--upto", "5"]) == 0
        out = capsys.readouterr().out
        assert "   0! = 1" in out
        assert "   5! = 120" in out

    def test_raw_output(self, capsys):
        assert main(["--output", "raw", "factorial", "--upto", "10"]) == 0
        out = capsys.readouterr().out
        assert "  10! = 36288e2" in out

    def test_json_output(self, capsys):
        assert main(["--output", "json", "factorial", "--upto", "3"]) == 0
        last = capsys.readouterr().out.strip().splitlines()[-1]
        payload = last.split(" = ", 1)[1]
        assert json.loads(payload) == {"fraction": 6, "exponent": 0}


class TestPowerCommand:
    """Тесты hugenum power"""

    def test_power_of_two(self, capsys):
        assert main(["power", "2", "--upto", "10"]) == 0
        out = capsys.readouterr().out
        assert "2^0 = 1" in out
        assert "2^10 = 1024" in out

    def test_invalid_base(self, capsys):
        assert main(["power", "abc"]) == 1
        assert "error:" in capsys.readouterr().err


class TestEvalCommand:
    """Тесты hugenum eval"""

    def test_division(self, capsys):
        assert main(["eval", "100", "/", "4"]) == 0
        assert capsys.readouterr().out.strip() == "25"

    def test_comparison(self, capsys):
        assert main(["eval", "6022e20", "<", "1416e29"]) == 0
        assert capsys.readouterr().out.strip() == "True"

    def test_power(self, capsys):
        assert main(["eval", "2", "**", "10"]) == 0
        assert capsys.readouterr().out.strip() == "1024"

    def test_safe_multiply_raw(self, capsys):
        assert main(["--output", "raw", "eval", "4611686018427387904", "safe*", "4"]) == 0
        assert capsys.readouterr().out.strip() == "184467440737095516e2"

    def test_json(self, capsys):
        assert main(["--output", "json", "eval", "6", "*", "7"]) == 0
        assert json.loads(capsys.readouterr().out) == {"fraction": 42, "exponent": 0}

    def test_division_by_zero_reported(self, capsys):
        assert main(["eval", "1", "/", "0"]) == 1
        assert "error:" in capsys.readouterr().err

    def test_unknown_operator_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["eval", "1", "%", "2"])

    def test_operator_table(self):
        assert set(BINARY_OPS) == {
            "+", "-", "*", "safe*", "/", "**", "<", "<=", "==", ">=", ">",
        }


class TestConstantsCommand:
    """Тесты hugenum constants"""

    def test_constants(self, capsys):
        assert main(["constants"]) == 0
        out = capsys.readouterr().out
        assert "Avogadro constant" in out
        assert "6.022e+23" in out
        assert "1.416e+32" in out
        assert "aligned Na = 6022e20" in out
        assert "aligned Tp = 1416000000000e20" in out
        assert "Na == Tp: False" in out
        assert "Tp == aligned Tp: True" in out
        assert "Na < Tp: True" in out
        assert "Na > Tp: False" in out


class TestMain:
    """Тесты точки входа"""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: hugenum" in capsys.readouterr().out

    def test_debug_logging_shows_shedding(self, capsys):
        assert main(["--log-level", "DEBUG", "factorial", "--upto", "25"]) == 0
        assert "shed" in capsys.readouterr().err

    def test_json_logs(self, capsys):
        assert main(["--json-logs", "--log-level", "INFO", "factorial", "--upto", "1"]) == 0
        err_lines = capsys.readouterr().err.strip().splitlines()
        record = json.loads(err_lines[0])
        assert record["level"] == "INFO"
        assert record["logger"] == "hugenum.cli"
