"""Тесты для command line riemann-sum.

Покрытие:
- Текстовый и JSON вывод
- Exit codes (0 / 1 / 2)
- --all-rules, --fallback-defaults, --interactive
- Transcript: баннеры, шаги, append-only
"""

import io
import json
import logging

import pytest

from src.app.cli import BANNER_LINE, main
from src.core.config import get_settings


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """Изоляция от окружения и восстановление root logger."""
    for name in ("RIEMANN_DEFAULT_RULE", "RIEMANN_TRANSCRIPT_PATH", "RIEMANN_LOG_FILE_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    get_settings.cache_clear()


def run(*argv, input_fn=None):
    """Helper: запуск main, возвращает (code, stdout, stderr)."""
    stdout, stderr = io.StringIO(), io.StringIO()
    kwargs = {"input_fn": input_fn} if input_fn else {}
    code = main(list(argv), stdout=stdout, stderr=stderr, **kwargs)
    return code, stdout.getvalue(), stderr.getvalue()


class TestTextOutput:
    def test_defaults(self):
        code, out, _ = run()
        assert code == 0
        assert "Function: f(x) = x^2" in out
        assert "Rule: midpoint" in out
        assert "Partitions: 10" in out
        assert "Riemann sum: " in out
        assert "Exact value: " in out
        assert "Absolute difference: " in out

    def test_explicit_parameters(self):
        code, out, _ = run("--function", "2x+3", "-a", "0", "-b", "1", "-n", "4", "--rule", "left")
        assert code == 0
        # 0.25 * (3 + 3.5 + 4 + 4.5)
        assert "Riemann sum: 3.75" in out

    def test_list_functions(self):
        code, out, _ = run("--list-functions")
        assert code == 0
        assert out.splitlines()[0] == "0 = f(x) = x^2"
        assert len(out.splitlines()) == 6

    def test_all_rules(self):
        code, out, _ = run("-f", "LINEAR", "-n", "4", "--all-rules")
        assert code == 0
        assert "Rule: left" in out
        assert "Rule: right" in out
        assert "Rule: midpoint" in out


class TestFailures:
    def test_engine_failure_exit_code(self):
        code, out, err = run("-a", "2", "-b", "1")
        assert code == 1
        assert "Failure: NonPositiveInterval" in out
        assert "error: NonPositiveInterval" in err

    def test_out_of_range(self):
        code, _, err = run("-b", "5000")
        assert code == 1
        assert "OutOfRangeEndpoint" in err

    def test_fallback_defaults(self):
        code, out, _ = run("-n", "100000", "--fallback-defaults", "--rule", "left")
        assert code == 0
        assert "Defaults substituted after InvalidPartitionCount" in out
        assert "Partitions: 10" in out

    def test_unknown_function_is_argument_error(self):
        with pytest.raises(SystemExit) as exc:
            run("--function", "tan(x)")
        assert exc.value.code == 2

    def test_unknown_log_level_is_argument_error(self):
        with pytest.raises(SystemExit) as exc:
            run("--log-level", "verbose")
        assert exc.value.code == 2

    def test_log_level_case_insensitive(self):
        code, _, _ = run("--log-level", "warning")
        assert code == 0
        assert logging.getLogger().level == logging.WARNING

    def test_bad_rule_is_argument_error(self):
        with pytest.raises(SystemExit) as exc:
            run("--rule", "middle")
        assert exc.value.code == 2


class TestJsonOutput:
    def test_success_payload(self):
        code, out, _ = run("--json", "-n", "4", "--rule", "right", "-f", "0")
        payload = json.loads(out)

        assert code == 0
        assert payload["function"] == "x^2"
        entry = payload["results"][0]
        assert entry["request"] == {"a": 0.0, "b": 1.0, "n": 4, "rule": "right"}
        assert entry["result"]["ok"] is True
        assert entry["result"]["value"] == pytest.approx(0.46875)
        assert entry["exact"] == pytest.approx(1.0 / 3.0)
        assert entry["used_defaults"] is False

    def test_failure_payload(self):
        code, out, _ = run("--json", "-a", "3", "-b", "3")
        entry = json.loads(out)["results"][0]
        assert code == 1
        assert entry["result"]["failure"] == "NonPositiveInterval"
        assert entry["result"]["value"] == 0.0

    def test_nan_value_serialized_as_null(self):
        code, out, _ = run("--json", "-f", "sqrt(x)", "-a", "-1", "-b", "1", "--rule", "left")
        entry = json.loads(out)["results"][0]
        assert code == 0
        assert entry["result"]["value"] is None
        assert entry["exact"] is None

    def test_rejected_infinite_endpoint_payload(self):
        code, out, err = run("-f", "sin(x)", "-a", "inf", "-b", "1", "--json")
        entry = json.loads(out)["results"][0]

        assert code == 1
        assert entry["result"]["failure"] == "OutOfRangeEndpoint"
        assert entry["result"]["value"] == 0.0
        assert entry["exact"] is None
        assert "error: OutOfRangeEndpoint" in err

    def test_rejected_request_has_no_exact_value(self):
        code, out, _ = run("--json", "-f", "cos(x)", "-a", "2", "-b", "1")
        assert code == 1
        assert json.loads(out)["results"][0]["exact"] is None

    def test_rejected_partition_count_payload(self):
        code, out, _ = run("--json", "-n", "0")
        entry = json.loads(out)["results"][0]
        assert code == 1
        assert entry["request"]["n"] == 0
        assert entry["result"]["failure"] == "InvalidPartitionCount"


class TestInteractive:
    def test_prompts(self):
        answers = iter(["3", "0", "2", "8", "midpoint"])
        code, out, _ = run("--interactive", input_fn=lambda prompt: next(answers))

        assert code == 0
        assert "3 = f(x) = cos(x)" in out
        assert "Function: f(x) = cos(x)" in out
        assert "Partitions: 8" in out

    def test_invalid_input_uses_defaults(self):
        answers = iter(["1", "oops", "2", "8", "left"])
        code, out, _ = run("--interactive", input_fn=lambda prompt: next(answers))

        assert code == 0
        assert "Invalid input." in out
        assert "Interval: [0.0, 1.0]" in out
        assert "Partitions: 10" in out


class TestTranscript:
    def test_transcript_contents(self, tmp_path):
        path = tmp_path / "reimann_sum_output.txt"
        code, _, _ = run("--transcript", str(path), "--steps", "-n", "3", "--rule", "left")

        lines = path.read_text(encoding="utf-8").splitlines()
        assert code == 0
        assert lines[:3] == [BANNER_LINE, "Start Of Program", BANNER_LINE]
        assert lines[-3:] == [BANNER_LINE, "End Of Program", BANNER_LINE]
        assert sum(1 for line in lines if line.startswith("i=")) == 3
        assert any(line.startswith("Riemann sum: ") for line in lines)

    def test_transcript_append_only(self, tmp_path):
        path = tmp_path / "transcript.txt"
        run("--transcript", str(path))
        run("--transcript", str(path))

        content = path.read_text(encoding="utf-8")
        assert content.count("Start Of Program") == 2

    def test_steps_without_transcript_go_to_log(self):
        code, _, err = run("--steps", "-n", "2", "--rule", "left", "--log-level", "INFO")
        assert code == 0
        assert "i=0 x=0.0" in err
        assert "i=1 x=0.5" in err

    def test_transcript_from_settings(self, monkeypatch, tmp_path):
        path = tmp_path / "from_env.txt"
        monkeypatch.setenv("RIEMANN_TRANSCRIPT_PATH", str(path))
        get_settings.cache_clear()

        run("-n", "2")

        assert "Start Of Program" in path.read_text(encoding="utf-8")
