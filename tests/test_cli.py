import json

import pytest
from click.testing import CliRunner

from entropyforge.cli import cli
from entropyforge.core.engine import ForgeEngine
from entropyforge.core.errors import EntropyFailure
from entropyforge.generators.generator import CHARSET


@pytest.fixture
def run(config_file):
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, ["--config", str(config_file), *args], obj={})

    return invoke


def test_csprng_quiet_prints_bare_passwords(run):
    result = run("--quiet", "csprng", "--length", "20", "--count", "3")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 3
    assert all(len(line) == 20 and set(line) <= set(CHARSET) for line in lines)


def test_csprng_json_output(run):
    result = run("--output", "json", "csprng", "--length", "16")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["report_metadata"]["command"] == "csprng"
    assert data["records"][0]["length"] == 16


def test_csprng_console_output(run):
    result = run("csprng", "--length", "12")
    assert result.exit_code == 0, result.output
    assert "CSPRNG Strings" in result.output


def test_diceware_options_reach_generator(run):
    result = run(
        "--quiet", "diceware", "--words", "4", "--separator", " ",
        "--capitalize", "--numbers",
    )
    assert result.exit_code == 0, result.output
    words = result.output.strip().split(" ")
    assert len(words) == 4
    assert any(ch.isdigit() for ch in result.output)
    assert all(w[0].isupper() for w in words)


def test_diceware_invalid_word_count_exits_1(run):
    result = run("--quiet", "diceware", "--words", "0")
    assert result.exit_code == 1
    assert "word_count" in result.output


def test_analyze_json(run):
    result = run("--output", "json", "analyze", "password")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["analysis"]["score"] == 55
    assert data["analysis"]["weaknesses"] == ["Limited character variety", "Low entropy"]


def test_analyze_console_masks_password(run):
    result = run("analyze", "Tr0ub4dor&3")
    assert result.exit_code == 0, result.output
    assert "Tr0ub4dor&3" not in result.output
    assert "Strength Meter" in result.output


def test_selftest_json_to_file(run, tmp_path):
    target = tmp_path / "selftest.json"
    result = run("--output", "json", "--output-file", str(target), "selftest", "--runs", "720")
    data = json.loads(target.read_text(encoding="utf-8"))
    assert [r["name"] for r in data["uniformity"]["results"]] == ["charset", "dice", "words"]
    assert result.exit_code == (0 if data["uniformity"]["passed"] else 1)


def test_entropy_failure_exits_1(run, monkeypatch):
    def fail(self, length, buffer=None):
        raise EntropyFailure("Entropy source failed: no entropy")

    monkeypatch.setattr(ForgeEngine, "csprng_analysis", fail)
    result = run("csprng")
    assert result.exit_code == 1
    assert "Entropy source failed" in result.output


def test_version_option(run):
    result = run("--version")
    assert result.exit_code == 0
    assert "1.0.0" in result.output
