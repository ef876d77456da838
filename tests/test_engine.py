import io
import re
import threading
import time

import pytest

from conftest import ScriptedSource

from entropyforge.core import engine as engine_module
from entropyforge.core.engine import ForgeEngine
from entropyforge.core.errors import EntropyFailure, InvalidOptions
from entropyforge.core.models import AnalysisRecord, DicewareOptions
from entropyforge.generators.generator import PasswordGenerator
from entropyforge.generators.random_source import RandomSource

_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


def test_csprng_analysis_record(engine):
    record = engine.csprng_analysis(24)
    assert isinstance(record, AnalysisRecord)
    assert record.length == len(record.password) == 24
    assert _TIMESTAMP.match(record.generated_at)
    assert record.complexity == engine.analyzer.analyze(record.password)


def test_csprng_analysis_zero_length(engine):
    record = engine.csprng_analysis(0)
    assert record.password == ""
    assert record.complexity.score == 0


def test_diceware_analysis_record(engine):
    opts = DicewareOptions(word_count=6, capitalize=True, add_numbers=True, add_symbols=True)
    record = engine.diceware_analysis(opts)
    assert record.length == len(record.password)
    assert record.password.count("-") == 5
    assert record.complexity.character_types >= 3


def test_caller_buffer_is_used(engine):
    buffer = io.StringIO("old")
    record = engine.csprng_analysis(10, buffer)
    assert buffer.getvalue() == record.password


def test_pool_buffer_is_returned(engine):
    engine.csprng_analysis(8)
    engine.csprng_analysis(8)
    assert engine.pool.idle == 1


def test_generation_errors_propagate(engine):
    with pytest.raises(InvalidOptions):
        engine.csprng_analysis(-5)
    with pytest.raises(InvalidOptions):
        engine.diceware_analysis(DicewareOptions(word_count=0))
    assert engine.pool.idle == 1


def test_entropy_failure_propagates(quiet_config):
    def broken(k: int) -> bytes:
        raise OSError("no entropy")

    failing = ForgeEngine(quiet_config, generator=PasswordGenerator(RandomSource(broken)))
    with pytest.raises(EntropyFailure):
        failing.csprng_analysis(8)


def test_failures_are_logged(quiet_config, caplog):
    def broken(k: int) -> bytes:
        raise OSError("no entropy")

    failing = ForgeEngine(quiet_config, generator=PasswordGenerator(RandomSource(broken)))
    failing.logger.underlying.propagate = True
    with caplog.at_level("ERROR", logger="entropyforge.engine"):
        with pytest.raises(EntropyFailure):
            failing.csprng_analysis(8)
    assert any("Generation failed" in r.getMessage() for r in caplog.records)


def test_passwords_never_logged(quiet_config, caplog):
    source = ScriptedSource([0] * 8)
    quiet_config.global_settings.log_level = "DEBUG"
    engine = ForgeEngine(quiet_config, generator=PasswordGenerator(source))
    engine.logger.underlying.propagate = True
    with caplog.at_level("DEBUG", logger="entropyforge.engine"):
        record = engine.csprng_analysis(8)
    assert record.password == "aaaaaaaa"
    assert caplog.records
    assert all("aaaaaaaa" not in r.getMessage() for r in caplog.records)
    assert all("aaaaaaaa" not in str(getattr(r, "forge_extra", "")) for r in caplog.records)


def test_uniformity_report(engine):
    engine.config.uniformity.alpha = 0.001
    results = engine.uniformity_report(runs=1_440)
    assert [r.name for r in results] == ["charset", "dice", "words"]
    assert all(r.alpha == 0.001 for r in results)


def test_record_serialises_with_interchange_names(engine):
    dumped = engine.csprng_analysis(12).model_dump(mode="json")
    assert set(dumped) == {"password", "length", "complexity", "generated_at"}
    assert set(dumped["complexity"]) == {
        "score", "entropy_bits", "strength", "crack_time", "weaknesses",
        "suggestions", "character_types", "pattern_score",
    }
    assert dumped["complexity"]["strength"] in {
        "Very Weak", "Weak", "Fair", "Good", "Strong", "Very Strong",
    }


def test_module_level_pipeline(monkeypatch, engine):
    monkeypatch.setattr(engine_module, "_DEFAULT_ENGINE", engine)
    assert engine_module.csprng_analysis(16).length == 16
    record = engine_module.diceware_analysis(DicewareOptions(word_count=3, separator=" "))
    assert len(record.password.split(" ")) == 3


def test_default_engine_is_created_once_across_threads(monkeypatch):
    created = []

    def slow_engine():
        time.sleep(0.01)
        instance = object()
        created.append(instance)
        return instance

    monkeypatch.setattr(engine_module, "_DEFAULT_ENGINE", None)
    monkeypatch.setattr(engine_module, "ForgeEngine", slow_engine)

    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(engine_module.default_engine())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1
    assert len(seen) == 8
    assert all(e is created[0] for e in seen)
