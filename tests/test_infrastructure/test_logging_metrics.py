"""
Test infrastructure components: logging and metrics.

Metric assertions compare before/after values because prometheus counters are
process-global and other tests increment them too.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from suid.factory import IdentifierFactory
from suid.kernel.logging import configure_logging, get_logger, is_production
from suid.kernel.metrics import (
    identifiers_generated_total,
    machine_identity_resolutions_total,
    sequence_seeds_total,
    sequence_wraparounds_total,
)
from suid.kernel.settings import SUIDSettings
from suid.machine import MachineIdentity
from suid.sequence import SequenceCounter
from tests.helpers import FakeDiscovery


class TestLoggingFramework:
    """Test structured logging framework."""

    def test_configure_logging_console(self) -> None:
        configure_logging(json_output=False, log_level="INFO")
        logger = get_logger(__name__)
        assert logger is not None
        logger.info("console logging configured")

    def test_configure_logging_json(self) -> None:
        configure_logging(json_output=True, log_level="DEBUG")
        logger = get_logger(__name__)
        assert logger is not None
        logger.debug("json logging configured", detail="ok")

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(AttributeError):
            configure_logging(log_level="LOUD")

    def test_is_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "Production")
        assert is_production()
        monkeypatch.setenv("ENVIRONMENT", "staging")
        assert not is_production()
        monkeypatch.delenv("ENVIRONMENT")
        assert not is_production()

    def test_resolution_logged_with_source(self, caplog: pytest.LogCaptureFixture) -> None:
        configure_logging(json_output=True, log_level="INFO")
        identity = MachineIdentity(SUIDSettings(), discover=FakeDiscovery())

        with caplog.at_level("INFO"):
            identity.resolve()

        assert any("Machine identity resolved" in record.getMessage() for record in caplog.records)
        assert any('"source": "hardware"' in record.getMessage() for record in caplog.records)

    def test_random_fallback_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        configure_logging(json_output=True, log_level="INFO")
        identity = MachineIdentity(
            SUIDSettings(machine_id_fallback="random"),
            discover=FakeDiscovery(address=None),
        )

        with caplog.at_level("WARNING"):
            identity.resolve()

        warnings = [r for r in caplog.records if r.levelname == "WARNING"]
        assert any("random machine id" in r.getMessage() for r in warnings)


class TestLibraryLogging:
    """Logging behaviour when the host application configures nothing."""

    def test_unconfigured_library_keeps_stdout_clean(self) -> None:
        """Only the identifier reaches stdout; no log lines are mixed in"""
        src_dir = Path(__file__).resolve().parents[2] / "src"
        env = dict(os.environ)
        env["SUID_MACHINE_ID"] = "a1b2c3"
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(src_dir), env.get("PYTHONPATH", "")])
        )
        script = "import suid; suid.reset_sequence_counter(1); print(suid.suid())"

        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            env=env,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr
        lines = result.stdout.splitlines()
        assert len(lines) == 1
        assert len(lines[0]) == 24
        assert lines[0][8:14] == "a1b2c3"
        assert lines[0][-6:] == "000001"

    def test_unconfigured_library_warnings_go_to_stderr(self) -> None:
        src_dir = Path(__file__).resolve().parents[2] / "src"
        env = {k: v for k, v in os.environ.items() if not k.startswith("SUID_")}
        env["SUID_MACHINE_ID_FALLBACK"] = "random"
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(src_dir), env.get("PYTHONPATH", "")])
        )
        script = (
            "import psutil, suid; psutil.net_if_addrs = lambda: {}; print(suid.suid())"
        )

        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            env=env,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr
        assert len(result.stdout.splitlines()) == 1
        assert "random machine id" in result.stderr


class TestMetrics:
    """Test Prometheus metrics collection."""

    def test_identifiers_generated_metric(self) -> None:
        factory = IdentifierFactory(
            machine=MachineIdentity(SUIDSettings(machine_id="010203"))
        )
        before = identifiers_generated_total._value.get()

        for _ in range(5):
            factory.create()

        assert identifiers_generated_total._value.get() == before + 5

    def test_seed_metrics_by_source(self) -> None:
        counter = SequenceCounter()
        random_before = sequence_seeds_total.labels(source="random")._value.get()
        explicit_before = sequence_seeds_total.labels(source="explicit")._value.get()

        counter.draw()
        counter.draw()
        counter.reset(5)

        assert sequence_seeds_total.labels(source="random")._value.get() == random_before + 1
        assert sequence_seeds_total.labels(source="explicit")._value.get() == explicit_before + 1

    def test_wraparound_metric(self) -> None:
        counter = SequenceCounter()
        counter.reset((1 << 24) - 2)
        before = sequence_wraparounds_total._value.get()

        counter.draw()
        assert sequence_wraparounds_total._value.get() == before
        counter.draw()
        assert sequence_wraparounds_total._value.get() == before + 1

    def test_resolution_metric_counts_once(self) -> None:
        identity = MachineIdentity(SUIDSettings(machine_id="abcdef"))
        before = machine_identity_resolutions_total.labels(source="configured")._value.get()

        identity.resolve()
        identity.resolve()

        after = machine_identity_resolutions_total.labels(source="configured")._value.get()
        assert after == before + 1
