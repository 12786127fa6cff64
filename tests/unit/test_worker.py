from __future__ import annotations

import logging
from pathlib import Path

from src import worker

REPO_SEED = Path(__file__).resolve().parents[2] / "data" / "seed.json"


def test_worker_single_pass_logs_positions(monkeypatch, caplog) -> None:
    monkeypatch.setenv("SEED_PATH", str(REPO_SEED))
    monkeypatch.setenv("WORKER_LOOP", "0")
    monkeypatch.setenv("TRACKING_TICK_INTERVAL_S", "5")

    with caplog.at_level(logging.INFO, logger="bustrack.worker"):
        worker.main()

    positions = [r for r in caplog.records if r.getMessage().startswith("position")]
    assert len(positions) == 5
    assert "pb-bus-001" in positions[0].getMessage()
