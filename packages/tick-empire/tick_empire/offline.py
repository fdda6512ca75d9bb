"""Offline catch-up: batched fast-forward over the time the player was away."""
from __future__ import annotations

import dataclasses
import logging
import math

from tick_empire.engine import TickEngine
from tick_empire.types import OfflineResult, TickSnapshot

logger = logging.getLogger(__name__)


def calculate_offline_progress(
    engine: TickEngine, snapshot: TickSnapshot, seconds_elapsed: float
) -> OfflineResult:
    """Approximate ``seconds_elapsed`` seconds of play, capped by the balance.

    Each batch runs a single tick with incidents and any pending event
    cleared, then scales its DC by the batch length and the offline
    efficiency. Datasets carry over from batch to batch, so decay across a
    batch is approximated by one tick's worth.
    """
    cfg = engine.balance
    # Cap before int(): elapsed may be inf, and NaN compares false.
    to_simulate = int(min(seconds_elapsed, cfg.offline_max_seconds)) if seconds_elapsed > 0 else 0

    earned = 0.0
    datasets = snapshot.datasets
    processed = 0
    batches = math.ceil(to_simulate / cfg.offline_batch_size)

    for _ in range(batches):
        in_batch = min(cfg.offline_batch_size, to_simulate - processed)
        result = engine.process_tick(
            dataclasses.replace(snapshot, datasets=datasets, incidents=(), event=None)
        )
        earned += result.dc_generated * in_batch * cfg.offline_efficiency
        datasets = result.datasets
        processed += in_batch

    logger.info(
        "offline progress: %d ticks in %d batches, earned %.2f",
        processed, batches, earned,
    )
    return OfflineResult(
        earned=math.floor(earned),
        ticks_simulated=processed,
        datasets=datasets,
    )
