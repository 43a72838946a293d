"""Engine configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for an engine run."""

    # Processing
    processing_time_ms: int = 10_000        # Fixed time a bot spends on one order

    # Timing
    tick_interval: float = 0.1              # Seconds between autonomous ticks (server mode)

    # Bots
    initial_bots: int = 0

    # Safety
    check_invariants: bool = True           # Assert state invariants after every mutation

    # Headless run
    world_seed: int = 42
    max_ticks: int = 1200
    sim_tick_ms: int = 100                  # Simulated milliseconds per headless tick
    order_arrival_rate: float = 0.08        # Per-tick probability of a new order
    vip_ratio: float = 0.25                 # Share of arriving orders that are expedited
    bot_change_interval: int = 150          # Ticks between bot add/remove decisions
    max_bots: int = 4

    # Event feed
    event_log_size: int = 500

    # Logging
    log_level: str = "INFO"
    replay_file: str = "replay.json"
