"""Tests for headless runs: workload generator, SimulationLoop and replay output.

Two runs with the same seed and config MUST produce identical order
histories. The fingerprint below hashes the observable engine state after
every tick and compares whole runs.
"""

import hashlib
import json

import pytest

from orderbot.config import EngineConfig
from orderbot.core.enums import Domain, OrderState, PriorityClass
from orderbot.engine.order_engine import OrderEngine
from orderbot.engine.sim_loop import SimulationLoop
from orderbot.systems.generator import WorkloadGenerator
from orderbot.systems.rng import DeterministicRNG
from orderbot.utils.replay import ReplayRecorder


def _config(seed: int = 42, **overrides) -> EngineConfig:
    values = dict(
        world_seed=seed,
        max_ticks=300,
        order_arrival_rate=0.5,
        processing_time_ms=1_000,
        bot_change_interval=50,
    )
    values.update(overrides)
    return EngineConfig(**values)


def _build_loop(cfg: EngineConfig, bots: int = 2, recorder: ReplayRecorder | None = None) -> SimulationLoop:
    engine = OrderEngine(cfg)
    for _ in range(bots):
        engine.add_bot()
    engine.drain_events()
    generator = WorkloadGenerator(cfg, DeterministicRNG(cfg.world_seed))
    return SimulationLoop(cfg, engine, generator, recorder)


def _fingerprint(engine: OrderEngine) -> str:
    snap = engine.snapshot()
    parts = [f"v={snap.version}", f"now={snap.last_now}"]
    for o in snap.orders:
        parts.append(f"o{o.id}:{o.priority.name}|{o.state.name}|bot={o.bot_id}|done={o.completed_at}")
    for b in snap.bots:
        parts.append(f"b{b.id}:{b.order_id}@{b.started_at}")
    return hashlib.sha256("\n".join(parts).encode()).hexdigest()


def _run(seed: int, ticks: int = 200) -> list[str]:
    loop = _build_loop(_config(seed, max_ticks=ticks))
    fingerprints = []
    for _ in range(ticks):
        loop.tick_once()
        fingerprints.append(_fingerprint(loop.engine))
    return fingerprints


class TestWorkloadGenerator:

    def test_arrivals_deterministic(self):
        cfg = _config()
        a = WorkloadGenerator(cfg, DeterministicRNG(7))
        b = WorkloadGenerator(cfg, DeterministicRNG(7))
        assert [a.arrivals(t) for t in range(200)] == [b.arrivals(t) for t in range(200)]

    def test_seed_changes_arrivals(self):
        cfg = _config()
        a = WorkloadGenerator(cfg, DeterministicRNG(1))
        b = WorkloadGenerator(cfg, DeterministicRNG(2))
        assert [a.arrivals(t) for t in range(200)] != [b.arrivals(t) for t in range(200)]

    def test_arrival_bounds(self):
        gen = WorkloadGenerator(_config(order_arrival_rate=1.0, vip_ratio=0.0), DeterministicRNG(3))
        for t in range(50):
            assert gen.arrivals(t) == [PriorityClass.STANDARD, PriorityClass.STANDARD]
        silent = WorkloadGenerator(_config(order_arrival_rate=0.0), DeterministicRNG(3))
        assert all(silent.arrivals(t) == [] for t in range(50))

    def test_bot_delta_only_on_interval(self):
        gen = WorkloadGenerator(_config(bot_change_interval=50), DeterministicRNG(5))
        assert gen.bot_delta(0, 0) == 0
        assert gen.bot_delta(49, 0) == 0
        assert gen.bot_delta(50, 0) == 1

    def test_bot_delta_disabled(self):
        gen = WorkloadGenerator(_config(bot_change_interval=0), DeterministicRNG(5))
        assert all(gen.bot_delta(t, 0) == 0 for t in range(0, 500, 50))

    def test_bot_delta_respects_bounds(self):
        gen = WorkloadGenerator(_config(bot_change_interval=1, max_bots=4), DeterministicRNG(11))
        assert all(gen.bot_delta(t, 4) != 1 for t in range(1, 300))
        assert all(gen.bot_delta(t, 1) != -1 for t in range(1, 300))


class TestWorkloadDraws:

    def test_draws_match_domain_primitives(self):
        rng = DeterministicRNG(9)
        for t in range(100):
            assert rng.order_arrives(1, t, 0.3) == rng.next_bool(Domain.ARRIVAL, 1, t, 0.3)
            assert rng.order_is_expedited(0, t, 0.3) == rng.next_bool(Domain.PRIORITY, 0, t, 0.3)

    def test_scaling_roll_range(self):
        rng = DeterministicRNG(9)
        rolls = {rng.scaling_roll(size, t) for size in range(1, 5) for t in range(200)}
        assert rolls == {0, 1, 2}

    def test_domains_are_independent(self):
        rng = DeterministicRNG(9)
        arrivals = [rng.next_float(Domain.ARRIVAL, 0, t) for t in range(50)]
        priorities = [rng.next_float(Domain.PRIORITY, 0, t) for t in range(50)]
        assert arrivals != priorities
        assert all(0.0 <= f < 1.0 for f in arrivals + priorities)


class TestSimulationLoop:

    def test_run_keeps_invariants(self, tmp_path):
        cfg = _config()
        loop = _build_loop(cfg, recorder=ReplayRecorder(tmp_path / "replay.json", cfg.world_seed))
        for _ in range(cfg.max_ticks):
            loop.tick_once()
            loop.engine.state.check_invariants()
        assert loop.tick == cfg.max_ticks
        assert loop.now() == cfg.max_ticks * cfg.sim_tick_ms
        assert loop.order_counts()[OrderState.DONE] > 0

    def test_run_writes_replay(self, tmp_path):
        cfg = _config()
        path = tmp_path / "out" / "replay.json"
        recorder = ReplayRecorder(path, cfg.world_seed)
        _build_loop(cfg, recorder=recorder).run()

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["seed"] == cfg.world_seed
        assert data["recorded_ticks"] == recorder.recorded > 0
        ticks = [t["tick"] for t in data["ticks"]]
        assert ticks == sorted(ticks)
        first = data["ticks"][0]
        assert first["events"]
        assert first["now"] == first["tick"] * cfg.sim_tick_ms

    def test_no_recorder(self):
        loop = _build_loop(_config(max_ticks=20))
        loop.run()
        assert loop.tick == 20


class TestDeterministicReplay:

    def test_same_seed_same_history(self):
        assert _run(42) == _run(42)

    @pytest.mark.parametrize("seed_a,seed_b", [(1, 2), (42, 43)])
    def test_different_seed_diverges(self, seed_a, seed_b):
        assert _run(seed_a) != _run(seed_b)
