"""
END-TO-END GAMEPLAY TESTS

These tests drive the Game orchestrator the way the UI does:
- Level layout and start/pause/reset flow
- Ticks advancing time, spawning and production
- The production-failed end state and the high score

NO UI DEPENDENCIES - pure gameplay logic testing.
"""
import random

import pytest

from underwell.gameplay.commands import PlaceBomb, PlaceTurret, Reset, Start, TogglePause
from underwell.gameplay.constants import TICK_DT
from underwell.gameplay.entities import Everstone, Monster
from underwell.gameplay.game import (
    Game, GameOverEvent, GamePhase, MonsterSpawnedEvent, EverstoneProducedEvent,
    PhaseChangedEvent, BombDetonatedEvent,
)
from underwell.highscore import HighScoreStore


def lose_everything(game: Game) -> None:
    for resonator in game.world.resonators:
        resonator.alive = False
        resonator.hp = 0
    game.world.everstones = []


class TestFlow:

    def test_initial_state(self, game):
        assert game.phase == GamePhase.READY
        assert not game.running
        assert game.time == 0.0
        assert len(game.world.resonators) == 2
        assert len(game.world.blocks) == 7

    def test_step_does_nothing_until_started(self, game):
        assert game.step() == []
        assert game.time == 0.0

    def test_start_records_production_clock_once(self, game):
        game.start(now=100.0)
        game.toggle_pause()
        game.start(now=500.0)

        assert game.world.production_started_at == 100.0
        assert game.get_production_elapsed(now=130.0) == pytest.approx(30.0)

    def test_production_elapsed_before_start(self, game):
        assert game.get_production_elapsed() is None

    def test_start_via_command(self, game):
        game.dispatch(Start())
        events = game.drain_events()

        assert game.running
        assert game.world.production_started_at is not None
        assert events == [PhaseChangedEvent(GamePhase.READY, GamePhase.RUNNING)]

    def test_toggle_pause(self, game):
        game.dispatch(Start())
        game.run_ticks(10)
        time_paused = game.time

        game.dispatch(TogglePause())
        assert game.phase == GamePhase.PAUSED
        game.step()
        assert game.time == time_paused

        result = game.dispatch(TogglePause())
        assert result.detail == "running"
        assert game.running

    def test_reset_rebuilds_level_keeps_high_score(self, game):
        game.world.high_score = 77.0
        game.dispatch(PlaceTurret(100, 100))
        game.dispatch(Start())
        game.run_ticks(200)

        game.dispatch(Reset())

        assert game.phase == GamePhase.READY
        assert game.time == 0.0
        assert game.world.turrets == []
        assert game.world.monsters == []
        assert game.high_score == 77.0


class TestTicks:

    def test_first_tick(self, game):
        game.dispatch(Start())

        game.step()

        assert game.time == pytest.approx(1 / 60)
        assert game.get_everstone_health() == 0
        assert game.world.monsters == []

    def test_first_monster_after_two_seconds(self, game):
        game.dispatch(Start())

        events = game.run_ticks(125)

        spawned = [e for e in events if isinstance(e, MonsterSpawnedEvent)]
        assert len(spawned) == 1
        assert len(game.world.monsters) == 1
        assert game.world.spawn_timer >= 21 - 1

    def test_resonators_produce_within_ten_seconds(self, game):
        game.dispatch(Start())

        events = game.run_ticks(10 * 60 + 1)

        produced = [e for e in events if isinstance(e, EverstoneProducedEvent)]
        assert {e.resonator_id for e in produced} == {0, 1}
        assert game.get_produced_total() == 2
        assert game.get_everstone_health() <= 200

    def test_resonator_timers_never_negative(self, game):
        game.world.resonators[0].produce_timer = -3.0
        timers = game.get_resonator_timers()
        assert timers[0] == 0.0
        assert timers[1] > 0

    def test_dead_monsters_are_removed(self, game):
        game.dispatch(Start())
        game.world.monsters.append(Monster(200, 200, hp=0))

        game.step()

        assert game.world.monsters == []

    def test_dead_everstones_pruned(self, game):
        game.dispatch(Start())
        game.world.everstones.append(Everstone(100, 100, resonator_id=0, hp=-1))

        game.step()

        assert game.world.everstones == []

    def test_bomb_event(self, game):
        game.dispatch(Start())
        game.dispatch(PlaceBomb(200, 200))

        events = game.run_ticks(60)

        assert any(isinstance(e, BombDetonatedEvent) for e in events)
        assert game.world.bombs == []

    def test_bomb_event_counts_structures(self, game):
        near = game.world.resonators[0]
        game.world.everstones.append(Everstone(near.x, near.y - 40, resonator_id=near.id))
        game.dispatch(Start())
        game.dispatch(PlaceBomb(near.x - 30, near.y))

        events = game.run_ticks(60)

        blast = [e for e in events if isinstance(e, BombDetonatedEvent)][0]
        assert blast.resonators_hit == 1
        assert blast.everstones_hit == 1
        assert near.hp == 90

    def test_simulate_runs_whole_seconds(self, game):
        game.dispatch(Start())

        game.simulate(1.5)

        assert game.time == pytest.approx(1.5)

    def test_one_live_stone_per_resonator_over_a_long_run(self):
        game = Game(960, 640, rng=random.Random(7))
        game.dispatch(Start())

        for _ in range(90 * 60):
            if not game.running:
                break
            game.step()
            for resonator in game.world.resonators:
                live = [s for s in game.world.everstones
                        if s.resonator_id == resonator.id and s.hp > 0]
                assert len(live) <= 1

    def test_walls_survive_a_long_run(self):
        game = Game(960, 640, rng=random.Random(3))
        walls = [b for b in game.world.blocks if b.indestructible]
        for x in (200, 480, 760):
            game.dispatch(PlaceBomb(x, 600))
        game.dispatch(Start())

        game.run_ticks(120 * 60)

        for wall in walls:
            assert wall in game.world.blocks
            assert wall.health == 999

    def test_snapshot_is_plain_data(self, game):
        game.dispatch(PlaceTurret(10, 20))
        snapshot = game.get_snapshot()

        assert snapshot["phase"] == "READY"
        assert snapshot["turrets"] == [{"x": 10, "y": 20, "rate": 0.25, "cool": 0.0}]
        assert len(snapshot["resonators"]) == 2
        assert set(snapshot) >= {
            "blocks", "traps", "bombs", "conveyors", "monsters", "everstones",
            "time", "running", "high_score",
        }


class TestGameOver:

    def test_losing_everything_stops_the_game(self, game):
        game.dispatch(Start())
        game.world.time = 5.0
        lose_everything(game)

        events = game.step()

        assert not game.running
        assert game.phase == GamePhase.OVER
        over = [e for e in events if isinstance(e, GameOverEvent)]
        assert len(over) == 1
        assert over[0].survival_time == pytest.approx(5.0 + TICK_DT)
        assert over[0].new_record
        assert game.high_score == pytest.approx(5.0 + TICK_DT)
        assert PhaseChangedEvent(GamePhase.RUNNING, GamePhase.OVER) in events

    def test_high_score_not_lowered(self, game):
        game.world.high_score = 100.0
        game.dispatch(Start())
        game.world.time = 5.0
        lose_everything(game)

        events = game.step()

        over = [e for e in events if isinstance(e, GameOverEvent)][0]
        assert not over.new_record
        assert game.high_score == 100.0

    def test_live_everstone_keeps_game_going(self, game):
        game.dispatch(Start())
        lose_everything(game)
        game.world.everstones.append(Everstone(100, 100, resonator_id=0))

        game.step()

        assert game.running

    def test_high_score_persisted(self, tmp_path):
        store = HighScoreStore(tmp_path / "score.json")
        store.save(3.0)
        game = Game(960, 640, rng=random.Random(1), highscore_store=store)
        assert game.high_score == 3.0

        game.dispatch(Start())
        game.world.time = 12.34
        lose_everything(game)
        game.step()

        assert HighScoreStore(tmp_path / "score.json").load() == pytest.approx(12.4)

    def test_high_score_file_untouched_without_record(self, tmp_path):
        store = HighScoreStore(tmp_path / "score.json")
        store.save(50.0)
        game = Game(960, 640, rng=random.Random(1), highscore_store=store)

        game.dispatch(Start())
        lose_everything(game)
        game.step()

        assert store.load() == 50.0

    def test_failed_save_still_ends_the_game(self):
        class BrokenStore:
            def __init__(self):
                self.saves = 0

            def load(self):
                return 0.0

            def save(self, value):
                self.saves += 1
                raise OSError("disk full")

        store = BrokenStore()
        game = Game(960, 640, rng=random.Random(1), highscore_store=store)
        game.dispatch(Start())
        game.drain_events()
        lose_everything(game)

        with pytest.raises(OSError):
            game.step()

        assert game.phase == GamePhase.OVER
        events = game.drain_events()
        assert any(isinstance(e, GameOverEvent) for e in events)

        game.step()
        game.step()
        assert store.saves == 1
        assert game.phase == GamePhase.OVER


class TestRestart:

    def finish(self, game):
        game.dispatch(Start())
        game.world.time = 5.0
        lose_everything(game)
        game.step()
        assert game.phase == GamePhase.OVER

    def test_start_after_game_over_lays_out_fresh_level(self, game):
        self.finish(game)
        best = game.high_score

        game.dispatch(Start())
        events = game.drain_events()

        assert game.running
        assert game.time == 0.0
        assert all(r.alive for r in game.world.resonators)
        assert events == [
            PhaseChangedEvent(GamePhase.OVER, GamePhase.READY),
            PhaseChangedEvent(GamePhase.READY, GamePhase.RUNNING),
        ]

        game.run_ticks(10)
        assert game.running
        assert game.high_score == best

    def test_unpause_after_game_over_restarts(self, game):
        self.finish(game)

        result = game.dispatch(TogglePause())

        assert result.detail == "running"
        assert game.phase == GamePhase.RUNNING
        assert all(r.alive for r in game.world.resonators)

    def test_repeated_restarts_do_not_inflate_high_score(self, game):
        for _ in range(5):
            self.finish(game)
        assert game.high_score == pytest.approx(5.0 + TICK_DT)
