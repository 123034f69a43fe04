"""
Tests for the resonator production cycle.
"""
import pytest

from underwell.gameplay.constants import TICK_DT, PRODUCE_COOLDOWN
from underwell.gameplay.entities import Everstone, Resonator
from underwell.gameplay.production import produce_everstone, update_resonators


def run_ticks(world, ticks):
    produced = []
    for _ in range(ticks):
        produced.extend(update_resonators(world, TICK_DT))
    return produced


class TestProduction:

    def test_counts_down_without_stone(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=5.0)
        world.resonators.append(resonator)

        update_resonators(world, 1.0)

        assert resonator.produce_timer == pytest.approx(4.0)
        assert world.everstones == []

    def test_produces_stone_above_resonator(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=0.5)
        world.resonators.append(resonator)

        produced = update_resonators(world, 1.0)

        assert len(produced) == 1
        stone = produced[0]
        assert (stone.x, stone.y) == (100, 160)
        assert stone.radius == 26
        assert stone.hp == 100
        assert stone.resonator_id == 0
        assert resonator.produced_count == 1
        assert resonator.produce_timer == PRODUCE_COOLDOWN

    def test_full_cooldown_yields_exactly_one_stone(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=PRODUCE_COOLDOWN)
        world.resonators.append(resonator)

        run_ticks(world, 719)
        assert resonator.produced_count == 0

        run_ticks(world, 1)
        assert resonator.produced_count == 1
        assert len(world.everstones) == 1

        run_ticks(world, 1)
        assert resonator.produced_count == 1

    def test_timer_frozen_while_stone_lives(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=3.0)
        world.resonators.append(resonator)
        world.everstones.append(Everstone(100, 160, resonator_id=0))

        run_ticks(world, 600)

        assert resonator.produce_timer == 3.0
        assert resonator.produced_count == 0

    def test_dead_stone_does_not_block_production(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=0.01)
        world.resonators.append(resonator)
        world.everstones.append(Everstone(100, 160, resonator_id=0, hp=0))

        produced = update_resonators(world, TICK_DT)

        assert len(produced) == 1

    def test_dead_resonator_never_produces(self, world):
        resonator = Resonator(0, 100, 200, alive=False, produce_timer=0.0)
        world.resonators.append(resonator)

        assert run_ticks(world, 60) == []
        assert resonator.produce_timer == 0.0

    def test_resonators_are_independent(self, world):
        busy = Resonator(0, 100, 200, produce_timer=1.0)
        idle = Resonator(1, 300, 200, produce_timer=1.0)
        world.resonators.extend([busy, idle])
        world.everstones.append(Everstone(100, 160, resonator_id=0))

        update_resonators(world, 0.5)

        assert busy.produce_timer == 1.0
        assert idle.produce_timer == pytest.approx(0.5)

    def test_at_most_one_live_stone_per_resonator(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=0.0)
        world.resonators.append(resonator)

        for _ in range(2000):
            update_resonators(world, TICK_DT)
            live = [s for s in world.everstones if s.resonator_id == 0 and s.hp > 0]
            assert len(live) <= 1

        assert resonator.produced_count == 1

    def test_replacement_after_stone_destroyed(self, world):
        resonator = Resonator(0, 100, 200, produce_timer=0.0)
        world.resonators.append(resonator)
        first = update_resonators(world, TICK_DT)[0]

        first.hp = 0
        world.prune_dead_everstones()
        run_ticks(world, 721)

        assert resonator.produced_count == 2
        assert len(world.everstones) == 1

    def test_produce_everstone_resets_timer(self, world):
        resonator = Resonator(0, 0, 0, produce_cooldown=7.0, produce_timer=-1.0)
        world.resonators.append(resonator)
        produce_everstone(world, resonator)
        assert resonator.produce_timer == 7.0
