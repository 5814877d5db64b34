import pytest

from constants import AVG_BLOCK_SECONDS, HALF_DAY_IN_BLOCKS
from scripts.utils.harness import SimulatedClock


def test_half_day_in_blocks(sim_chain):
    clock = SimulatedClock(sim_chain, AVG_BLOCK_SECONDS)

    assert clock.blocks_for(12) == HALF_DAY_IN_BLOCKS
    assert clock.blocks_per_hour == pytest.approx(272.72, abs=1e-2)


def test_advance_rounds_blocks_down(sim_chain):
    clock = SimulatedClock(sim_chain, 13.2)

    # 2.5 hours is 681.8 blocks
    assert clock.advance(2.5) == 681
    assert sim_chain.height == 681
    assert sim_chain.timestamp == 9000


def test_elapsed_hours(sim_chain):
    clock = SimulatedClock(sim_chain, 12)

    for _ in range(10):
        clock.advance(12)

    assert clock.elapsed_hours == 120
    assert sim_chain.height == 10 * 3600
    assert sim_chain.timestamp == 120 * 60 * 60


def test_zero_hours_is_a_noop(sim_chain):
    clock = SimulatedClock(sim_chain, 12)

    assert clock.advance(0) == 0
    assert sim_chain.height == 0


@pytest.mark.parametrize("avg_block_seconds", [0, -1])
def test_block_time_must_be_positive(sim_chain, avg_block_seconds):
    with pytest.raises(ValueError):
        SimulatedClock(sim_chain, avg_block_seconds)
