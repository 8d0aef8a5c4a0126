"""Tests for simulation.py - tick ordering, gating, input and lifecycle."""

import math

import pytest

from obstacles import ObstacleType
from player import VerticalState
from simulation import GameState, Simulation

NEVER = 1e12  # Spawn interval that never elapses


def quiet_sim(**kwargs):
    """Simulation that never spawns on its own."""
    return Simulation(seed=0, base_interval=NEVER, min_interval=NEVER, **kwargs)


def snapshot(sim):
    return (sim.state, sim.elapsed_time, sim.score, sim.last_spawn_time,
            sim.rail_offset, sim.obstacle_views(), sim.player_view())


class TestGameStateMachine:
    def test_starts_idle(self):
        sim = Simulation()
        assert sim.state is GameState.IDLE
        assert sim.score == 0

    def test_idle_ticks_change_nothing(self):
        sim = Simulation(seed=1)
        before = snapshot(sim)
        for _ in range(5):
            sim.tick(1.0)
        assert not sim.swipe(100, 0)
        assert snapshot(sim) == before

    def test_start_only_from_idle(self):
        sim = quiet_sim()
        assert sim.start()
        assert sim.state is GameState.PLAYING
        assert not sim.start()
        assert not sim.restart()

    def test_ten_ticks_scenario(self):
        sim = quiet_sim()
        published = []
        sim.subscribe(lambda score, state: published.append((score, state)))
        sim.start()
        for _ in range(10):
            sim.tick(0.1)
        assert sim.elapsed_time == pytest.approx(1000)
        assert sim.score == 10
        assert sim.state is GameState.PLAYING
        assert all(not v.active for v in sim.obstacle_views())
        assert published[0] == (0, GameState.PLAYING)
        assert published[-1] == (10, GameState.PLAYING)
        assert len(published) == 11

    def test_collision_ends_run(self):
        sim = quiet_sim()
        published = []
        sim.subscribe(lambda score, state: published.append((score, state)))
        sim.start()
        sim.pool.place(1, sim.detector.hitbox_top - 1, ObstacleType.NORMAL)
        sim.tick(0.016)
        assert sim.state is GameState.GAME_OVER
        assert published[-1] == (0, GameState.GAME_OVER)

    def test_game_over_freezes_state(self):
        """Nothing moves after a collision, the pool is left as it was hit."""
        sim = quiet_sim()
        sim.start()
        sim.pool.place(1, sim.detector.hitbox_top - 1)
        sim.tick(0.05)
        before = snapshot(sim)
        sim.tick(0.5)
        assert not sim.swipe(-100, 0)
        assert snapshot(sim) == before
        assert sim.obstacle_views()[0].active

    def test_restart_resets_everything(self):
        sim = Simulation(seed=5, base_interval=100, min_interval=100)
        sim.start()
        sim.swipe(100, 0)
        sim.tick(0.5)
        sim.pool.place(2, sim.detector.hitbox_top - 1)
        sim.tick(0.01)
        assert sim.state is GameState.GAME_OVER
        assert sim.restart()
        assert sim.state is GameState.PLAYING
        assert sim.elapsed_time == 0
        assert sim.score == 0
        assert sim.last_spawn_time == 0
        assert sim.rail_offset == 0
        assert sim.player.lane == 1
        assert sim.player.vertical_state is VerticalState.GROUNDED
        assert all(not v.active for v in sim.obstacle_views())

    def test_subscribe_unsubscribe(self):
        sim = quiet_sim()
        calls = []
        listener = lambda score, state: calls.append(state)  # noqa: E731
        sim.subscribe(listener)
        sim.start()
        sim.unsubscribe(listener)
        sim.unsubscribe(listener)
        sim.tick(0.1)
        assert calls == [GameState.PLAYING]

    def test_set_difficulty_between_runs(self):
        sim = Simulation("Normal")
        assert sim.set_difficulty("Hard")
        sim.start()
        assert sim.speed == 380.0
        assert not sim.set_difficulty("Easy")


class TestTick:
    def test_score_tracks_elapsed(self):
        sim = quiet_sim()
        sim.start()
        for dt in (0.016, 0.033, 0.25, 0.001, 0.1, 1.7, 0.049):
            sim.tick(dt)
            assert sim.score == math.floor(sim.elapsed_time / 100)

    def test_negative_dt_is_zero(self):
        sim = quiet_sim()
        sim.start()
        sim.tick(-1.0)
        assert sim.elapsed_time == 0

    def test_large_dt(self):
        """A long suspension saturates difficulty without raising."""
        sim = quiet_sim()
        sim.start()
        sim.tick(3600.0)
        assert sim.difficulty == 1.0
        assert sim.speed == 700.0

    def test_speed_ramp(self):
        """Normal preset intervals; 10 s ticks carry each spawn off-screen within its tick."""
        sim = Simulation(seed=0)
        sim.start()
        speeds, intervals = [], []
        for _ in range(9):
            sim.tick(10.0)
            speeds.append(sim.speed)
            intervals.append(sim.spawn_interval)
        assert speeds == sorted(speeds)
        assert intervals == sorted(intervals, reverse=True)
        assert speeds[5:] == [700.0] * 4
        assert intervals[5:] == [600.0] * 4
        assert intervals[0] < 1500.0
        assert sim.state is GameState.PLAYING

    def test_obstacle_advances_by_speed_dt(self):
        sim = quiet_sim()
        sim.start()
        sim.player.move(-1)  # Out of the way
        obs = sim.pool.place(1, 0.0)
        for dt in (0.1, 0.02, 0.3):
            before = obs.position
            sim.tick(dt)
            assert obs.position == pytest.approx(before + sim.speed * dt)
            assert obs.position > before

    def test_rail_offset_follows_speed(self):
        sim = quiet_sim()
        sim.start()
        sim.tick(0.5)
        assert sim.rail_offset == pytest.approx(sim.speed * 0.5)

    def test_spawn_on_interval(self):
        sim = Simulation(seed=1)
        sim.start()
        sim.tick(1.4)
        assert all(not v.active for v in sim.obstacle_views())
        sim.tick(0.1)
        active = [v for v in sim.obstacle_views() if v.active]
        assert len(active) == 1
        assert sim.last_spawn_time == pytest.approx(1500)
        # Spawned above the screen, then advanced in the same tick
        assert active[0].position == pytest.approx(-50 + sim.speed * 0.1)

    def test_full_pool_skips_spawn(self):
        sim = Simulation(seed=2, capacity=1, base_interval=100, min_interval=100)
        sim.start()
        sim.tick(0.1)
        assert sim.last_spawn_time == pytest.approx(100)
        sim.tick(0.1)
        assert sim.last_spawn_time == pytest.approx(100)
        assert len(sim.pool.active_obstacles()) == 1

    def test_seeded_runs_repeat(self):
        def run(seed):
            sim = Simulation(seed=seed, base_interval=200, min_interval=200)
            sim.start()
            history = []
            for _ in range(40):
                sim.tick(0.05)
                history.append(sim.obstacle_views())
            return history, sim.state

        assert run(11) == run(11)

    def test_jump_ends_during_tick(self):
        sim = quiet_sim()
        sim.start()
        sim.swipe(0, -100)
        sim.tick(0.3)
        assert sim.player_view().vertical_state is VerticalState.JUMPING
        assert sim.player_view().vertical_offset > 0
        sim.tick(0.4)
        view = sim.player_view()
        assert view.vertical_state is VerticalState.GROUNDED
        assert view.vertical_offset == 0.0


class TestImmunity:
    def _sim_with(self, obstacle_type):
        sim = quiet_sim()
        sim.start()
        sim.pool.place(1, sim.detector.hitbox_top - 1, obstacle_type)
        return sim

    def test_low_needs_jump(self):
        sim = self._sim_with(ObstacleType.LOW)
        sim.swipe(0, -100)
        sim.tick(0.01)
        assert sim.state is GameState.PLAYING
        assert self._grounded_result(ObstacleType.LOW) is GameState.GAME_OVER

    def test_high_needs_slide(self):
        sim = self._sim_with(ObstacleType.HIGH)
        sim.swipe(0, 100)
        sim.tick(0.01)
        assert sim.state is GameState.PLAYING
        assert self._grounded_result(ObstacleType.HIGH) is GameState.GAME_OVER

    def test_immunity_lapses_on_landing(self):
        """Landing this tick means the obstacle is checked against Grounded."""
        sim = quiet_sim()
        sim.start()
        sim.swipe(0, -100)
        sim.tick(0.59)
        sim.pool.place(1, sim.detector.hitbox_top - 1, ObstacleType.LOW)
        sim.tick(0.02)
        assert sim.state is GameState.GAME_OVER

    def _grounded_result(self, obstacle_type):
        sim = self._sim_with(obstacle_type)
        sim.tick(0.01)
        return sim.state


class TestSwipe:
    def test_horizontal(self):
        sim = quiet_sim()
        sim.start()
        assert sim.swipe(60, 5)
        assert sim.player.lane == 2
        assert not sim.swipe(60, 0)  # Already at the edge
        assert sim.swipe(-60, 0)
        assert sim.player.lane == 1

    def test_below_threshold(self):
        sim = quiet_sim()
        sim.start()
        assert not sim.swipe(50, 0)
        assert not sim.swipe(0, -40)
        assert sim.player.lane == 1
        assert sim.player.grounded

    def test_larger_axis_wins(self):
        sim = quiet_sim()
        sim.start()
        assert sim.swipe(60, -80)
        assert sim.player.lane == 1
        assert sim.player.vertical_state is VerticalState.JUMPING

    def test_vertical_ignored_while_airborne(self):
        sim = quiet_sim()
        sim.start()
        sim.swipe(0, 100)
        assert not sim.swipe(0, -100)
        assert sim.player.vertical_state is VerticalState.SLIDING

    def test_lane_change_while_jumping(self):
        sim = quiet_sim()
        sim.start()
        sim.swipe(0, -100)
        assert sim.swipe(-100, 0)
        assert sim.player.lane == 0
