"""Episode runner, statistics and the training/evaluation drivers."""

import pytest

from threes.action import Action
from threes.episode import (
    INITIAL_PLACEMENTS, EpisodeRecord, format_summary, play_episode, summarize, take_turns,
)
from threes.eval import eval_baselines, eval_slider, suggest_move
from threes.game import Board, legal_moves
from threes.heuristic import MergeLargerAgent
from threes.random_agents import RandomPlacer, RandomSlider
from threes.ntuple import NTupleSlider
from threes.train import TrainConfig, make_agent, make_slider, train


class CountingSlider(RandomSlider):
    def __init__(self, args=""):
        super().__init__(args)
        self.opened = self.closed = 0

    def open_episode(self, flag=""):
        self.opened += 1

    def close_episode(self, flag=""):
        self.closed += 1


class WinningSlider(RandomSlider):
    def check_for_win(self, board):
        return True


def record(max_tile, score=0, slides=10):
    return EpisodeRecord(score=score, max_tile=max_tile, slides=slides, reward=score, seconds=0.5)


def test_take_turns():
    placer, slider = RandomPlacer(), RandomSlider()
    assert all(take_turns(placer, slider, s) is placer for s in range(INITIAL_PLACEMENTS))
    assert take_turns(placer, slider, INITIAL_PLACEMENTS) is slider
    assert take_turns(placer, slider, INITIAL_PLACEMENTS + 1) is placer


def test_play_episode_runs_to_the_end():
    slider = CountingSlider("seed=2")
    board = Board()
    rec = play_episode(RandomPlacer("seed=1"), slider, board)
    assert slider.opened == slider.closed == 1
    assert rec.slides > 0
    assert rec.score == board.score()
    assert rec.max_tile == board.max_tile()
    assert not rec.won
    # the episode only ends when someone cannot move
    assert not slider.take_action(board) or not RandomPlacer("seed=1").take_action(board)


def test_play_episode_is_reproducible():
    a = play_episode(RandomPlacer("seed=4"), RandomSlider("seed=5"))
    b = play_episode(RandomPlacer("seed=4"), RandomSlider("seed=5"))
    assert (a.score, a.slides, a.max_tile) == (b.score, b.slides, b.max_tile)


def test_win_ends_episode():
    rec = play_episode(RandomPlacer("seed=1"), WinningSlider("seed=1"))
    assert rec.won
    assert rec.slides == 1


def test_null_placer_ends_episode():
    class Idle(RandomPlacer):
        def take_action(self, board):
            return Action()

    rec = play_episode(Idle(), MergeLargerAgent())
    assert rec.slides == 0
    assert rec.score == 0


def test_summarize():
    stats = summarize([record(3, 10), record(4, 20), record(4, 30), record(5, 60)])
    assert stats["episodes"] == 4
    assert stats["avg_score"] == pytest.approx(30.0)
    assert stats["max_score"] == 60
    assert stats["avg_slides"] == pytest.approx(10.0)
    assert stats["ops_per_s"] == pytest.approx(20.0)
    assert stats["reach"] == {3: 1.0, 6: 0.75, 12: 0.25}
    assert format_summary(stats)[0].startswith("avg = 30")

    assert summarize([])["episodes"] == 0


def test_make_agent():
    assert isinstance(make_agent("merge"), MergeLargerAgent)
    with pytest.raises(ValueError):
        make_agent("minimax")


def test_random_slider_gets_the_run_seed():
    assert make_slider(TrainConfig(agent="random", slide_args="", seed=4)).property("seed") == "4"
    assert make_slider(TrainConfig(agent="random", slide_args="seed=9", seed=4)).property("seed") == "9"
    assert not make_slider(TrainConfig(agent="merge", slide_args="", seed=4)).has("seed")


def test_train_repeats_with_the_same_seed():
    config = TrainConfig(total=4, block=2, agent="random", slide_args="", seed=5)
    first = [(h["avg_score"], h["max_score"]) for h in train(config)]
    second = [(h["avg_score"], h["max_score"]) for h in train(config)]
    assert first == second


def test_train_reports_every_block():
    history = train(TrainConfig(total=4, block=2, agent="random", slide_args="seed=3"))
    assert [h["episode"] for h in history] == [2, 4]
    assert all(h["episodes"] == 2 for h in history)


def test_train_saves_ntuple_weights(tmp_path):
    path = tmp_path / "weights.bin"
    history = train(TrainConfig(
        total=2, block=1, agent="ntuple",
        slide_args=f"init=65536,65536 alpha=0.1 save={path}",
    ))
    assert len(history) == 2
    assert "td_error" in history[0]
    assert path.stat().st_size == 4 + 2 * 65536 * 4


def test_eval_baselines(tmp_path):
    path = tmp_path / "weights.bin"
    train(TrainConfig(total=1, block=1, slide_args=f"init=65536,65536 alpha=0.1 save={path}"))
    before = path.read_bytes()

    results = eval_baselines(f"init=65536,65536 load={path} save={path}", episodes=2)
    assert set(results) == {"ntuple", "merge", "random"}
    assert all(r["episodes"] == 2 for r in results.values())
    # evaluation never writes weights
    assert path.read_bytes() == before

    assert eval_slider("merge", episodes=1)["episodes"] == 1


def test_suggest_move_keeps_no_steps():
    advisor = NTupleSlider("init=65536,65536 alpha=0 save=")
    placer = RandomPlacer("seed=2")
    board = Board()
    for _ in range(INITIAL_PLACEMENTS):
        placer.take_action(board).apply(board)

    for _ in range(5):
        suggestion = suggest_move(advisor, board)
        assert suggestion.direction in legal_moves(board)
        assert len(advisor.trajectory) == 0
        suggestion.apply(board)
        placer.take_action(board).apply(board)
