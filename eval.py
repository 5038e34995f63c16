#!/usr/bin/env python3
"""
Evaluate a trained Threes! n-tuple slider against the baselines.

Usage:
    python eval.py --load weights.bin
    python eval.py --load weights.bin --play
"""

import sys
import argparse
from pathlib import Path

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from threes import (
    AgentError,
    DEFAULT_INIT,
    eval_baselines,
)


def play_interactive(slide_args: str):
    """Play a game as the slider, with the n-tuple agent's choice as a hint."""
    from threes import Board, RandomPlacer, NTupleSlider, Direction, ILLEGAL
    from threes.episode import INITIAL_PLACEMENTS
    from threes.eval import suggest_move

    keys = {"w": Direction.UP, "d": Direction.RIGHT, "s": Direction.DOWN, "a": Direction.LEFT}
    board = Board()
    placer = RandomPlacer()
    advisor = NTupleSlider(f"{slide_args} alpha=0 save=")

    print("\n=== Interactive Game ===")
    print("Slide with w/a/s/d, q to quit")

    for _ in range(INITIAL_PLACEMENTS):
        placer.take_action(board).apply(board)

    while True:
        print(board)
        suggestion = suggest_move(advisor, board)
        if not suggestion:
            print(f"\nNo moves left. Score: {board.score()}")
            break
        print(f"Model suggests: {'wdsa'[suggestion.direction]}")

        try:
            key = input("Your move: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print("\nGame aborted")
            return
        if key == "q":
            print(f"\nScore: {board.score()}")
            return
        if key not in keys or board.slide(keys[key]) == ILLEGAL:
            print("Invalid move, try again")
            continue

        placement = placer.take_action(board)
        if not placement:
            print(f"\nBoard full. Score: {board.score()}")
            break
        placement.apply(board)
        print()


def main():
    parser = argparse.ArgumentParser(description="Evaluate Threes! sliders")
    parser.add_argument("--load", type=str, required=True, help="Path to weight file")
    parser.add_argument("--init", type=str, default=DEFAULT_INIT, help="Table sizes of the weight file")
    parser.add_argument("--play", action="store_true", help="Play interactive game")
    parser.add_argument("--episodes", type=int, default=100, help="Number of eval episodes")
    parser.add_argument("--seed", type=int, default=0, help="Placer seed")

    args = parser.parse_args()

    weight_path = Path(args.load)
    if not weight_path.exists():
        print(f"Weight file not found: {weight_path}")
        return

    print(f"Loading weights: {weight_path}")
    slide_args = f"init={args.init} load={weight_path}"

    # Interactive play
    if args.play:
        play_interactive(slide_args)
        return

    # Evaluation
    print(f"\n=== Evaluation ({args.episodes} episodes each) ===")
    try:
        results = eval_baselines(slide_args, episodes=args.episodes, seed=args.seed)
    except AgentError as e:
        print(f"✗ {e}")
        sys.exit(1)

    for kind, stats in results.items():
        print(f"\n{kind}")
        print(f"  Average: {stats['avg_score']:.0f}")
        print(f"  Max:     {stats['max_score']}")
        print(f"  Slides:  {stats['avg_slides']:.1f}")
        for tile, rate in stats["reach"].items():
            print(f"  {tile:6d}  {rate:.1%}")


if __name__ == "__main__":
    main()
