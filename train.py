#!/usr/bin/env python3
"""
Train an n-tuple network slider for Threes! by self-play against the random
environment.

Writes the config, per-block history and a learning-curve plot to the run
directory; weights go wherever --slide's save= points.

Usage:
    python train.py                                  # 1000 episodes, default network
    python train.py --total 100000 --block 1000 \\
        --slide "init=65536,65536 alpha=0.00625 save=weights.bin"
    python train.py --agent merge --total 1000      # heuristic baseline stats
"""

import sys
import json
import logging
import argparse
from dataclasses import asdict
from pathlib import Path

from tqdm.auto import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from threes import TrainConfig, AgentError, train
from threes.train import SLIDERS


def create_plots(history: list, output_dir: Path):
    """Plot block average and max score against episodes."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    episodes = [h['episode'] for h in history]

    plt.figure(figsize=(10, 6))
    plt.plot(episodes, [h['avg_score'] for h in history], label='Average', linewidth=2)
    plt.plot(episodes, [h['max_score'] for h in history], label='Max', linewidth=2, alpha=0.7)
    plt.title('Score per Block', fontsize=14, fontweight='bold')
    plt.xlabel('Episode', fontsize=12)
    plt.ylabel('Score', fontsize=12)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_dir / 'plot_score.png', dpi=150, bbox_inches='tight')
    plt.close()

    if 'td_error' in history[0]:
        plt.figure(figsize=(10, 6))
        plt.plot(episodes, [h['td_error'] for h in history], linewidth=2, color='red')
        plt.title('Mean |TD Error| (last episode of block)', fontsize=14, fontweight='bold')
        plt.xlabel('Episode', fontsize=12)
        plt.ylabel('|TD Error|', fontsize=12)
        plt.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(output_dir / 'plot_td_error.png', dpi=150, bbox_inches='tight')
        plt.close()


def main():
    parser = argparse.ArgumentParser(description="Train Threes! n-tuple slider")
    parser.add_argument("--total", type=int, default=1000, help="Episodes to play")
    parser.add_argument("--block", type=int, default=100, help="Episodes per statistics block")
    parser.add_argument("--agent", type=str, default="ntuple", choices=sorted(SLIDERS), help="Slider kind")
    parser.add_argument("--slide", type=str, default=None, help="Slider key=value arguments")
    parser.add_argument("--place", type=str, default="", help="Placer key=value arguments")
    parser.add_argument("--run-name", type=str, default="threes_run", help="Run name for saving")
    parser.add_argument("--save-dir", type=str, default="runs", help="Save directory")
    parser.add_argument("--seed", type=int, default=0, help="Placer and random slider seed")
    parser.add_argument("--no-plots", action="store_true", help="Skip plot generation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Config
    config = TrainConfig(
        total=args.total,
        block=args.block,
        agent=args.agent,
        place_args=args.place,
        seed=args.seed,
    )
    if args.slide is not None:
        config.slide_args = args.slide

    # Create save directory
    run_dir = Path(args.save_dir) / args.run_name
    run_dir.mkdir(parents=True, exist_ok=True)

    # Save config
    with open(run_dir / "config.json", "w") as f:
        json.dump(asdict(config), f, indent=2)

    print(f"Slider: {config.agent} [{config.slide_args}]")
    print(f"Placer: random [{config.place_args or f'seed={config.seed}'}]")

    # Training loop
    print("\n=== Training ===")
    try:
        history = train(config)
    except AgentError as e:
        tqdm.write(f"✗ {e}")
        sys.exit(1)

    # Save history
    with open(run_dir / "history.json", "w") as f:
        json.dump(history, f, indent=2)
    try:
        import pandas as pd
        pd.DataFrame([{k: v for k, v in h.items() if k != "reach"} for h in history]).to_csv(
            run_dir / "history.csv", index=False)
        print(f"✓ History saved to {run_dir / 'history.csv'}")
    except ImportError:
        pass

    # Generate plots
    if history and not args.no_plots:
        print("\n=== Generating Plots ===")
        plots_dir = run_dir / "plots"
        plots_dir.mkdir(exist_ok=True)
        create_plots(history, plots_dir)
        print(f"✓ Plots saved to {plots_dir}")

    # Final summary
    if history:
        final = history[-1]
        print("\n=== Final Block ===")
        print(f"Average score: {final['avg_score']:.0f}")
        print(f"Max score:     {final['max_score']}")
        for tile, rate in final["reach"].items():
            print(f"  {tile:6d}  {rate:.1%}")

    print(f"\n✅ All outputs saved to: {run_dir}")


if __name__ == "__main__":
    main()
