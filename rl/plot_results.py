"""
Plotting script for RL experiment results.
Generates learning curves (reward, score, win rate) and a comparison plot.
"""

import os
import argparse
from typing import Dict, Optional

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV written by MetricsCallback for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window or window <= 1:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(
    df: pd.DataFrame,
    algo: str,
    output_dir: str,
    window: int = 50,
):
    """Plot learning curves for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "score", "Final Score", "purple"),
        (axes[1, 0], "won", "Win Rate", "green"),
        (axes[1, 1], "length", "Episode Length", "orange"),
    ]
    for ax, column, label, color in panels:
        if column not in df.columns:
            ax.axis("off")
            continue
        values = df[column].values.astype(float)
        smoothed = smooth(values, window)
        ax.plot(df["timestep"].values[:len(smoothed)], smoothed, linewidth=2, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        if column == "won":
            ax.set_ylim(0, 1.05)
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    output_dir: str,
    window: int = 50,
):
    """Plot score and win rate of all algorithms on shared axes."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    colors = {"dqn": "#2ecc71", "ppo": "#3498db"}

    for ax, column, label in ((axes[0], "score", "Final Score"), (axes[1], "won", "Win Rate")):
        for algo, df in data.items():
            if df is None or len(df) == 0:
                continue
            smoothed = smooth(df[column].values.astype(float), window)
            ax.plot(df["timestep"].values[:len(smoothed)], smoothed, linewidth=2,
                    label=algo.upper(), color=colors.get(algo, None))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} Comparison")
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    print(f"Saved comparison plot to {save_path}")
    return save_path


def summarize(df: pd.DataFrame, last: int = 100) -> Dict[str, float]:
    """Final-performance numbers over the last `last` episodes."""
    final = df.tail(last)
    return {
        "episodes": int(len(df)),
        "mean_reward": float(final["reward"].mean()),
        "mean_score": float(final["score"].mean()),
        "win_rate": float(final["won"].mean()),
        "mean_length": float(final["length"].mean()),
    }


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Generate a text summary report."""
    report_lines = [
        "=" * 60,
        "RL EXPERIMENT SUMMARY REPORT",
        "=" * 60,
    ]

    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        s = summarize(df)
        report_lines.append(f"\n{algo.upper()} Results:")
        report_lines.append("-" * 40)
        report_lines.append(f"  Total Episodes: {s['episodes']}")
        report_lines.append(f"  Total Timesteps: {df['timestep'].max():,}")
        report_lines.append(f"  Final Performance (last 100 episodes):")
        report_lines.append(f"    Mean Reward: {s['mean_reward']:.2f}")
        report_lines.append(f"    Mean Score: {s['mean_score']:.1f}")
        report_lines.append(f"    Win Rate: {s['win_rate']:.2%}")
        report_lines.append(f"    Mean Length: {s['mean_length']:.1f}")

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "experiment_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot RL experiment results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument("--algos", nargs="+", default=["dqn", "ppo"], help="Algorithms to plot")

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is not None:
            print(f"  Loaded {algo}: {len(df)} episodes")
        else:
            print(f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir, args.window)

    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
