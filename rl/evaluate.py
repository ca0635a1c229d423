"""
Evaluation script for trained RL agents
"""

import argparse
import time
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.minishooter import ShooterEnv
from rl.configs.shooter_config import ENV_CONFIG
from rl.train import MultiDiscreteToDiscreteWrapper


def _load_model(model_path: str, algo: str):
    if algo == "ppo":
        return PPO.load(model_path)
    elif algo == "dqn":
        return DQN.load(model_path)
    raise ValueError(f"Unknown algorithm: {algo}")


def _summarize(episode_rewards, episode_lengths, episode_scores, episode_wins):
    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
        "win_rate": float(np.mean(episode_wins)),
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
        "episode_scores": episode_scores,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    model = _load_model(model_path, algo)

    render_mode = "human" if render else None
    base_env = ShooterEnv(render_mode=render_mode, **ENV_CONFIG)
    inner = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env

    env = DummyVecEnv([lambda: inner])
    if seed is not None:
        env.seed(seed)

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards = []
    episode_lengths = []
    episode_scores = []
    episode_wins = []

    for episode in range(n_episodes):
        obs = env.reset()

        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, infos = env.step(action)
            total_reward += float(reward[0])
            steps += 1

            if render:
                time.sleep(base_env.dt)

            if done[0]:
                break

        info = infos[0]
        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info.get("score", 0))
        episode_wins.append(1.0 if info.get("won", False) else 0.0)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {info.get('score', 0)}, "
              f"Length = {steps}, {'WIN' if info.get('won') else 'loss'}")

    env.close()

    results = _summarize(episode_rewards, episode_lengths, episode_scores, episode_wins)

    print("\n" + "="*50)
    print(f"Evaluation Results ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}")
    print(f"Win Rate: {results['win_rate']:.2%}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print("="*50)

    return results


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = ShooterEnv(render_mode=None, **ENV_CONFIG)
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards = []
    episode_lengths = []
    episode_scores = []
    episode_wins = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])
        episode_wins.append(1.0 if info["won"] else 0.0)

    env.close()

    results = _summarize(episode_rewards, episode_lengths, episode_scores, episode_wins)

    print(f"\nRandom Policy Results ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Score: {results['mean_score']:.1f}  Win Rate: {results['win_rate']:.2%}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument(
        "model_path",
        type=str,
        help="Path to the trained model",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn"],
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
        )

        improvement = results["mean_reward"] - random_results["mean_reward"]
        print(f"\nImprovement over random: {improvement:.2f}")
        print(f"Score difference: {results['mean_score'] - random_results['mean_score']:.1f}")


if __name__ == "__main__":
    main()
