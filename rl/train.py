"""
Training script for the mini shooter environment using Stable-Baselines3
Supports PPO and DQN with per-episode metrics tracking.
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.minishooter import ShooterEnv
from rl.configs.shooter_config import (
    ENV_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS, TIMESTEP_CONFIGS,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


class MultiDiscreteToDiscreteWrapper(gym.ActionWrapper):
    """
    Wrapper to convert MultiDiscrete action space to Discrete for DQN.
    Flattens MultiDiscrete([3, 2]) to Discrete(3*2=6).
    """

    def __init__(self, env):
        super().__init__(env)
        self.orig_action_space = env.action_space
        self._nvec = env.action_space.nvec
        self.n_total = int(np.prod(self._nvec))
        self.action_space = spaces.Discrete(self.n_total)

    def action(self, action):
        """Convert flat discrete action to MultiDiscrete."""
        indices = []
        remaining = int(action)
        for n in reversed(self._nvec):
            indices.append(remaining % n)
            remaining //= n
        return np.array(list(reversed(indices)), dtype=np.int64)


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             wrap_for_dqn: bool = False, reward_config: str = "baseline"):
    """Factory function to create the environment"""
    if reward_config not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_config}")

    def _init():
        env = ShooterEnv(render_mode=render_mode, reward_config=REWARD_CONFIGS[reward_config],
                         **ENV_CONFIG)
        if wrap_for_dqn:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def resolve_timesteps(timesteps: Optional[int] = None, preset: Optional[str] = None) -> int:
    """Explicit count first, then a named preset, then the training default"""
    if timesteps is not None:
        return timesteps
    if preset is not None:
        if preset not in TIMESTEP_CONFIGS:
            raise ValueError(f"Unknown timestep preset: {preset}")
        return TIMESTEP_CONFIGS[preset]
    return TRAINING_CONFIG["total_timesteps"]


def run_dirs(algo: str, save_dir: Optional[str] = None, log_dir: Optional[str] = None,
             tensorboard_log: Optional[str] = None):
    """Per-algorithm output directories, defaulting under TRAINING_CONFIG roots"""
    return (
        save_dir or os.path.join(TRAINING_CONFIG["model_dir"], algo),
        log_dir or os.path.join(TRAINING_CONFIG["log_dir"], algo),
        tensorboard_log or os.path.join(TRAINING_CONFIG["tensorboard_log"], algo),
    )


def _callbacks(algo: str, eval_env, save_dir: str, log_dir: str, freq_div: int = 1):
    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // freq_div),
        save_path=save_dir,
        name_prefix=f"{algo}_shooter",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 5000) // freq_div),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name=algo,
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)
    return [checkpoint_callback, eval_callback, metrics_callback, tb_callback], metrics_callback


def _report(algo: str, final_path: str, metrics_callback: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{algo.upper()} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}  Win Rate: {summary['win_rate']:.2%}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")


def train_ppo(
    total_timesteps: Optional[int] = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    n_envs: int = 4,
    reward_config: str = "baseline",
):
    """Train PPO agent on the shooter environment"""

    total_timesteps = resolve_timesteps(total_timesteps)
    save_dir, log_dir, tensorboard_log = run_dirs("ppo", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments, reward config '{reward_config}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i, reward_config=reward_config) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100, reward_config=reward_config)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    callbacks, metrics_callback = _callbacks("ppo", eval_env, save_dir, log_dir, freq_div=n_envs)

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "ppo_shooter_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _report("ppo", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: Optional[int] = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    reward_config: str = "baseline",
):
    """Train DQN agent on the shooter environment"""

    total_timesteps = resolve_timesteps(total_timesteps)
    save_dir, log_dir, tensorboard_log = run_dirs("dqn", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training DQN for {total_timesteps:,} timesteps...")
    print(f"Using MultiDiscrete->Discrete action wrapper (6 actions)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=0, wrap_for_dqn=True, reward_config=reward_config)])
    eval_env = DummyVecEnv([make_env(seed=100, wrap_for_dqn=True, reward_config=reward_config)])

    callbacks, metrics_callback = _callbacks("dqn", eval_env, save_dir, log_dir)

    model = DQN(
        env=env,
        tensorboard_log=tensorboard_log,
        **DQN_CONFIG
    )

    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, "dqn_shooter_final")
    model.save(final_path)

    _report("dqn", final_path, metrics_callback)
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the mini shooter")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        choices=sorted(TIMESTEP_CONFIGS),
        help="Named training length, used when --timesteps is not given",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping preset (default: baseline)",
    )

    args = parser.parse_args()
    timesteps = resolve_timesteps(args.timesteps, args.preset)

    if args.algo == "ppo":
        train_ppo(total_timesteps=timesteps, n_envs=args.n_envs,
                  reward_config=args.reward_config)
    elif args.algo == "dqn":
        train_dqn(total_timesteps=timesteps, reward_config=args.reward_config)
    elif args.algo == "all":
        print("Training all algorithms sequentially...")
        train_dqn(total_timesteps=timesteps, reward_config=args.reward_config)
        train_ppo(total_timesteps=timesteps, n_envs=args.n_envs,
                  reward_config=args.reward_config)


if __name__ == "__main__":
    main()
