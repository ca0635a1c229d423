"""
Training configuration for the mini shooter environment
Experiment configurations with multiple reward shaping settings
"""

# Game parameters (GameConfig overrides; empty means the arcade defaults)
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "round_time": 60.0,
    "spawn_interval": 0.8,
    "fire_cooldown": 0.12,
    "win_score": 700,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "dt": 1/30,
    "max_steps": None,  # derived from round_time / dt, just past the round length
    "k_enemies": 5,
    "game_config": GAME_CONFIG,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (balanced)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced reward shaping",
    "R_KILL": 1.0,       # Reward for destroying an enemy
    "R_WIN": 10.0,       # Bonus for reaching the win score
    "R_LOSS": 5.0,       # Penalty for being hit or running out of time
    "R_ESCAPE": 0.1,     # Penalty for letting an enemy through
    "R_SHOT": 0.01,      # Penalty for shooting (encourage efficiency)
    "R_TIME": 0.001,     # Small time penalty
}

# Reward Config 2: SURVIVAL (dodge first)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - higher loss penalty, lower combat rewards",
    "R_KILL": 0.5,
    "R_WIN": 10.0,
    "R_LOSS": 15.0,      # MUCH higher loss penalty - encourages dodging
    "R_ESCAPE": 0.0,
    "R_SHOT": 0.02,
    "R_TIME": 0.0,
}

# Reward Config 3: AGGRESSIVE (kill everything)
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize kills - higher kill and escape weights, cheap shots",
    "R_KILL": 2.0,
    "R_WIN": 20.0,
    "R_LOSS": 3.0,
    "R_ESCAPE": 0.5,     # Letting enemies through hurts
    "R_SHOT": 0.0,
    "R_TIME": 0.002,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# TIMESTEP CONFIGURATIONS
# ==============================================================================

TIMESTEP_CONFIGS = {
    "short": 50_000,       # Quick evaluation (50k)
    "medium": 500_000,     # Standard training (500k)
    "long": 1_600_000,     # Extended training (1.6M)
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
