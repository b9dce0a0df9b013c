"""
Evaluation configuration for the asteroids environment
Reward shaping settings and scripted-baseline experiments
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Rendering slows evaluation down a lot
    "frame_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_asteroids": 5,
    "shoot_cooldown_steps": 6,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (balanced)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced reward shaping",
    "R_KILL": 1.0,       # Reward for shooting an asteroid
    "R_HIT": 1.0,        # Penalty per life lost
    "R_HEART": 0.5,      # Reward for collecting a heart
    "R_SCORE": 0.01,     # Reward per survival score point
    "R_SHOT": 0.01,      # Penalty for shooting (encourage efficiency)
    "R_DEATH": 5.0,      # Game over penalty
}

# Reward Config 2: SURVIVAL_FOCUS (dodge first)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - higher hit/death penalties, lower combat rewards",
    "R_KILL": 0.3,
    "R_HIT": 3.0,
    "R_HEART": 1.0,
    "R_SCORE": 0.02,
    "R_SHOT": 0.02,
    "R_DEATH": 10.0,
}

# Reward Config 3: AGGRESSIVE (shoot everything)
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize combat - higher kill reward, lower penalties",
    "R_KILL": 2.0,
    "R_HIT": 0.5,
    "R_HEART": 0.5,
    "R_SCORE": 0.005,
    "R_SHOT": 0.005,
    "R_DEATH": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "seeds": [42, 123, 456],
    "n_episodes": 10,
    "policies": ["random", "dodge"],
    "log_dir": "./logs",
}


def reward_params(name: str) -> dict:
    """Reward weights of a named config, without the descriptive keys"""
    if name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {name}")
    return {k: v for k, v in REWARD_CONFIGS[name].items() if k.startswith("R_")}
