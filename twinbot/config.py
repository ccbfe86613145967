from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    app_name: str = "Twinbot"
    debug: bool = False

    # Observation history
    history_capacity: int = 8  # Samples kept per tracked robot
    freshness_window_ticks: int = 10  # Max teammate data age for role arbitration

    # Motion prediction
    angular_rate_threshold: float = 1e-5  # rad/tick, above this the path is circular

    # Movement
    leader_clearance_factor: float = 2.0  # Leader stops this many footprints short
    arena_margin_factor: float = 2.0  # Safe interior margin in footprints
    collision_hold_factor: float = 2.5  # Assistant holds inside this many footprints
    flank_offset_multiplier: float = 1.0  # tan(45 rad) ~ 1.62 pushes the flank further out
    bump_distance: float = 50.0  # Back-off distance after ramming

    # Targeting
    fire_power: float = 3.0  # Shared by damage and the lead-angle solve
    fire_range: float = 150.0  # Only fire below this distance
    radar_lock_gain: float = 1.95  # Overshoot factor for the radar lock

    class Config:
        env_prefix = "TWINBOT_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
