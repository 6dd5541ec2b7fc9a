"""Application configuration."""

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class TimelineSettings(BaseModel):
    """Preprocessing shared by the difficulty and performance phases."""

    min_delta_time: float = 25.0  # ms
    playfield_width: float = 512.0
    playfield_height: float = 384.0
    # Pixel scale of normalized distances for spacing thresholds
    scaled_radius: float = 52.0

    # Hit windows in ms at OD 0, shrinking per OD point
    great_window_base: float = 80.0
    great_window_step: float = 6.0
    ok_window_base: float = 140.0
    ok_window_step: float = 8.0
    meh_window_base: float = 200.0
    meh_window_step: float = 10.0

    # Approach preempt in ms at AR 0 / 5 / 10
    preempt_ar0: float = 1800.0
    preempt_ar5: float = 1200.0
    preempt_ar10: float = 450.0


class AimSettings(BaseModel):
    numerical_algorithm_accuracy: float = 1e-3
    root_max_iterations: int = 64
    skill_multiplier: float = 7000.0
    strain_decay_base: float = 0.15
    difficulty_multiplier: float = 0.0675


class SpeedSettings(BaseModel):
    skill_multiplier: float = 2600.0
    strain_decay_base: float = 0.3
    difficulty_multiplier: float = 0.0675
    min_speed_bonus: float = 75.0  # ms
    speed_balancing_factor: float = 40.0
    single_spacing_threshold: float = 125.0  # scaled pixels
    distance_exponent: float = 3.5


class RhythmSettings(BaseModel):
    history_time_max: float = 5000.0  # ms
    history_objects_max: int = 32
    rhythm_multiplier: float = 0.75


class AccuracySettings(BaseModel):
    clean_pass_threshold: float = 0.01
    root_tolerance: float = 1e-4
    root_max_iterations: int = 25
    initial_deviation_guess: float = 10.0  # ms


class FlashlightSettings(BaseModel):
    skill_multiplier: float = 0.052
    strain_decay_base: float = 0.15
    difficulty_multiplier: float = 0.0675
    history_objects_max: int = 10
    history_time_max: float = 3000.0  # ms
    history_decay: float = 0.8
    small_distance_threshold: float = 75.0  # scaled pixels


class PerformanceSettings(BaseModel):
    total_exponent: float = 1.1
    base_multiplier: float = 1.0
    star_rating_exponent: float = 1.1

    deviation_confidence: float = 0.99
    speed_note_leniency: float = 0.1
    combo_break_slider_ratio: float = 0.05
    combo_scaling_exponent: float = 0.8

    aim_deviation_constant: float = 50.0
    speed_deviation_constant: float = 20.0
    flashlight_deviation_constant: float = 32.0

    accuracy_scale: float = 70.0
    accuracy_reference_deviation: float = 8.0

    touch_device_exponent: float = 0.8
    hidden_bonus_per_ar: float = 0.04


class Settings(BaseSettings):
    """Engine settings with env var overrides, one section per skill."""

    timeline: TimelineSettings = TimelineSettings()
    aim: AimSettings = AimSettings()
    speed: SpeedSettings = SpeedSettings()
    rhythm: RhythmSettings = RhythmSettings()
    accuracy: AccuracySettings = AccuracySettings()
    flashlight: FlashlightSettings = FlashlightSettings()
    performance: PerformanceSettings = PerformanceSettings()

    model_config = {"env_prefix": "STARMETER_", "env_nested_delimiter": "__"}


settings = Settings()
