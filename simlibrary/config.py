"""Engine configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for one game session."""

    # World
    world_seed: int = 42

    # Starting resources
    starting_stars: int = 1000
    starting_tower_bucks: int = 5
    starter_floor_type: str = "board_books"
    starting_xp_to_next: int = 100
    xp_growth: float = 1.5

    # Tower
    max_floors: int = 25
    max_upgrade_level: int = 3
    upgrade_costs: tuple = (200, 500)          # stars for level 1->2, 2->3
    delete_refund_ratio: float = 0.5

    # Readers
    reader_spawn_chance: float = 0.20          # per tick
    vip_chance: float = 0.10
    preference_restrict_chance: float = 0.70
    elevator_base_ms: int = 2000
    elevator_per_floor_ms: int = 500
    checkout_ms: int = 3000
    instant_checkout_ms: int = 100
    trash_per_checkout: int = 2
    attract_reader_count: int = 3
    critic_bonus_multiplier: float = 1.5
    critic_bonus_ms: int = 120_000

    # Lobby
    lobby_capacity: int = 3
    applicant_interval_s: tuple = (45, 90)
    applicant_ttl_s: int = 120
    vip_guest_interval_s: tuple = (90, 180)
    vip_guest_ttl_s: int = 60
    applicant_discount: float = 0.5

    # Missions
    mission_first_s: int = 60
    mission_retry_s: int = 60
    mission_interval_s: tuple = (120, 300)
    mission_request_range: tuple = (2, 4)
    mission_time_limit_s: tuple = (60, 120)
    mission_bucks_chance: float = 0.30
    mission_history_size: int = 10

    find_mission_first_s: int = 180
    find_mission_interval_s: tuple = (180, 420)
    find_mission_time_limit_s: int = 90
    find_mission_reward_per_floor: int = 25
    find_mission_items_range: tuple = (1, 3)   # capped by the number of ready standard floors

    hall_event_first_s: int = 240
    hall_event_interval_s: tuple = (300, 600)
    hall_event_time_limit_s: int = 180
    hall_event_attendance_range: tuple = (5, 10)
    hall_event_star_bonus: float = 1.5

    mini_quest_first_s: int = 120
    mini_quest_interval_s: tuple = (150, 300)
    mini_quest_time_limit_s: int = 120

    # Global events & rush hour
    event_first_s: int = 300
    event_interval_s: tuple = (300, 600)
    rush_hour_first_s: int = 600
    rush_hour_interval_s: tuple = (600, 900)
    rush_hour_duration_s: int = 60
    rush_hour_spawn_multiplier: float = 2.0

    # Incidents
    incident_min_floors: int = 4
    incident_cooldown_s: int = 120
    incident_fixer_reduction: float = 10.0
    incident_unstaffed_fix_factor: int = 4
    incident_mood_penalty: int = 10

    # Weather / seasons
    seconds_per_game_day: int = 600
    days_per_season: int = 7
    weather_interval_s: tuple = (300, 600)

    # Mood
    starting_mood: float = 50.0
    mood_high: float = 70.0
    mood_low: float = 30.0
    mood_bonus: float = 0.25
    mood_drift_per_s: float = 1.0
    mood_bonus_currency_threshold: float = 80.0

    # Cleaning
    cleaning_interval_s: int = 10
    janitor_clean_per_skill: int = 5
    manual_clean_cost: int = 10
    trash_penalty_start: int = 50

    # Economy
    bonus_currency_chance: float = 0.05
    loyalty_card_every: int = 25
    loyalty_bonus: float = 1.1

    # Offline reconciliation
    offline_min_ms: int = 1000
    offline_base_cap_hours: int = 3
    offline_reader_interval_s: int = 30
    offline_earning_factor: float = 0.5
    offline_notify_after_ms: int = 60_000

    # Daily login bonus (index = streak day - 1, repeating weekly)
    daily_login_stars: tuple = (50, 75, 100, 150, 200, 300, 500)
    daily_login_bucks: tuple = (0, 0, 1, 0, 0, 1, 3)

    # Persistence
    save_key: str = "simlibrary_save_v3"
    save_dir: str = "saves"

    # Runtime
    tick_rate: float = 1.0

    # Logging
    log_level: str = "INFO"
