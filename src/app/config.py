"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from arena.ai.controller import ControllerConfig
from arena.ai.threat import ThreatTable
from arena import units as archetypes


class Settings(BaseSettings):
    """Application settings loaded from environment variables (ARENA_*)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ARENA_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ARENA-COMMANDER"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Opponent sides
    own_side: str = "red"

    # Mode controller thresholds
    defend_threat_threshold: float = 10.0
    defend_min_dwell: float = 2.0           # seconds before DEFEND may exit
    nearby_threat_radius: float = 200.0     # towers "clear" beyond this
    counter_elixir_threshold: float = 5.0
    counter_timeout: float = 5.0
    push_cooldown: float = 6.0              # since last PUSH entry
    push_elixir_threshold: float = 7.0
    push_min_duration: float = 8.0
    push_archetypes: list[str] = []         # empty = registry push archetypes

    # Threat scoring
    default_threat_weight: float = 5.0
    threat_weights: dict[str, float] = {}   # overrides on top of the registry

    # Telemetry
    history_size: int = 64

    # Scenario replay
    scenarios_dir: str = "scenarios"

    def controller_config(self) -> ControllerConfig:
        return ControllerConfig(
            defend_threat_threshold=self.defend_threat_threshold,
            defend_min_dwell=self.defend_min_dwell,
            nearby_threat_radius=self.nearby_threat_radius,
            counter_elixir_threshold=self.counter_elixir_threshold,
            counter_timeout=self.counter_timeout,
            push_cooldown=self.push_cooldown,
            push_elixir_threshold=self.push_elixir_threshold,
            push_min_duration=self.push_min_duration,
            push_archetypes=frozenset(self.push_archetypes) or archetypes.push_archetypes(),
        )

    def threat_table(self) -> ThreatTable:
        weights = archetypes.threat_weights()
        weights.update(self.threat_weights)
        return ThreatTable(weights=weights, default_weight=self.default_threat_weight)


settings = Settings()
