"""Configuration data models."""

from dataclasses import dataclass


@dataclass
class SystemConfig:
    """System configuration settings."""
    # Classifier settings
    confidence_threshold: float = 50.0  # Percent, 0-100
    classifier_backend: str = "fake"  # fake, opencv

    # Decision policies
    escalate_when_disarmed: bool = True
    alarm_on_cat_when_away: bool = False

    # Repository settings
    repository_backend: str = "memory"  # memory, json
    repository_path: str = "data/security.json"

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Web API settings
    web_host: str = "0.0.0.0"
    web_port: int = 5000
    event_history_size: int = 100
