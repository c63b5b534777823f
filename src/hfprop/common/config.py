"""
Centralized Configuration Management for hfprop

This module provides a unified interface for loading and accessing
client configuration from YAML files. There is no process-wide mutable
state: each client holds its own configuration instance.
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field, asdict

from .constants import (
    GIRO_BASE_URL,
    DEFAULT_URSI_CODE,
    DEFAULT_MUF_DISTANCE_KM,
    DEFAULT_TIMEOUT_SEC,
    DEFAULT_WINDOW_HOURS,
    MIN_VALID_HMF2_KM,
)


@dataclass
class GIROConfig:
    """Configuration for the GIRO DIDBase data source"""

    base_url: str = GIRO_BASE_URL
    default_station: str = DEFAULT_URSI_CODE  # URSI station code

    # Reference distance sent as DMUF (only affects the MUFD characteristic)
    muf_distance_km: float = DEFAULT_MUF_DISTANCE_KM

    # Disabling certificate verification is an explicit opt-in
    verify_tls: bool = True

    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    window_hours: float = DEFAULT_WINDOW_HOURS  # trailing window for "latest"

    min_valid_hmf2_km: float = MIN_VALID_HMF2_KM

    @property
    def dmuf(self) -> str:
        """Reference distance as sent on the wire (whole km)"""
        return f"{self.muf_distance_km:.0f}"


@dataclass
class LoggingConfig:
    """Configuration for log output"""

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None


@dataclass
class HFPropConfig:
    """Master configuration for hfprop"""

    giro: GIROConfig = field(default_factory=GIROConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'HFPropConfig':
        """Load configuration from YAML file"""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(
            giro=GIROConfig(**(config_dict.get('giro') or {})),
            logging=LoggingConfig(**(config_dict.get('logging') or {})),
        )

    def to_yaml(self, yaml_path: str) -> None:
        """Save configuration to YAML file"""
        with open(yaml_path, 'w') as f:
            yaml.safe_dump(asdict(self), f, default_flow_style=False)


def get_config(config_path: Optional[str] = None) -> HFPropConfig:
    """
    Get client configuration

    Priority:
    1. Provided config_path
    2. HFPROP_CONFIG environment variable
    3. config/hfprop.yml, then ~/.config/hfprop/hfprop.yml
    4. Default configuration
    """
    if config_path is None:
        config_path = os.getenv('HFPROP_CONFIG')

    if config_path is None:
        default_paths = [
            Path('config/hfprop.yml'),
            Path.home() / '.config' / 'hfprop' / 'hfprop.yml',
        ]

        for path in default_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path and Path(config_path).exists():
        return HFPropConfig.from_yaml(config_path)

    return HFPropConfig()
