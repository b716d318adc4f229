from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_CHAIN_NAME, DEFAULT_CONFIG_FILE, DEFAULT_LOG_LEVEL
from .states import ORDER_DESCRIPTIONS, OrderState, StateChain


def _default_chains() -> Dict[str, List[str]]:
    return {DEFAULT_CHAIN_NAME: [state.value for state in OrderState]}


def _default_descriptions() -> Dict[str, Dict[str, str]]:
    return {DEFAULT_CHAIN_NAME: dict(ORDER_DESCRIPTIONS)}


class HistoryConfig(BaseModel):
    """Checkpoint history settings."""

    max_depth: Optional[int] = None

    @field_validator("max_depth")
    @classmethod
    def _positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("max_depth must be a positive integer")
        return v


class WaypointConfig(BaseModel):
    """Top-level configuration model."""

    chains: Dict[str, List[str]] = Field(default_factory=_default_chains)
    descriptions: Dict[str, Dict[str, str]] = Field(default_factory=_default_descriptions)
    history: HistoryConfig = HistoryConfig()
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("chains")
    @classmethod
    def _keep_default_chain(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        merged = _default_chains()
        merged.update(v)
        return merged

    @field_validator("descriptions")
    @classmethod
    def _keep_default_descriptions(
        cls, v: Dict[str, Dict[str, str]]
    ) -> Dict[str, Dict[str, str]]:
        merged = _default_descriptions()
        merged.update(v)
        return merged

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def build_chain(self, name: str = DEFAULT_CHAIN_NAME) -> StateChain:
        """Build the chain registered under ``name``.

        Raises:
            KeyError: If no chain with that name is configured.
            ChainDefinitionError: If the configured labels are invalid.
        """
        if name not in self.chains:
            raise KeyError(f"Unknown chain: {name}")
        return StateChain.from_labels(
            self.chains[name], descriptions=self.descriptions.get(name)
        )


def load_config(path: Optional[str] = None) -> WaypointConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to WAYPOINT_CONFIG env
            variable or 'waypoint.yaml' in the current directory.
    """

    config_path = path or os.getenv("WAYPOINT_CONFIG", DEFAULT_CONFIG_FILE)
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    env_level = os.getenv("WAYPOINT_LOG_LEVEL")
    if env_level:
        data["log_level"] = env_level
    return WaypointConfig(**data)
