"""Shared defaults for waypoint."""

DEFAULT_CHAIN_NAME = "order"
DEFAULT_CONFIG_FILE = "waypoint.yaml"
DEFAULT_LOG_LEVEL = "WARNING"
