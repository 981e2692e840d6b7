"""Agent configuration."""
from .config import AgentConfig, parse_properties
