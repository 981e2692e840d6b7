"""Agents of the self-play loop."""
from .agent import Agent, Environment, Player
