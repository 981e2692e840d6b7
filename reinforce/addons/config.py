# -*- coding: utf-8 -*-
"""
Agent configuration.

Agents are configured with a string of whitespace separated ``key=value`` tokens, for example
``"name=learner seed=7 init save=weights.bin"``. A token without ``=`` is a marker whose value is the
token itself. Later tokens override earlier ones, and every configuration starts from
``name=unknown role=unknown``.
"""
from __future__ import annotations

from dataclasses import dataclass, field

BASE_ARGS = "name=unknown role=unknown"

# ##: Keys turned into typed fields; any other key is kept as-is in `extras`.
RECOGNIZED_KEYS = ("name", "role", "seed", "alpha", "beta", "init", "load", "save")


def parse_properties(args: str) -> dict[str, str]:
    """
    Split a configuration string into properties.

    Parameters
    ----------
    args : str
        Whitespace separated ``key=value`` tokens.

    Returns
    -------
    dict[str, str]
        Properties in order of first appearance, the last value of a repeated key winning.
    """
    properties = {}
    for token in args.split():
        key, separator, value = token.partition("=")
        properties[key] = value if separator else token
    return properties


def _coerce(key: str, value: str, kind: type):
    try:
        return kind(value)
    except ValueError as error:
        raise ValueError(f"Invalid value `{value}` for `{key}`: expected {kind.__name__}.") from error


@dataclass(frozen=True)
class AgentConfig:
    """
    Typed configuration of an agent, validated once when parsed.

    Attributes
    ----------
    name, role : str
        Identification of the agent.
    seed : int | None
        Seed of the agent's random generator, None to seed from the OS.
    alpha : float | None
        General learning rate.
    beta : float | None
        Rate of the temporal-difference weight update.
    init : bool
        Whether to zero-initialize the weight tables.
    load : str | None
        Path of a weight file to load.
    save : str | None
        Path of a weight file to write on shutdown.
    extras : dict[str, str]
        Unrecognized properties, accepted as-is.
    """

    name: str = "unknown"
    role: str = "unknown"
    seed: int | None = None
    alpha: float | None = None
    beta: float | None = None
    init: bool = False
    load: str | None = None
    save: str | None = None
    extras: dict[str, str] = field(default_factory=dict)
    properties: dict[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_args(cls, args: str = "", defaults: str = "") -> AgentConfig:
        """
        Parse a configuration string.

        Parameters
        ----------
        args : str
            User supplied ``key=value`` tokens.
        defaults : str
            Tokens of the agent kind, overridden by ``args``.

        Returns
        -------
        AgentConfig
            The validated configuration.

        Raises
        ------
        ValueError
            If a recognized numeric key has a malformed value.
        """
        return cls.from_properties(parse_properties(" ".join((BASE_ARGS, defaults, args))))

    @classmethod
    def from_properties(cls, properties: dict[str, str]) -> AgentConfig:
        """Build a configuration from already split properties."""
        seed = properties.get("seed")
        alpha = properties.get("alpha")
        beta = properties.get("beta")
        return cls(
            name=properties.get("name", "unknown"),
            role=properties.get("role", "unknown"),
            seed=_coerce("seed", seed, int) if seed is not None else None,
            alpha=_coerce("alpha", alpha, float) if alpha is not None else None,
            beta=_coerce("beta", beta, float) if beta is not None else None,
            init="init" in properties,
            load=properties.get("load") or None,
            save=properties.get("save") or None,
            extras={key: value for key, value in properties.items() if key not in RECOGNIZED_KEYS},
            properties=dict(properties),
        )

    def property(self, key: str) -> str:
        """
        Look up the raw value of a property.

        Raises
        ------
        KeyError
            If the property was never set. There is no implicit default.
        """
        try:
            return self.properties[key]
        except KeyError:
            raise KeyError(f"Property `{key}` is not set for agent `{self.name}`.") from None

    def notify(self, message: str) -> AgentConfig:
        """
        Return a new configuration with one ``key=value`` property updated.

        Parameters
        ----------
        message : str
            A single ``key=value`` token.
        """
        properties = dict(self.properties)
        properties.update(parse_properties(message))
        return self.from_properties(properties)
