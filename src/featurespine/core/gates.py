"""
Gate types and the default feature configuration.

A feature configuration is a plain ``dict`` keyed by gate key. Each gate
stores one kind of value, described by its :class:`GateDataType`:

    ===================== ====================== ==========
    Gate                  key                    data type
    ===================== ====================== ==========
    BOOLEAN               boolean                BOOLEAN
    ACTOR                 actors                 SET
    GROUP                 groups                 SET
    PERCENTAGE_OF_ACTORS  percentage_of_actors   INTEGER
    PERCENTAGE_OF_TIME    percentage_of_time     INTEGER
    EXPRESSION            expression             JSON
    ===================== ====================== ==========

The memoizing adapter never looks inside a configuration; only backends
interpret gates.

Examples:
    >>> Gate.coerce("actors") is Gate.ACTOR
    True
    >>> default_config()["actors"]
    set()
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from featurespine.core.errors import InvalidGateError


class GateDataType(str, Enum):
    """Kind of value a gate stores."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    SET = "set"
    JSON = "json"


class Gate(Enum):
    """Known gate types as ``(config key, data type)`` pairs."""

    BOOLEAN = ("boolean", GateDataType.BOOLEAN)
    ACTOR = ("actors", GateDataType.SET)
    GROUP = ("groups", GateDataType.SET)
    PERCENTAGE_OF_ACTORS = ("percentage_of_actors", GateDataType.INTEGER)
    PERCENTAGE_OF_TIME = ("percentage_of_time", GateDataType.INTEGER)
    EXPRESSION = ("expression", GateDataType.JSON)

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def data_type(self) -> GateDataType:
        return self.value[1]

    @classmethod
    def coerce(cls, gate: Gate | str) -> Gate:
        """Resolve a gate from a member, its config key or its member name.

        Raises:
            InvalidGateError: If ``gate`` does not name a known gate
        """
        if isinstance(gate, cls):
            return gate
        if isinstance(gate, str):
            for member in cls:
                if gate == member.key or gate.upper() == member.name:
                    return member
        raise InvalidGateError(f"Unknown gate: {gate!r}").with_context(gate=str(gate))


def default_config() -> dict[str, Any]:
    """Return a fresh configuration for a feature with no gates set."""
    return {
        Gate.BOOLEAN.key: None,
        Gate.GROUP.key: set(),
        Gate.ACTOR.key: set(),
        Gate.EXPRESSION.key: None,
        Gate.PERCENTAGE_OF_ACTORS.key: None,
        Gate.PERCENTAGE_OF_TIME.key: None,
    }


__all__ = [
    "Gate",
    "GateDataType",
    "default_config",
]
