from __future__ import annotations


class FlockError(Exception):
    """Base class for errors raised by the flock simulation."""


class ConfigError(FlockError, ValueError):
    pass


class UnknownAgentError(FlockError, KeyError):
    pass


class NonFiniteStateError(FlockError, ArithmeticError):
    """An agent reached the integrator with a NaN or infinite component.

    This means an upstream zero-length guard was skipped; the tick cannot continue.
    """

    def __init__(self, agent_id: int, field: str, value: object):
        super().__init__(f"agent {agent_id} has non-finite {field}: {value}")
        self.agent_id = agent_id
        self.field = field
        self.value = value
