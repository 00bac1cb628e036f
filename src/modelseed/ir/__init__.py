"""Intermediate representation of agent schemas."""

from .schema import (
    FieldDefinition,
    ModelDefinition,
    DependencyEdge,
    ActionStep,
    AgentAction,
    ScheduleStep,
    Schedule,
    AgentInfo,
    AgentSchema,
)

__all__ = [
    "FieldDefinition",
    "ModelDefinition",
    "DependencyEdge",
    "ActionStep",
    "AgentAction",
    "ScheduleStep",
    "Schedule",
    "AgentInfo",
    "AgentSchema",
]
