"""
gp-publisher task package public API.

File: src/gp_publisher/task/__init__.py

Purpose
- Export the publish task configurator, its field rules and the host contracts.

Non-functional requirements
- No side effects at import time.
"""

from gp_publisher.task.configurator import PublishTaskConfigurator
from gp_publisher.task.fields import (
    FieldIssue,
    IssueKind,
    produce_defaults,
    produce_edit_context,
    produce_persisted,
    validate_task_params,
)
from gp_publisher.task.host import (
    ActionParameters,
    BaseTaskConfigurator,
    ErrorCollection,
    HostConfigurator,
    ParameterSource,
    TaskDefinition,
)

__all__ = [
    "ActionParameters",
    "BaseTaskConfigurator",
    "ErrorCollection",
    "FieldIssue",
    "HostConfigurator",
    "IssueKind",
    "ParameterSource",
    "PublishTaskConfigurator",
    "TaskDefinition",
    "produce_defaults",
    "produce_edit_context",
    "produce_persisted",
    "validate_task_params",
]
