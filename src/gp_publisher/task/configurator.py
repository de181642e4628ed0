"""Publish-to-Google-Play task configurator.

Layers the publish task's field handling on top of a generic base
configurator: every host call runs the base behaviour first, then overlays
the publish fields.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

import structlog

from gp_publisher.task.fields import (
    produce_defaults,
    produce_edit_context,
    produce_persisted,
    validate_task_params,
)
from gp_publisher.task.host import (
    BaseTaskConfigurator,
    ErrorCollection,
    HostConfigurator,
    ParameterSource,
    TaskDefinition,
)


class PublishTaskConfigurator:
    """Host-facing configurator for the publish task form."""

    def __init__(
        self,
        *,
        base: HostConfigurator | None = None,
        strict_choices: bool = False,
        logger: Any | None = None,
    ) -> None:
        self._base = base if base is not None else BaseTaskConfigurator()
        self._strict_choices = strict_choices
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    @property
    def strict_choices(self) -> bool:
        return self._strict_choices

    def generate_task_config_map(
        self, params: ParameterSource, previous: TaskDefinition | None
    ) -> dict[str, str | None]:
        config = self._base.generate_task_config_map(params, previous)
        config.update(produce_persisted(params))
        self._logger.debug(
            "task_config_map_generated",
            field_count=len(config),
            previous_task_id=previous.task_id if previous is not None else None,
        )
        return config

    def populate_context_for_create(self, context: MutableMapping[str, object]) -> None:
        self._base.populate_context_for_create(context)
        context.update(produce_defaults())
        self._logger.debug("task_context_populated", form="create", field_count=len(context))

    def populate_context_for_edit(
        self, context: MutableMapping[str, object], task_definition: TaskDefinition
    ) -> None:
        self._base.populate_context_for_edit(context, task_definition)
        context.update(produce_edit_context(task_definition.configuration))
        self._logger.debug(
            "task_context_populated",
            form="edit",
            task_id=task_definition.task_id,
            plugin_key=task_definition.plugin_key,
            field_count=len(context),
        )

    def validate(self, params: ParameterSource, error_collection: ErrorCollection) -> None:
        self._base.validate(params, error_collection)
        issues = validate_task_params(params, strict_choices=self._strict_choices)
        error_collection.add_issues(issues)
        self._logger.debug(
            "task_params_validated",
            strict_choices=self._strict_choices,
            invalid_field_count=len({issue.field for issue in issues}),
        )


__all__ = ["PublishTaskConfigurator"]
