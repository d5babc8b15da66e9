"""Pipeline cancellation operation."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from gl_group_ops.errors import RemoteAPIError
from gl_group_ops.models import (
    CANCELLABLE_STATUSES,
    DEFAULT_REF,
    TERMINAL_PIPELINE_STATUSES,
    ActionResult,
    PipelineRecord,
    ProjectRecord,
)
from gl_group_ops.operations.base import Operation, register_operation

# Status codes GitLab uses to refuse cancelling a pipeline that already finished
NOT_CANCELLABLE_STATUS_CODES = {400, 409}


@register_operation("cancel-pipelines")
class CancelPipelinesOperation(Operation):
    """Cancel pending/running pipelines for a ref across a group's projects."""

    def __init__(self, client, ref: str = DEFAULT_REF, statuses: Sequence[str] = CANCELLABLE_STATUSES):
        super().__init__(client)
        self.ref = ref
        self.statuses = tuple(statuses)

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--ref", default=DEFAULT_REF, help=f"Ref whose pipelines are cancelled (default: {DEFAULT_REF})"
        )
        parser.add_argument(
            "--status",
            action="append",
            dest="statuses",
            choices=list(CANCELLABLE_STATUSES),
            default=None,
            help="Pipeline status to cancel (repeatable, default: pending and running)",
        )

    @classmethod
    def from_args(cls, client, args, settings) -> CancelPipelinesOperation:
        return cls(client, ref=args.ref, statuses=args.statuses or CANCELLABLE_STATUSES)

    @property
    def label(self) -> str:
        return f"cancel-pipelines:{self.ref}"

    def find_pipelines(self, project: ProjectRecord) -> list[PipelineRecord]:
        """Pipelines of ``project`` on the ref in any of the wanted statuses, once each."""
        path = project.path_with_namespace or project.name
        self.logger.info(f"- looking up {'/'.join(self.statuses)} pipelines on '{self.ref}' for project '{path}'")
        seen: set[int] = set()
        pipelines = []
        for status in self.statuses:
            for pipeline in self.client.list_pipelines(project.id, scope=status, ref=self.ref):
                if pipeline.id not in seen:
                    seen.add(pipeline.id)
                    pipelines.append(pipeline)
        return pipelines

    def apply_to_project(self, project: ProjectRecord) -> ActionResult:
        pipelines = self.find_pipelines(project)
        if not pipelines:
            return self._record(
                ActionResult(
                    project=project,
                    operation=self.label,
                    action="already_set",
                    detail=f"no {'/'.join(self.statuses)} pipelines",
                )
            )

        ids = ", ".join(str(p.id) for p in pipelines)
        if self.client.dry_run:
            return self._record(
                ActionResult(
                    project=project,
                    operation=self.label,
                    action="would_apply",
                    detail=f"pipelines: {ids}",
                    dry_run=True,
                )
            )

        cancelled = []
        for pipeline in pipelines:
            self.logger.warning(
                f"!! Cancelling {pipeline.status} pipeline {pipeline.id} on {pipeline.ref}: {pipeline.web_url}"
            )
            if self._cancel(project, pipeline):
                cancelled.append(pipeline.id)

        if not cancelled:
            return self._record(
                ActionResult(
                    project=project,
                    operation=self.label,
                    action="already_set",
                    detail=f"pipelines already finished: {ids}",
                )
            )
        return self._record(
            ActionResult(
                project=project,
                operation=self.label,
                action="applied",
                detail=f"cancelled: {', '.join(str(i) for i in cancelled)}",
            )
        )

    def _cancel(self, project: ProjectRecord, pipeline: PipelineRecord) -> bool:
        """Cancel one pipeline; False when it had already reached a terminal state."""
        try:
            self.client.cancel_pipeline(project.id, pipeline.id)
        except RemoteAPIError as e:
            if e.status_code not in NOT_CANCELLABLE_STATUS_CODES:
                raise
            current = self.client.get_pipeline(project.id, pipeline.id)
            if current.status not in TERMINAL_PIPELINE_STATUSES:
                raise
            self.logger.info(f"pipeline {pipeline.id} is already {current.status}")
            return False
        return True
