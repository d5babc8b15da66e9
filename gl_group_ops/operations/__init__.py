"""Operations for gl-group-ops."""

from gl_group_ops.operations.base import Operation, get_operation_registry, register_operation

# Import all operations to register them
from gl_group_ops.operations.cancel_pipelines import CancelPipelinesOperation
from gl_group_ops.operations.github_integration import GithubIntegrationOperation

__all__ = [
    "Operation",
    "register_operation",
    "get_operation_registry",
    "CancelPipelinesOperation",
    "GithubIntegrationOperation",
]
