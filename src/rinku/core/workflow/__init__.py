"""Migration workflow orchestration."""

from .orchestrator import MigrationWorkflow, WorkflowError, create_workflow

__all__ = ["MigrationWorkflow", "WorkflowError", "create_workflow"]
