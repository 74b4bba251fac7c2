"""
Rinku - Go to Rust library mapper

Finds Rust equivalents for Go libraries and guides an operator through a
step-by-step migration, tracking progress and captured requirements.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from rinku.core.config.models import RinkuConfig
from rinku.core.progress.models import MigrationProgress, StepStatus
from rinku.core.requirements.models import Requirement

__all__ = ["MigrationProgress", "Requirement", "RinkuConfig", "StepStatus", "__version__"]
