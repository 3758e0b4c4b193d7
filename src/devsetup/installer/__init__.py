"""
devsetup Installer

Step orchestration, idempotency predicates and host collaborators.
"""

from devsetup.installer.orchestrator import InstallerOrchestrator, StepDefinition
from devsetup.installer.report import RunReport, StepOutcome, StepStatus
from devsetup.installer.ui import InstallerUI

__all__ = [
    "InstallerOrchestrator",
    "StepDefinition",
    "RunReport",
    "StepOutcome",
    "StepStatus",
    "InstallerUI",
]
