"""
devsetup Installer Orchestrator

Runs the ordered step checklist: decide (prompt or policy), check the
idempotency predicate, act, record the outcome. Only a fatal step can stop
the run.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, TYPE_CHECKING

from devsetup.installer.exceptions import DevSetupError, FatalPrerequisiteError
from devsetup.installer.logging_config import get_logger
from devsetup.installer.policy import Decision, policy_accepts
from devsetup.installer.predicates import Predicate
from devsetup.installer.report import RunReport, StepOutcome, StepStatus

if TYPE_CHECKING:
    from devsetup.installer.environment import EnvironmentContext


logger = get_logger("orchestrator")


@dataclass
class StepDefinition:
    """Definition of an installation step."""
    name: str
    title: str
    action: Callable[["EnvironmentContext"], None]
    prompt: Optional[str] = None
    default: bool = True
    predicate: Optional[Predicate] = None
    fatal: bool = False

    @property
    def confirmable(self) -> bool:
        """Steps without a prompt are never asked about."""
        return self.prompt is not None


def resolve_decision(
    step: StepDefinition,
    ctx: "EnvironmentContext",
    interactive: bool,
    policy: Optional[Dict[str, Decision]] = None,
) -> bool:
    """Decide whether a step should run. No side effects beyond prompting.

    Fatal steps always run. Unprompted steps run unless an unattended
    policy declines them.
    """
    if step.fatal:
        return True
    if interactive:
        if not step.confirmable:
            return True
        return ctx.ui.prompt_yes_no(step.prompt, default=step.default)
    return policy_accepts(policy, step.name)


class InstallerOrchestrator:
    """Orchestrates the workstation installation flow."""

    def __init__(self, ctx: "EnvironmentContext", steps: Optional[Iterable[StepDefinition]] = None):
        self.ctx = ctx
        self.ui = ctx.ui
        self.steps: List[StepDefinition] = list(steps or [])

    def add_step(
        self,
        name: str,
        title: str,
        action: Callable[["EnvironmentContext"], None],
        prompt: Optional[str] = None,
        default: bool = True,
        predicate: Optional[Predicate] = None,
        fatal: bool = False
    ):
        """Add a step to the checklist."""
        if any(s.name == name for s in self.steps):
            raise ValueError(f"Duplicate step name: {name}")
        self.steps.append(StepDefinition(
            name=name,
            title=title,
            action=action,
            prompt=prompt,
            default=default,
            predicate=predicate,
            fatal=fatal,
        ))

    def run(
        self,
        interactive: bool = True,
        policy: Optional[Dict[str, Decision]] = None
    ) -> RunReport:
        """Run every step in declaration order.

        Args:
            interactive: Prompt the operator for each confirmable step
            policy: Step name -> decision for unattended runs (missing = accept)

        Returns:
            RunReport with one outcome per step

        Raises:
            FatalPrerequisiteError: a fatal step failed; later steps did not run
        """
        report = RunReport()
        total = len(self.steps)

        for i, step in enumerate(self.steps):
            self.ui.print_step_header(i + 1, step.title, total_steps=total)
            outcome = self._run_step(step, interactive, policy)
            report.add(outcome)

        logger.info("Run finished: %s", report.counts())
        return report

    def _run_step(
        self,
        step: StepDefinition,
        interactive: bool,
        policy: Optional[Dict[str, Decision]]
    ) -> StepOutcome:
        if not resolve_decision(step, self.ctx, interactive, policy):
            self.ui.print_info(f"Skipping {step.title} (declined)")
            return StepOutcome(step.name, step.title, StepStatus.SKIPPED, "declined")

        started = time.monotonic()
        try:
            if step.predicate is not None and step.predicate.evaluate(self.ctx):
                self.ui.print_warning(f"{step.title}: already satisfied ({step.predicate.describe()})")
                return StepOutcome(
                    step.name, step.title, StepStatus.SKIPPED, "already satisfied",
                    duration=time.monotonic() - started,
                )

            self.ui.print_info(f"{step.title}...")
            step.action(self.ctx)
        except KeyboardInterrupt:
            raise
        except Exception as e:
            reason = e.message if isinstance(e, DevSetupError) else (str(e) or type(e).__name__)
            logger.debug("Step %s failed", step.name, exc_info=True)
            self.ui.print_error(f"{step.title} failed: {reason}")
            if step.fatal:
                raise FatalPrerequisiteError(
                    f"{step.title} failed: {reason}",
                    step=step.name,
                    details=getattr(e, "details", None),
                ) from e
            if isinstance(e, DevSetupError) and e.remediation:
                self.ui.print_info(f"To fix: {e.remediation}")
            return StepOutcome(
                step.name, step.title, StepStatus.FAILED, reason,
                duration=time.monotonic() - started,
            )

        self.ui.print_success(f"{step.title} complete")
        return StepOutcome(
            step.name, step.title, StepStatus.SUCCESS,
            duration=time.monotonic() - started,
        )

    def check(self) -> Dict[str, Optional[bool]]:
        """Evaluate every predicate without acting.

        Returns:
            Step name -> True/False, or None when the step has no predicate
            or the check itself failed
        """
        results: Dict[str, Optional[bool]] = {}
        for step in self.steps:
            if step.predicate is None:
                results[step.name] = None
                continue
            try:
                results[step.name] = step.predicate.evaluate(self.ctx)
            except Exception as e:
                logger.warning("Check for %s failed: %s", step.name, e)
                results[step.name] = None
        return results
