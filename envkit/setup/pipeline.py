"""
Sequential provisioning pipelines.

A profile is declared as an ordered list of named :class:`Step` objects.
Steps run strictly one after another; a step may declare the tools it needs
on PATH and may return a new :class:`~envkit.core.environment.Environment`
that every later step then sees. The first exception aborts the run.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from envkit.core.environment import Environment
from envkit.core.exceptions import StepPreconditionError
from envkit.core.platform import PlatformInfo
from envkit.core.process import CommandRunner
from envkit.packages.kinds import ManagerKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunContext:
    """
    Everything a step needs, fixed for the run except the environment.

    Attributes:
        manager: Package manager chosen at the start of the run
        env: Environment for child processes
        runner: Command runner
        platform: Host platform
        home: Target home directory
        user: Login name (for chsh)
        overrides: Extra package name overrides from configuration
    """

    manager: ManagerKind
    env: Environment
    runner: CommandRunner
    platform: PlatformInfo
    home: Path
    user: str = ""
    overrides: Mapping[str, Mapping[ManagerKind, str]] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    def home_path(self, relative: str) -> Path:
        return self.home / relative

    def run(self, cmd: Sequence[str], **kwargs):
        """Run a command with this context's environment."""
        return self.runner.run(cmd, self.env, **kwargs)


StepAction = Callable[[RunContext], Optional[Environment]]


@dataclass(frozen=True)
class Step:
    """
    One named provisioning step.

    Attributes:
        name: Human-readable step name
        action: Callable receiving the context; may return a new Environment
        requires: Executables that must be reachable before the step runs
        when: Optional predicate; the step is skipped when it returns False
    """

    name: str
    action: StepAction
    requires: Tuple[str, ...] = ()
    when: Optional[Callable[[RunContext], bool]] = None


class Pipeline:
    """
    Ordered list of steps executed against a :class:`RunContext`.

    Example:
        pipeline = Pipeline("zsh", [refresh_index(), install_packages(["zsh"])])
        pipeline.run(context)
    """

    def __init__(self, name: str, steps: Sequence[Step]):
        self.name = name
        self.steps: List[Step] = list(steps)

    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]

    def check_preconditions(self, step: Step, context: RunContext) -> List[str]:
        """
        Find required tools that are not reachable.

        Returns:
            Missing executable names (empty if all present)
        """
        return [tool for tool in step.requires if not context.env.which(tool)]

    def run(self, context: RunContext) -> RunContext:
        """
        Run every step in order.

        Args:
            context: Initial run context

        Returns:
            Final context (carrying the last environment)

        Raises:
            StepPreconditionError: If a step's required tools are missing
            EnvKitError: Whatever the failing step raised
        """
        total = len(self.steps)
        logger.info(f"Starting {self.name} setup...")

        for index, step in enumerate(self.steps, start=1):
            if step.when is not None and not step.when(context):
                logger.debug(f"[{index}/{total}] Skipping {step.name}")
                continue

            missing = self.check_preconditions(step, context)
            if missing:
                if context.dry_run:
                    logger.warning(
                        f"[dry-run] {step.name} would need: {', '.join(missing)}"
                    )
                else:
                    raise StepPreconditionError(step.name, missing)

            logger.info(f"[{index}/{total}] {step.name}")
            new_env = step.action(context)
            if new_env is not None:
                context = replace(context, env=new_env)

        return context


__all__ = ["Pipeline", "RunContext", "Step", "StepAction"]
