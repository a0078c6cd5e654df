"""
Pattern Pool Generator: selects repeat subjects, hotspot managers and
flagship slots before any case exists.

Tables generated: none. The pools live on ctx.patterns and are consumed by
the case phase.
"""

from .base import BasePhaseGenerator
from ..errors import MissingPrerequisiteError
from ..patterns import PatternInjector


class PatternPoolGenerator(BasePhaseGenerator):
    PHASE = "patterns"

    def check_prerequisites(self) -> None:
        if not self.data["employees"]:
            raise MissingPrerequisiteError(self.PHASE, "no employees to draw pattern pools from")

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Pattern pools")
        self.ctx.patterns = PatternInjector.build(self.ctx)
        self.ctx.generated_phases.add(self.PHASE)

        summary = self.ctx.patterns.summary()
        print(
            f"    Selected: {summary['repeat_subjects']['entries']} repeat subjects, "
            f"{summary['hotspots']['entries']} hotspot managers, "
            f"{summary['flagships']['cap']} flagship slots"
        )
