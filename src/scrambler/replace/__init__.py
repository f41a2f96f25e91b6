"""Build and apply word replacement plans."""

from .applier import apply_plan
from .plan_builder import PlanEntry, build_replacement_plan

__all__ = ["PlanEntry", "apply_plan", "build_replacement_plan"]
