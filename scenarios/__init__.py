"""
Scenario modelling — percentage deltas applied over a baseline forecast.
"""

from .models import ScenarioModel, ScenarioModifiers
from .modifier import apply_scenario, as_modifiers
from .comparison import compare_scenario

__all__ = [
    "ScenarioModel",
    "ScenarioModifiers",
    "apply_scenario",
    "as_modifiers",
    "compare_scenario",
]
