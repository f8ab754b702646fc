from .tov import tov_to_description
from .layers import NarrativeLayer, build_layer_plan, render_step_progression
from .templates import build_repair_note, build_system_prompt, build_user_prompt

__all__ = [
    "tov_to_description",
    "NarrativeLayer",
    "build_layer_plan",
    "render_step_progression",
    "build_repair_note",
    "build_system_prompt",
    "build_user_prompt",
]
