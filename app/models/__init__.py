from .prospect import Prospect
from .tov_config import TovConfig
from .sequence import MessageSequence
from .ai_generation import AIGeneration

__all__ = ["Prospect", "TovConfig", "MessageSequence", "AIGeneration"]
