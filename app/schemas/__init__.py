from .generate import (
    GenerateSequenceRequest,
    GenerateSequenceResponse,
    SequenceAnalysisOut,
    SequenceMessageOut,
    TovConfigIn,
)
from .prospect import ExperienceEntry, ProspectProfile

__all__ = [
    "GenerateSequenceRequest",
    "GenerateSequenceResponse",
    "SequenceAnalysisOut",
    "SequenceMessageOut",
    "TovConfigIn",
    "ExperienceEntry",
    "ProspectProfile",
]
