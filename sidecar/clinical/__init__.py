from .generator import ClinicalHistoryGenerator, GenerationError
from .reasoner import ClinicalReasoner

__all__ = ["ClinicalHistoryGenerator", "ClinicalReasoner", "GenerationError"]
