from .knowledge_base import (
    CODE_TO_BE_DETERMINED,
    DEFAULT_KNOWLEDGE_BASE,
    MedicalKnowledgeBase,
    build_default_knowledge_base,
    compile_term,
)

__all__ = [
    "CODE_TO_BE_DETERMINED",
    "DEFAULT_KNOWLEDGE_BASE",
    "MedicalKnowledgeBase",
    "build_default_knowledge_base",
    "compile_term",
]
