from .prompt import Prompt
from .prompts_library import ANNOTATE_PROMPT, TRANSLATE_PROMPT, PromptsLibrary

__all__ = [
    "ANNOTATE_PROMPT",
    "Prompt",
    "PromptsLibrary",
    "TRANSLATE_PROMPT",
]
