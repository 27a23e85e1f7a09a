from academy.services.ai.llm import OllamaClient, get_llm
from academy.services.ai.flows import suggest_grades, suggest_schedule

__all__ = ["OllamaClient", "get_llm", "suggest_grades", "suggest_schedule"]
