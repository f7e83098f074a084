"""Prompt Construction Package"""

from cmit.prompts.builder import PromptBuilder, PromptConfig, summarize_changes

__all__ = ["PromptBuilder", "PromptConfig", "summarize_changes"]
