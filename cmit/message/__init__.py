"""Message Synthesis Package"""

from cmit.message.classifier import classify, classify_type
from cmit.message.models import CandidateMessage, GenerationOptions, MessageSource
from cmit.message.pipeline import clean_commit_message, synthesize

__all__ = [
    "classify",
    "classify_type",
    "CandidateMessage",
    "GenerationOptions",
    "MessageSource",
    "clean_commit_message",
    "synthesize",
]
