"""
Learning: the knowledge base records.

- tutorial_store: create tutorials and append Q&A / quiz logs
- learner_profile: interview transcripts about the learner
- index_writer: the README index of all tutorials
"""

from .index_writer import render_index, write_index
from .learner_profile import InterviewEntry, LearnerProfile, LearnerProfileStore
from .tutorial_store import ScanResult, TutorialStore, make_identifier, slugify

__all__ = [
    "TutorialStore",
    "ScanResult",
    "make_identifier",
    "slugify",
    "LearnerProfile",
    "LearnerProfileStore",
    "InterviewEntry",
    "render_index",
    "write_index",
]
