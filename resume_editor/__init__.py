"""Resume Editor - structure-preserving validation, polishing and scoring of plain-text resumes."""

from .pipeline import JobContext, PipelineResult, ResumeEditor

__version__ = "0.1.0"

__all__ = ["JobContext", "PipelineResult", "ResumeEditor", "__version__"]
