"""File-based tools wrapping the editing pipeline."""

from .base import BaseTool, ToolResult
from .resume_editor_tool import ResumeEditorTool

__all__ = ["BaseTool", "ToolResult", "ResumeEditorTool"]
