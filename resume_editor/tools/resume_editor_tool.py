"""Resume editor tool - run the editing pipeline on a resume file."""

from __future__ import annotations

from typing import Optional

from ..pipeline import JobContext, ResumeEditor
from .base import BaseTool, ToolResult

MAX_FILE_SIZE = 1_000_000  # 1 MB


class ResumeEditorTool(BaseTool):
    """Validate, normalize, polish and score a plain-text resume file."""

    def __init__(self, editor: ResumeEditor, workspace_dir: str = "."):
        super().__init__(workspace_dir)
        self.editor = editor

    async def execute(
        self,
        path: str,
        job_title: Optional[str] = None,
        job_description: Optional[str] = None,
        output_path: Optional[str] = None,
    ) -> ToolResult:
        try:
            file_path = self._resolve_path(path)
            if not file_path.exists():
                return ToolResult(success=False, output="", error=f"File not found: {path}")
            if not file_path.is_file():
                return ToolResult(success=False, output="", error=f"Not a file: {path}")

            file_size = file_path.stat().st_size
            if file_size > MAX_FILE_SIZE:
                return ToolResult(
                    success=False, output="", error=f"File too large: {file_size} bytes (max {MAX_FILE_SIZE} bytes)"
                )

            raw_text = file_path.read_text(encoding="utf-8")
            context = None
            if job_title or job_description:
                context = JobContext(title=job_title or "", description=job_description or "")

            result = await self.editor.run(raw_text, context)

            data = result.to_dict()
            if output_path:
                out = self._resolve_path(output_path)
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(result.final_text, encoding="utf-8")
                data["output_path"] = str(out)

            return ToolResult(success=True, output=result.format_report(), data=data)
        except UnicodeDecodeError:
            return ToolResult(success=False, output="", error=f"Cannot read non-UTF-8 file: {path}")
        except Exception as e:
            return ToolResult(success=False, output="", error=str(e))
