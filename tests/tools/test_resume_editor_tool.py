"""Tests for the file-based resume editor tool."""

import pytest

from resume_editor import ResumeEditor
from resume_editor.observability import PipelineObserver
from resume_editor.tools import BaseTool, ResumeEditorTool, ToolResult
from resume_editor.tools.resume_editor_tool import MAX_FILE_SIZE


def _tool(tmp_path, polisher=None) -> ResumeEditorTool:
    return ResumeEditorTool(ResumeEditor(polisher=polisher, observer=PipelineObserver()), workspace_dir=str(tmp_path))


class TestResumeEditorTool:
    @pytest.mark.asyncio
    async def test_edits_file_and_writes_output(self, tmp_path, good_resume):
        (tmp_path / "resume.txt").write_text(good_resume, encoding="utf-8")

        result = await _tool(tmp_path).execute(path="resume.txt", output_path="out/edited.txt")

        assert result.success
        assert result.data["passed"] is True
        assert result.data["ats_score"] == 95
        assert result.output.startswith("# Resume Editing Report")
        edited = tmp_path / "out" / "edited.txt"
        assert edited.read_text(encoding="utf-8") == result.data["final_text"]
        assert result.data["output_path"] == str(edited)

    @pytest.mark.asyncio
    async def test_job_context_reaches_polisher(self, tmp_path, good_resume):
        seen = []

        async def polisher(text, job_context):
            seen.append(job_context)
            return text

        (tmp_path / "resume.txt").write_text(good_resume, encoding="utf-8")
        result = await _tool(tmp_path, polisher).execute(
            path="resume.txt", job_title="Operations Director", job_description="Lead operations teams"
        )

        assert result.success
        assert result.data["polish_applied"] is True
        assert seen[0].title == "Operations Director"
        assert seen[0].description == "Lead operations teams"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        result = await _tool(tmp_path).execute(path="nope.txt")
        assert not result.success
        assert result.error == "File not found: nope.txt"

    @pytest.mark.asyncio
    async def test_directory_is_rejected(self, tmp_path):
        (tmp_path / "folder").mkdir()
        result = await _tool(tmp_path).execute(path="folder")
        assert not result.success
        assert result.error == "Not a file: folder"

    @pytest.mark.asyncio
    async def test_oversized_file_is_rejected(self, tmp_path):
        (tmp_path / "big.txt").write_text("x" * (MAX_FILE_SIZE + 1), encoding="utf-8")
        result = await _tool(tmp_path).execute(path="big.txt")
        assert not result.success
        assert "File too large" in result.error

    @pytest.mark.asyncio
    async def test_non_utf8_file_is_rejected(self, tmp_path):
        (tmp_path / "latin1.txt").write_bytes("Résumé".encode("latin-1"))
        result = await _tool(tmp_path).execute(path="latin1.txt")
        assert not result.success
        assert result.error == "Cannot read non-UTF-8 file: latin1.txt"
        assert result.to_message() == "Error: Cannot read non-UTF-8 file: latin1.txt"


class TestBaseTool:
    @pytest.mark.asyncio
    async def test_subclass_only_needs_execute(self, tmp_path):
        class EchoTool(BaseTool):
            async def execute(self, path: str) -> ToolResult:
                return ToolResult(success=True, output=str(self._resolve_path(path)))

        tool = EchoTool(workspace_dir=str(tmp_path))
        relative = await tool.execute(path="a/resume.txt")
        absolute = await tool.execute(path=str(tmp_path / "b.txt"))

        assert relative.output == str(tmp_path.resolve() / "a" / "resume.txt")
        assert absolute.output == str(tmp_path / "b.txt")
        assert relative.to_message() == relative.output
