"""CLI - Command line interface for Resume Editor."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from .config import DEFAULT_CONFIG_PATH, EditorConfig, load_raw_config
from .config_validator import Severity, has_errors, validate_config
from .observability import PipelineObserver
from .pipeline import ResumeEditor
from .tools import ResumeEditorTool

console = Console()

EXIT_PASSED = 0
EXIT_NEEDS_IMPROVEMENT = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-editor",
        description="Resume Editor - validate, normalize, polish and score a plain-text resume",
    )
    parser.add_argument("resume", help="Path to the plain-text resume file")
    parser.add_argument("--job-title", "-t", help="Target job title passed to the polish step")
    parser.add_argument("--job-description", "-j", metavar="FILE", help="File holding the target job description")
    parser.add_argument("--output", "-o", metavar="FILE", help="Write the edited resume text to FILE")
    parser.add_argument("--no-polish", action="store_true", help="Skip the LLM polish step")
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every pipeline stage")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the final status line")
    return parser


def print_config_issues(issues) -> None:
    table = Table(title="Configuration issues")
    table.add_column("Field")
    table.add_column("Severity")
    table.add_column("Message")
    for issue in issues:
        style = "red" if issue.severity == Severity.ERROR else "yellow"
        table.add_row(issue.field, f"[{style}]{issue.severity.value}[/{style}]", issue.message)
    console.print(table)


def load_editor_config(config_path: str, no_polish: bool) -> Optional[EditorConfig]:
    """Load and validate config; ``None`` means startup must stop."""
    try:
        raw = load_raw_config(config_path)
    except FileNotFoundError:
        console.print(f"⚠️ Config file not found: {config_path}", style="yellow")
        console.print("Using default configuration.", style="dim")
        raw = {}
    except ValueError as e:
        console.print(f"❌ {e}", style="red")
        return None

    if no_polish:
        raw = {**raw, "polish": {**(raw.get("polish") or {}), "enabled": False}}

    issues = validate_config(raw)
    if issues:
        print_config_issues(issues)
    if has_errors(issues):
        return None
    return EditorConfig.from_dict(raw)


async def run_cli(args: argparse.Namespace) -> int:
    config = load_editor_config(args.config, args.no_polish)
    if config is None:
        return EXIT_USAGE

    job_description = None
    if args.job_description:
        try:
            job_description = Path(args.job_description).read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"❌ Cannot read job description: {e}", style="red")
            return EXIT_USAGE

    observer = PipelineObserver(verbose=args.verbose)
    editor = ResumeEditor.from_config(config, observer=observer)
    tool = ResumeEditorTool(editor, workspace_dir=".")

    result = await tool.execute(
        path=args.resume,
        job_title=args.job_title,
        job_description=job_description,
        output_path=args.output,
    )
    if not result.success:
        console.print(f"❌ {result.error}", style="red")
        return EXIT_USAGE

    passed = result.data["passed"]
    if args.json:
        console.print_json(json.dumps(result.data, ensure_ascii=False))
    elif not args.quiet:
        console.print(Markdown(result.output))
        if "output_path" in result.data:
            console.print(f"📄 Edited resume written to {result.data['output_path']}", style="dim")

    if not args.json:
        status = "PASSED" if passed else "NEEDS IMPROVEMENT"
        style = "green" if passed else "yellow"
        console.print(
            Panel(
                f"ATS {result.data['ats_score']}/100 · Quality {result.data['quality_score']}/100\n"
                f"{result.data['recommendation']}",
                title=status,
                style=style,
            )
        )
    return EXIT_PASSED if passed else EXIT_NEEDS_IMPROVEMENT


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    return asyncio.run(run_cli(args))


if __name__ == "__main__":
    raise SystemExit(main())
