"""CLI entry point tests."""

import pytest

from resume_editor.cli import EXIT_NEEDS_IMPROVEMENT, EXIT_PASSED, EXIT_USAGE, build_parser, main


@pytest.fixture
def offline_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("provider: gemini\nmodel: gemini-2.5-flash\npolish:\n  enabled: false\n", encoding="utf-8")
    return str(path)


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["resume.txt"])
        assert args.resume == "resume.txt"
        assert args.config == "config/config.local.yaml"
        assert not args.no_polish
        assert not args.json

    def test_short_flags(self):
        args = build_parser().parse_args(["r.txt", "-t", "Analyst", "-j", "jd.txt", "-o", "out.txt", "-q", "-v"])
        assert (args.job_title, args.job_description, args.output) == ("Analyst", "jd.txt", "out.txt")
        assert args.quiet and args.verbose


class TestMain:
    def test_passing_resume_exits_zero(self, tmp_path, good_resume, offline_config, capsys):
        resume = tmp_path / "resume.txt"
        resume.write_text(good_resume, encoding="utf-8")

        assert main([str(resume), "--config", offline_config]) == EXIT_PASSED
        assert "PASSED" in capsys.readouterr().out

    def test_weak_resume_exits_one(self, tmp_path, offline_config):
        resume = tmp_path / "resume.txt"
        resume.write_text("John Smith\nDid some work.\n", encoding="utf-8")

        assert main([str(resume), "--config", offline_config, "--quiet"]) == EXIT_NEEDS_IMPROVEMENT

    def test_missing_resume_exits_two(self, tmp_path, offline_config, capsys):
        assert main([str(tmp_path / "missing.txt"), "--config", offline_config]) == EXIT_USAGE
        assert "File not found" in capsys.readouterr().out

    def test_missing_config_falls_back_to_defaults_with_no_polish(self, tmp_path, good_resume, capsys):
        resume = tmp_path / "resume.txt"
        resume.write_text(good_resume, encoding="utf-8")

        code = main([str(resume), "--config", str(tmp_path / "absent.yaml"), "--no-polish", "--json"])

        out = capsys.readouterr().out
        assert code == EXIT_PASSED
        assert "Config file not found" in out
        assert '"passed": true' in out

    def test_polish_without_api_key_is_a_config_error(self, tmp_path, good_resume, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("provider: gemini\nmodel: gemini-2.5-flash\napi_key: ''\n", encoding="utf-8")
        resume = tmp_path / "resume.txt"
        resume.write_text(good_resume, encoding="utf-8")

        assert main([str(resume), "--config", str(config)]) == EXIT_USAGE
        assert "GEMINI_API_KEY" in capsys.readouterr().out

    def test_malformed_retry_is_a_config_error(self, tmp_path, good_resume, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("polish:\n  enabled: false\n  retry: 3\n", encoding="utf-8")
        resume = tmp_path / "resume.txt"
        resume.write_text(good_resume, encoding="utf-8")

        assert main([str(resume), "--config", str(config)]) == EXIT_USAGE
        assert "polish.retry" in capsys.readouterr().out

    def test_output_file_is_written(self, tmp_path, good_resume, offline_config):
        resume = tmp_path / "resume.txt"
        resume.write_text(good_resume, encoding="utf-8")
        output = tmp_path / "edited.txt"

        main([str(resume), "--config", offline_config, "-q", "-o", str(output)])

        assert output.read_text(encoding="utf-8") == good_resume
