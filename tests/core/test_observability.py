"""Tests for the pipeline observer."""

import logging

from resume_editor.observability import PipelineObserver


class TestPipelineObserver:
    def test_run_stats_aggregate_events(self):
        observer = PipelineObserver()
        observer.log_stage_start(1, "validate")
        observer.log_stage_end(1, "validate", 2.0, issues=1)
        observer.log_stage_end(2, "validate", 3.0, issues=0)
        observer.log_polish_failed(1, TimeoutError(), 10.0)
        observer.log_polish_rejected(2, "collaborator dropped bullets (1/5)")
        observer.log_run_end(1, 90, 85, True, 20.0)
        observer.log_run_end(2, 60, 40, False, 30.0)

        stats = observer.get_run_stats()

        assert stats["runs"] == 2
        assert stats["passed"] == 1
        assert stats["polish_failures"] == 1
        assert stats["polish_rejections"] == 1
        assert stats["total_duration_ms"] == 50.0
        assert stats["stage_duration_ms"] == {"validate": 5.0}
        assert stats["event_count"] == 7

    def test_failure_event_keeps_error_type(self):
        observer = PipelineObserver()
        observer.log_polish_failed(3, TimeoutError(), 1.0)

        event = observer.events[0]
        assert event.event_type == "polish_failed"
        assert event.data == {"run": 3, "error_type": "TimeoutError", "message": "TimeoutError"}

    def test_stage_details_are_recorded(self):
        observer = PipelineObserver()
        observer.log_stage_end(4, "score", 1.5, ats=95, quality=80)
        assert observer.events[0].data == {"run": 4, "stage": "score", "ats": 95, "quality": 80}
        assert observer.events[0].duration_ms == 1.5

    def test_verbose_sets_log_level(self):
        assert PipelineObserver(verbose=True).logger.level == logging.INFO
        assert PipelineObserver().logger.level == logging.WARNING

    def test_rejection_is_logged_as_warning(self, caplog):
        observer = PipelineObserver()
        with caplog.at_level(logging.WARNING, logger="resume_editor"):
            observer.log_polish_rejected(5, "collaborator merged bullet points onto one line")
        assert "Polished text rejected" in caplog.text

    def test_clear(self):
        observer = PipelineObserver()
        observer.log_run_end(1, 90, 90, True, 1.0)
        observer.clear()
        assert len(observer.events) == 0
        assert observer.get_run_stats()["runs"] == 0

    def test_event_history_is_bounded(self):
        observer = PipelineObserver(max_events=3)
        for run_id in range(1, 6):
            observer.log_run_end(run_id, 90, 90, True, 1.0)

        assert [e.data["run"] for e in observer.events] == [3, 4, 5]
        assert observer.get_run_stats()["runs"] == 3
