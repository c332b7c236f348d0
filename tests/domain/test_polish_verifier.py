"""Tests for verification of collaborator rewrites."""

import pytest

from resume_editor.domain import count_bullets, inspect_polish, verify_polish
from resume_editor.domain.headers import HEADER_TOKENS


def _resume(bullets: int, experience_first: bool = True) -> str:
    experience = "PROFESSIONAL EXPERIENCE\n" + "\n".join(f"• Delivered result {i}" for i in range(bullets))
    education = "EDUCATION\nB.S. Economics"
    body = [experience, education] if experience_first else [education, experience]
    return "Jane Doe\njane@x.com\n\nPROFESSIONAL SUMMARY\nSeasoned analyst.\n\n" + "\n\n".join(body) + "\n"


class TestRejection:
    def test_dropped_bullets_returns_pre_text(self):
        pre = _resume(10)
        post = _resume(5)
        assert count_bullets(pre) == 10
        assert verify_polish(pre, post) == pre

    def test_eighty_percent_of_bullets_is_enough(self):
        pre = _resume(10)
        post = _resume(8)
        verdict = inspect_polish(pre, post)
        assert verdict.accepted
        assert verdict.text == post

    def test_collapsed_spacing_is_rejected(self):
        pre = _resume(3)
        post = pre.replace("\n\n", "\n")
        verdict = inspect_polish(pre, post)
        assert not verdict.accepted
        assert verdict.text == pre
        assert "blank lines" in verdict.reason

    def test_merged_bullets_are_rejected(self):
        pre = "PROFESSIONAL EXPERIENCE\nOne\nTwo\n\nEDUCATION\nB.S."
        post = "PROFESSIONAL EXPERIENCE\n\nOne • Two • Three\n\nEDUCATION\nB.S."
        verdict = inspect_polish(pre, post)
        assert not verdict.accepted
        assert "one line" in verdict.reason

    def test_education_before_experience_is_rejected(self):
        pre = _resume(4)
        post = _resume(4, experience_first=False)
        assert verify_polish(pre, post) == pre

    def test_fused_experience_and_education_is_rejected(self):
        pre = _resume(4)
        post = pre.replace("\n\nEDUCATION", "\nEDUCATION")
        verdict = inspect_polish(pre, post)
        assert not verdict.accepted
        assert verdict.reason == "collaborator merged EDUCATION into PROFESSIONAL EXPERIENCE"

    def test_first_failing_rule_wins(self):
        pre = _resume(10)
        post = "• a • b"
        assert "dropped bullets" in inspect_polish(pre, post).reason


class TestRepair:
    def test_duplicate_header_line_is_removed(self):
        pre = _resume(2)
        post = pre.replace("Seasoned analyst.", "Seasoned analyst.\n\nPROFESSIONAL SUMMARY\nDetail-oriented.")
        verdict = inspect_polish(pre, post)
        assert verdict.accepted
        assert verdict.text.count("PROFESSIONAL SUMMARY") == 1
        assert "Seasoned analyst.\n\nDetail-oriented." in verdict.text

    def test_duplicate_glued_header_keeps_surrounding_text(self):
        pre = _resume(2)
        post = pre.replace("Seasoned analyst.", "Seasoned analyst. PROFESSIONAL SUMMARY Fast learner.")
        text = verify_polish(pre, post)
        assert text.count("PROFESSIONAL SUMMARY") == 1
        assert "Seasoned analyst. Fast learner." in text

    def test_glued_header_is_isolated(self):
        pre = "Intro\n\nCERTIFICATIONS\n• PMP"
        post = "Intro text CERTIFICATIONS\n• PMP\n\nMore"
        assert verify_polish(pre, post) == "Intro text\n\nCERTIFICATIONS\n\n• PMP\n\nMore"

    @pytest.mark.parametrize(
        "post",
        [
            "PROFESSIONAL SUMMARY\nA\n\nPROFESSIONAL SUMMARY\nB\n\nPROFESSIONAL SUMMARY",
            "EDUCATION\n\nKEY ACHIEVEMENTS x KEY ACHIEVEMENTS\n\nEDUCATION: again",
            "CORE COMPETENCIES\n• A\n• B\n\nCORE COMPETENCIES CORE COMPETENCIES\n• C",
        ],
    )
    def test_accepted_rewrite_has_unique_headers(self, post):
        verdict = inspect_polish("", post)
        assert verdict.accepted
        isolated = [line for line in verdict.text.split("\n") if line.strip() in HEADER_TOKENS]
        assert len(isolated) == len(set(isolated))
