"""Tests for file-system name mapping."""

from __future__ import annotations

import pytest

from vidctl.domain.names import category_dir_name, category_display_name, sanitize_name


class TestSanitizeName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("My Video", "my-video"),
            ("My Video: Part 2", "my-video-part-2"),
            ("CI/CD with Argo", "ci-cd-with-argo"),
            ("back\\slash", "back-slash"),
            ('What is "GitOps"?', "what-is-gitops"),
            ("a*b<c>d|e", "abcde"),
            ("too   many   spaces", "too-many-spaces"),
            ("already-clean", "already-clean"),
        ],
    )
    def test_mapping(self, raw: str, expected: str) -> None:
        assert sanitize_name(raw) == expected

    def test_stable(self) -> None:
        assert sanitize_name(sanitize_name("My Video: Part 2")) == "my-video-part-2"


class TestCategoryNames:
    def test_dir_name(self) -> None:
        assert category_dir_name("Infrastructure As Code") == "infrastructure-as-code"

    def test_display_name(self) -> None:
        assert category_display_name("infrastructure-as-code") == "Infrastructure As Code"

    def test_display_name_single_word(self) -> None:
        assert category_display_name("development") == "Development"
