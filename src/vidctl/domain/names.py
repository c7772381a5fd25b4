"""Deterministic mapping from display names to file-system names."""

from __future__ import annotations

import re

# Characters replaced by a hyphen vs. dropped outright.
_HYPHENATED = (":", "/", "\\")
_DROPPED = ("?", "*", "<", ">", "|", '"')
_HYPHEN_RUN = re.compile(r"-{2,}")


def sanitize_name(name: str) -> str:
    """Convert a free-form display name into a stable file name stem.

    Lower-cases, turns spaces into hyphens, replaces or strips characters
    that are illegal in file names, and collapses repeated hyphens.

    Examples:
        >>> sanitize_name("My Video: Part 2")
        'my-video-part-2'
        >>> sanitize_name('What is "GitOps"?')
        'what-is-gitops'
    """
    text = name.lower().replace(" ", "-")
    for char in _HYPHENATED:
        text = text.replace(char, "-")
    for char in _DROPPED:
        text = text.replace(char, "")
    return _HYPHEN_RUN.sub("-", text)


def category_dir_name(category: str) -> str:
    """Directory name for a stored category (lower-case, spaces to hyphens)."""
    return category.lower().replace(" ", "-")


def category_display_name(dir_name: str) -> str:
    """Title-cased display name for a category directory.

    >>> category_display_name("cloud-native")
    'Cloud Native'
    """
    return dir_name.replace("-", " ").title()
