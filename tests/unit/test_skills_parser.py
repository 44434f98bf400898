"""Unit tests for skills reply parsing."""

import pytest

from vitae.contexts.assistant.skills_parser import parse_skills_reply, split_skills


@pytest.mark.unit
def test_bracketed_array():
    reply = 'Here are some skills:\n["Python", " SQL ", "", "Docker"]\nGood luck!'
    assert parse_skills_reply(reply) == ["Python", "SQL", "Docker"]


@pytest.mark.unit
def test_array_non_string_elements_dropped():
    assert parse_skills_reply('["Python", 3, null, "Go"]') == ["Python", "Go"]


@pytest.mark.unit
def test_split_fallback():
    """Unparseable replies are split on commas and newlines."""
    reply = "Python, SQL\n• \nDocker\n-\nCommunication"
    assert parse_skills_reply(reply) == ["Python", "SQL", "Docker", "Communication"]


@pytest.mark.unit
def test_broken_array_falls_back_to_split():
    assert parse_skills_reply("[Python, SQL]") == ["[Python", "SQL]"]


@pytest.mark.unit
def test_duplicates_are_kept():
    assert parse_skills_reply('["Python", "Python"]') == ["Python", "Python"]


@pytest.mark.unit
def test_split_skills_bullet_only_tokens():
    assert split_skills("*, **, -, •, Leadership") == ["Leadership"]
