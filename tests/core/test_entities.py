"""Tests for domain entities and value objects."""

import pytest

from myjiratickets.core.domain import Ticket, IssueKey, DEFAULT_TYPE, DEFAULT_PRIORITY


class TestTicket:
    """Tests for Ticket."""

    def test_defaults(self):
        ticket = Ticket(key="AB-1", summary="Fix login")
        assert ticket.status == ""
        assert ticket.url == ""
        assert ticket.type == DEFAULT_TYPE
        assert ticket.priority == DEFAULT_PRIORITY

    def test_empty_type_and_priority_get_defaults(self):
        ticket = Ticket(key="AB-1", summary="x", type="", priority="")
        assert ticket.type == "Task"
        assert ticket.priority == "Medium"

    def test_has_link(self):
        assert Ticket(key="AB-1", summary="x", url="https://j/browse/AB-1").has_link
        assert not Ticket(key="AB-1", summary="x").has_link

    def test_differs_from_ignores_url(self):
        a = Ticket(key="AB-1", summary="x", status="Done", url="https://a")
        b = Ticket(key="AB-1", summary="x", status="Done", url="https://b")
        assert not a.differs_from(b)

    def test_differs_from_is_case_sensitive(self):
        a = Ticket(key="AB-1", summary="x", status="Done")
        b = Ticket(key="AB-1", summary="x", status="done")
        assert a.differs_from(b)

    def test_changed_fields(self):
        a = Ticket(key="AB-1", summary="New", status="Done", priority="High")
        b = Ticket(key="AB-1", summary="Old", status="Done", priority="Low")
        assert a.changed_fields(b) == ["summary", "priority"]

    def test_copy_replaces_fields(self):
        ticket = Ticket(key="AB-1", summary="x")
        copied = ticket.copy(status="Done")
        assert copied.status == "Done"
        assert ticket.status == ""

    def test_copy_cannot_change_key(self):
        with pytest.raises(ValueError):
            Ticket(key="AB-1", summary="x").copy(key="AB-2")

    def test_str(self):
        assert str(Ticket(key="AB-1", summary="Fix login")) == "AB-1: Fix login"


class TestIssueKey:
    """Tests for IssueKey."""

    def test_find_in_browse_url(self):
        key = IssueKey.find("https://x.atlassian.net/browse/PROJ-42")
        assert key == IssueKey("PROJ-42")
        assert key.project == "PROJ"

    def test_find_first_match(self):
        assert str(IssueKey.find("AB-1 and CD-2")) == "AB-1"

    def test_find_nothing(self):
        assert IssueKey.find("https://example.com/page") is None
        assert IssueKey.find("") is None
        assert IssueKey.find(None) is None

    def test_lowercase_is_not_a_key(self):
        assert IssueKey.find("ab-1") is None

    def test_empty_value_rejected(self):
        with pytest.raises(ValueError):
            IssueKey("  ")
