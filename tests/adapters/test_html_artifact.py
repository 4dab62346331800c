"""Tests for HtmlArtifactFile."""

import pytest

from myjiratickets.adapters.artifact import HtmlArtifactFile
from myjiratickets.core.domain.entities import Ticket


@pytest.fixture
def tickets():
    return [
        Ticket(key="AB-1", summary="First", status="Done"),
        Ticket(key="AB-2", summary="Second", status="To Do"),
    ]


class TestPublish:
    """Tests for writing the artifact."""

    def test_creates_full_document(self, tmp_path, tickets):
        artifact = HtmlArtifactFile(tmp_path / "out" / "start.html", container_id="tickets")

        result = artifact.publish(tickets)

        assert result.mode == "full"
        assert result.ticket_count == 2
        assert artifact.exists
        assert "<!DOCTYPE html>" in artifact.read()

    def test_patches_existing_page(self, tmp_path, tickets):
        path = tmp_path / "start.html"
        path.write_text(
            '<body><section id="tickets"><table class="tickets-table"></table></section>'
            "<footer>mine</footer></body>",
            encoding="utf-8",
        )
        artifact = HtmlArtifactFile(path, container_id="tickets")

        result = artifact.publish(tickets)

        content = path.read_text(encoding="utf-8")
        assert result.mode == "patched"
        assert "<footer>mine</footer>" in content
        assert "AB-2" in content

    def test_read_missing_file(self, tmp_path):
        assert HtmlArtifactFile(tmp_path / "none.html").read() is None

    def test_load_tickets_after_publish(self, tmp_path, tickets):
        artifact = HtmlArtifactFile(tmp_path / "start.html")
        artifact.publish(tickets)

        assert [t.key for t in artifact.load_tickets()] == ["AB-1", "AB-2"]
