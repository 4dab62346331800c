"""Tests for reconcile()."""

from myjiratickets.application.sync import reconcile
from myjiratickets.application.sync.reconciler import MutationAction
from myjiratickets.core.domain.entities import Ticket


def by_key(*tickets):
    return {t.key: t for t in tickets}


class TestReconcile:
    """Tests for insert/update/skip decisions."""

    def test_new_ticket_is_inserted(self):
        remote = [Ticket(key="AB-1", summary="New", status="To Do")]

        mutations, outcome = reconcile(remote, {})

        assert [(m.action, m.key) for m in mutations] == [(MutationAction.INSERT, "AB-1")]
        assert (outcome.imported, outcome.updated, outcome.skipped) == (1, 0, 0)

    def test_changed_ticket_is_updated(self):
        local = Ticket(key="AB-1", summary="Old", status="To Do")
        remote = [Ticket(key="AB-1", summary="Old", status="Done")]

        mutations, outcome = reconcile(remote, by_key(local))

        assert len(mutations) == 1
        assert mutations[0].action is MutationAction.UPDATE
        assert mutations[0].changed_fields == ("status",)
        assert mutations[0].ticket.status == "Done"
        assert (outcome.imported, outcome.updated, outcome.skipped) == (0, 1, 0)

    def test_unchanged_ticket_is_skipped(self):
        local = Ticket(key="AB-1", summary="Same", status="Done")

        mutations, outcome = reconcile([local.copy()], by_key(local))

        assert mutations == []
        assert (outcome.imported, outcome.updated, outcome.skipped) == (0, 0, 1)

    def test_url_change_alone_is_skipped(self):
        local = Ticket(key="AB-1", summary="Same", url="https://old")
        remote = [Ticket(key="AB-1", summary="Same", url="https://new")]

        mutations, outcome = reconcile(remote, by_key(local))

        assert mutations == []
        assert outcome.skipped == 1

    def test_update_carries_all_remote_fields(self):
        local = Ticket(key="AB-1", summary="Old", url="https://old")
        remote = [Ticket(key="AB-1", summary="New", url="https://new", priority="High")]

        mutations, _ = reconcile(remote, by_key(local))

        assert mutations[0].ticket == remote[0]
        assert mutations[0].changed_fields == ("summary", "priority")

    def test_mixed_batch_keeps_remote_order(self):
        local = by_key(
            Ticket(key="AB-2", summary="Two", status="Done"),
            Ticket(key="AB-3", summary="Three", status="To Do"),
        )
        remote = [
            Ticket(key="AB-3", summary="Three", status="Done"),
            Ticket(key="AB-1", summary="One"),
            Ticket(key="AB-2", summary="Two", status="Done"),
        ]

        mutations, outcome = reconcile(remote, local)

        assert [m.key for m in mutations] == ["AB-3", "AB-1"]
        assert outcome.total == 3
        assert (outcome.imported, outcome.updated, outcome.skipped) == (1, 1, 1)

    def test_local_only_tickets_are_untouched(self):
        local = by_key(Ticket(key="OLD-1", summary="Manual"))

        mutations, outcome = reconcile([], local)

        assert mutations == []
        assert outcome.total == 0

    def test_deterministic(self):
        local = by_key(Ticket(key="AB-1", summary="a"))
        remote = [Ticket(key="AB-1", summary="b"), Ticket(key="AB-2", summary="c")]

        assert reconcile(remote, local) == reconcile(remote, local)

    def test_applying_then_reconciling_again_skips_everything(self):
        local = by_key(Ticket(key="AB-1", summary="a"))
        remote = [Ticket(key="AB-1", summary="b"), Ticket(key="AB-2", summary="c")]

        mutations, _ = reconcile(remote, local)
        for mutation in mutations:
            local[mutation.key] = mutation.ticket

        mutations, outcome = reconcile(remote, local)
        assert mutations == []
        assert outcome.skipped == 2

    def test_input_is_not_mutated(self):
        remote = [Ticket(key="AB-1", summary="a")]
        mutations, _ = reconcile(remote, {})
        mutations[0].ticket.summary = "changed"
        assert remote[0].summary == "a"
