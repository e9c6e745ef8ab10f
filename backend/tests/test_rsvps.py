"""Tests for the RSVP endpoints: upsert, roster, capacity gate, meal plan.

Covers:
- Upsert per (event, user): a second submission updates, never duplicates
- Status / guest-count validation
- Capacity enforced by the ledger on new and updated attending RSVPs
- Roster totals and remaining spots
- Potluck meal plan buckets
"""
from goodeats.models.rsvp import RSVP
from tests.conftest import sign_up, create_test_event, rsvp


def _setup(client, max_attendees: int = 10):
    """Create a host, two guests, and one event."""
    host = sign_up(client, "host")
    alice = sign_up(client, "alice")
    bob = sign_up(client, "bob")
    event = create_test_event(client, host["headers"], max_attendees=max_attendees)
    return host, alice, bob, event


class TestSubmitRsvp:
    def test_first_submission_creates(self, client):
        _, alice, _, event = _setup(client)
        resp = rsvp(client, event["event_id"], alice["headers"], guests_count=2, bringing_dish="Lasagna")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "attending"
        assert data["guests_count"] == 2
        assert data["bringing_dish"] == "Lasagna"
        assert data["user_id"] == alice["user_id"]

    def test_resubmission_updates_in_place(self, client, db):
        _, alice, _, event = _setup(client)
        first = rsvp(client, event["event_id"], alice["headers"], status="maybe").json()
        second = rsvp(client, event["event_id"], alice["headers"], status="attending", guests_count=3).json()

        assert second["rsvp_id"] == first["rsvp_id"]
        assert second["status"] == "attending"
        rows = db.query(RSVP).filter(RSVP.event_id == event["event_id"]).all()
        assert len(rows) == 1

    def test_identical_resubmission_is_idempotent(self, client, db):
        _, alice, _, event = _setup(client)
        for _ in range(2):
            assert rsvp(client, event["event_id"], alice["headers"], guests_count=2).status_code == 200

        assert db.query(RSVP).filter(RSVP.event_id == event["event_id"]).count() == 1
        assert client.get(f"/api/events/{event['event_id']}").json()["current_attendees"] == 2

    def test_requires_authentication(self, client):
        _, _, _, event = _setup(client)
        resp = client.put(f"/api/events/{event['event_id']}/rsvp", json={"status": "attending"})
        assert resp.status_code == 401

    def test_unknown_event(self, client):
        alice = sign_up(client, "alice")
        resp = rsvp(client, "no-such-event", alice["headers"])
        assert resp.status_code == 404

    def test_invalid_status(self, client):
        _, alice, _, event = _setup(client)
        resp = rsvp(client, event["event_id"], alice["headers"], status="interested")
        assert resp.status_code == 422

    def test_guest_count_bounds(self, client):
        _, alice, _, event = _setup(client)
        for bad in (0, -1, 6):
            resp = rsvp(client, event["event_id"], alice["headers"], guests_count=bad)
            assert resp.status_code == 422, bad
        assert rsvp(client, event["event_id"], alice["headers"], guests_count=5).status_code == 200

    def test_dish_dropped_unless_attending(self, client):
        _, alice, _, event = _setup(client)
        resp = rsvp(client, event["event_id"], alice["headers"], status="maybe", bringing_dish="Pie")
        assert resp.json()["bringing_dish"] is None

    def test_blank_dish_stored_as_null(self, client):
        _, alice, _, event = _setup(client)
        resp = rsvp(client, event["event_id"], alice["headers"], bringing_dish="   ")
        assert resp.json()["bringing_dish"] is None

    def test_overlong_text_rejected(self, client, db):
        _, alice, _, event = _setup(client)
        resp = rsvp(client, event["event_id"], alice["headers"], bringing_dish="x" * 256)
        assert resp.status_code == 422
        resp = rsvp(client, event["event_id"], alice["headers"], dietary_restrictions="x" * 501)
        assert resp.status_code == 422
        assert db.query(RSVP).filter(RSVP.event_id == event["event_id"]).count() == 0

        resp = rsvp(client, event["event_id"], alice["headers"], bringing_dish="x" * 255)
        assert resp.status_code == 200

    def test_get_my_rsvp(self, client):
        _, alice, bob, event = _setup(client)
        rsvp(client, event["event_id"], alice["headers"], status="maybe")

        resp = client.get(f"/api/events/{event['event_id']}/rsvp/me", headers=alice["headers"])
        assert resp.status_code == 200
        assert resp.json()["status"] == "maybe"

        resp = client.get(f"/api/events/{event['event_id']}/rsvp/me", headers=bob["headers"])
        assert resp.status_code == 404


class TestCapacity:
    """The two-seat scenario: the ledger itself closes the oversell gap."""

    def test_full_event_blocks_new_attending_rsvp(self, client):
        _, alice, bob, event = _setup(client, max_attendees=2)
        assert rsvp(client, event["event_id"], alice["headers"], guests_count=2).status_code == 200

        roster = client.get(f"/api/events/{event['event_id']}/roster").json()
        assert roster["total_attending_guests"] == 2
        assert roster["is_full"] is True
        assert client.get(f"/api/events/{event['event_id']}").json()["is_full"] is True

        resp = rsvp(client, event["event_id"], bob["headers"])
        assert resp.status_code == 409
        assert resp.json()["detail"]["spots_remaining"] == 0

        # Non-attending responses are still recorded
        assert rsvp(client, event["event_id"], bob["headers"], status="maybe").status_code == 200

    def test_not_full_permits_new_rsvp(self, client):
        _, alice, bob, event = _setup(client, max_attendees=2)
        rsvp(client, event["event_id"], alice["headers"])
        assert client.get(f"/api/events/{event['event_id']}").json()["is_full"] is False
        assert rsvp(client, event["event_id"], bob["headers"]).status_code == 200

    def test_party_larger_than_remaining_spots_rejected(self, client):
        _, alice, bob, event = _setup(client, max_attendees=4)
        rsvp(client, event["event_id"], alice["headers"], guests_count=3)
        resp = rsvp(client, event["event_id"], bob["headers"], guests_count=2)
        assert resp.status_code == 409
        assert resp.json()["detail"]["spots_remaining"] == 1

    def test_update_rechecks_capacity(self, client):
        _, alice, bob, event = _setup(client, max_attendees=4)
        rsvp(client, event["event_id"], alice["headers"], guests_count=2)
        rsvp(client, event["event_id"], bob["headers"], guests_count=1)

        resp = rsvp(client, event["event_id"], bob["headers"], guests_count=3)
        assert resp.status_code == 409

        # Growing into the remaining space is fine
        assert rsvp(client, event["event_id"], bob["headers"], guests_count=2).status_code == 200

    def test_existing_attendee_can_resubmit_when_full(self, client):
        _, alice, _, event = _setup(client, max_attendees=2)
        rsvp(client, event["event_id"], alice["headers"], guests_count=2)
        resp = rsvp(client, event["event_id"], alice["headers"], guests_count=2, bringing_dish="Cake")
        assert resp.status_code == 200

    def test_declining_frees_spots(self, client):
        _, alice, bob, event = _setup(client, max_attendees=2)
        rsvp(client, event["event_id"], alice["headers"], guests_count=2)
        rsvp(client, event["event_id"], alice["headers"], status="declined", guests_count=2)
        assert rsvp(client, event["event_id"], bob["headers"], guests_count=2).status_code == 200


class TestRoster:
    def test_roster_lists_only_attending_in_order(self, client):
        _, alice, bob, event = _setup(client)
        carol = sign_up(client, "carol")
        rsvp(client, event["event_id"], bob["headers"], guests_count=2)
        rsvp(client, event["event_id"], alice["headers"], status="maybe")
        rsvp(client, event["event_id"], carol["headers"], guests_count=3)

        resp = client.get(f"/api/events/{event['event_id']}/roster")
        assert resp.status_code == 200
        roster = resp.json()
        assert [a["username"] for a in roster["attendees"]] == ["bob", "carol"]
        assert roster["total_attending_guests"] == 5
        assert roster["spots_remaining"] == 5
        assert roster["max_attendees"] == 10

    def test_declining_removes_from_roster(self, client):
        _, alice, bob, event = _setup(client)
        rsvp(client, event["event_id"], alice["headers"], guests_count=3)
        rsvp(client, event["event_id"], bob["headers"], guests_count=1)
        before = client.get(f"/api/events/{event['event_id']}/roster").json()

        rsvp(client, event["event_id"], alice["headers"], status="declined", guests_count=3)
        after = client.get(f"/api/events/{event['event_id']}/roster").json()

        assert [a["username"] for a in after["attendees"]] == ["bob"]
        assert after["total_attending_guests"] == before["total_attending_guests"] - 3
        assert client.get(f"/api/events/{event['event_id']}").json()["current_attendees"] == 1

    def test_maybe_to_declined_leaves_roster_unchanged(self, client):
        _, alice, bob, event = _setup(client)
        rsvp(client, event["event_id"], bob["headers"], guests_count=2)
        rsvp(client, event["event_id"], alice["headers"], status="maybe", guests_count=2)
        before = client.get(f"/api/events/{event['event_id']}/roster").json()

        rsvp(client, event["event_id"], alice["headers"], status="declined", guests_count=2)
        after = client.get(f"/api/events/{event['event_id']}/roster").json()

        assert after["attendees"] == before["attendees"]
        assert after["total_attending_guests"] == 2

    def test_roster_unknown_event(self, client):
        assert client.get("/api/events/nope/roster").status_code == 404


class TestMealPlan:
    def test_dishes_grouped_by_course(self, client):
        host = sign_up(client, "host")
        event = create_test_event(client, host["headers"])
        dishes = ["Caesar Salad", "Chocolate Cake", "Iced Tea", "Lasagna"]
        for i, dish in enumerate(dishes):
            guest = sign_up(client, f"guest{i}")
            assert rsvp(client, event["event_id"], guest["headers"], bringing_dish=dish).status_code == 200
        no_dish = sign_up(client, "empty_handed")
        rsvp(client, event["event_id"], no_dish["headers"])

        resp = client.get(f"/api/events/{event['event_id']}/meal-plan")
        assert resp.status_code == 200
        plan = resp.json()
        assert plan["appetizer"] == []
        assert plan["main"] == ["Caesar Salad", "Lasagna"]
        assert plan["dessert"] == ["Chocolate Cake"]
        assert plan["drink"] == ["Iced Tea"]
        assert plan["without_dish"] == ["empty_handed"]

    def test_non_attending_dishes_excluded(self, client):
        host = sign_up(client, "host")
        guest = sign_up(client, "guest")
        event = create_test_event(client, host["headers"])
        rsvp(client, event["event_id"], guest["headers"], bringing_dish="Brownies")
        rsvp(client, event["event_id"], guest["headers"], status="declined")

        plan = client.get(f"/api/events/{event['event_id']}/meal-plan").json()
        assert plan["dessert"] == []
        assert plan["without_dish"] == []
