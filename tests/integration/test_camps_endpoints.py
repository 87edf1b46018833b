"""
Integration tests for camp endpoints.

Uses Faker-generated camp payloads from the MedicalCampProvider.
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from medicamp.models import Camp
from tests.fixtures.factories import add_registration


async def add_camps(db_session, count: int, **fields) -> list[Camp]:
    """Insert ``count`` camps with strictly increasing creation times."""
    base = datetime(2026, 1, 1, tzinfo=UTC)
    camps = []
    for i in range(count):
        camp = Camp(
            camp_name=fields.get("camp_name", f"Camp {i}"),
            location=fields.get("location", "Dhaka"),
            healthcare_professional=fields.get("healthcare_professional"),
            date_time=base + timedelta(days=30),
            camp_fees=fields.get("camp_fees", 10.0 * i),
            participant_count=i,
            created_at=base + timedelta(minutes=i),
        )
        db_session.add(camp)
        camps.append(camp)
    await db_session.commit()
    return camps


@pytest.mark.integration
class TestCampManagement:
    async def test_organizer_creates_camp(self, client, organizer_headers, fake):
        payload = fake.camp_payload()

        response = await client.post("/camps", json=payload, headers=organizer_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True

        created = await client.get(f"/camps/{data['insertedId']}")
        assert created.status_code == 200
        camp = created.json()
        assert camp["campName"] == payload["campName"]
        assert camp["location"] == payload["location"]
        assert camp["participantCount"] == 0

    async def test_participant_cannot_create_camp(
        self, client, participant_headers, fake
    ):
        response = await client.post(
            "/camps", json=fake.camp_payload(), headers=participant_headers
        )

        assert response.status_code == 403

    @pytest.mark.parametrize("missing", ["campName", "location", "dateTime"])
    async def test_create_camp_requires_core_details(
        self, client, organizer_headers, fake, missing
    ):
        payload = fake.camp_payload()
        del payload[missing]

        response = await client.post("/camps", json=payload, headers=organizer_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required camp details"

    async def test_update_camp(self, client, camp, organizer_headers):
        response = await client.put(
            f"/update-camp/{camp.id}",
            json={"campFees": 99.5, "description": "Bring your reports"},
            headers=organizer_headers,
        )

        assert response.status_code == 200
        updated = response.json()["camp"]
        assert updated["campFees"] == 99.5
        assert updated["description"] == "Bring your reports"
        assert updated["id"] == str(camp.id)
        assert updated["campName"] == camp.camp_name

    async def test_update_missing_camp(self, client, organizer_headers):
        response = await client.put(
            f"/update-camp/{uuid.uuid4()}",
            json={"campFees": 5},
            headers=organizer_headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Camp not found"

    async def test_delete_camp_keeps_registrations(
        self, client, db_session, camp, participant, organizer_headers, participant_headers
    ):
        await add_registration(db_session, camp, participant.email)

        response = await client.delete(f"/delete-camp/{camp.id}", headers=organizer_headers)

        assert response.status_code == 200
        assert response.json()["deleted"] is True
        assert (await client.get(f"/camps/{camp.id}")).status_code == 404

        registrations = await client.get(
            f"/registered-camps/{participant.email}", headers=participant_headers
        )
        assert len(registrations.json()) == 1

    async def test_delete_missing_camp(self, client, organizer_headers):
        response = await client.delete(
            f"/delete-camp/{uuid.uuid4()}", headers=organizer_headers
        )

        assert response.status_code == 404
        assert response.json()["deleted"] is False

    async def test_organizer_camp_listing(self, client, db_session, organizer_headers):
        await add_camps(db_session, 4)

        response = await client.get("/camps", headers=organizer_headers)

        assert len(response.json()) == 4


@pytest.mark.integration
class TestPublicCampListings:
    async def test_popular_camps_top_six_by_participants(self, client, db_session):
        await add_camps(db_session, 8)

        response = await client.get("/popular-camps")

        counts = [camp["participantCount"] for camp in response.json()]
        assert counts == [7, 6, 5, 4, 3, 2]

    async def test_popularcamps_alias(self, client, db_session):
        await add_camps(db_session, 3)

        response = await client.get("/popularcamps")

        assert response.status_code == 200
        assert [camp["participantCount"] for camp in response.json()] == [2, 1, 0]

    async def test_upcoming_events_three_newest(self, client, db_session):
        await add_camps(db_session, 5)

        response = await client.get("/upcoming-events")

        names = [camp["campName"] for camp in response.json()]
        assert names == ["Camp 4", "Camp 3", "Camp 2"]

    async def test_camp_stats_lists_all(self, client, db_session):
        await add_camps(db_session, 5)

        response = await client.get("/camps-stat")

        assert len(response.json()) == 5

    async def test_available_camps_search(self, client, db_session):
        await add_camps(db_session, 2, camp_name="Eye Care Camp", location="Sylhet")
        await add_camps(db_session, 1, camp_name="Dental Camp", location="Dhaka")

        by_name = await client.get("/available-camps", params={"search": "eye"})
        by_place = await client.get("/available-camps", params={"search": "DHAKA"})

        assert len(by_name.json()) == 2
        assert [camp["campName"] for camp in by_place.json()] == ["Dental Camp"]

    async def test_available_camps_sort_by_fees(self, client, db_session):
        await add_camps(db_session, 3)

        response = await client.get("/available-camps", params={"sort": "fees"})

        fees = [camp["campFees"] for camp in response.json()]
        assert fees == sorted(fees)

    async def test_available_camps_rejects_unknown_sort(self, client):
        response = await client.get("/available-camps", params={"sort": "random"})

        assert response.status_code == 422

    async def test_get_missing_camp(self, client):
        response = await client.get(f"/camps/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Camp not found"
        assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.integration
class TestParticipantCounter:
    async def test_increment_adds_one(self, client, camp, participant_headers):
        for _ in range(3):
            response = await client.patch(
                f"/camps/{camp.id}/increment", headers=participant_headers
            )
            assert response.status_code == 200

        camp_data = (await client.get(f"/camps/{camp.id}")).json()
        assert camp_data["participantCount"] == 3

    async def test_increment_missing_camp(self, client, participant_headers):
        response = await client.patch(
            f"/camps/{uuid.uuid4()}/increment", headers=participant_headers
        )

        assert response.status_code == 404

    async def test_increment_requires_token(self, client, camp):
        response = await client.patch(f"/camps/{camp.id}/increment")

        assert response.status_code == 401
