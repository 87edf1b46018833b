"""
Integration tests for feedback endpoints.
"""

import uuid

import pytest

from tests.fixtures.factories import auth_headers


def feedback_body(camp, email: str, rating: int = 5, text: str = "Great camp") -> dict:
    return {
        "campId": str(camp.id),
        "campName": camp.camp_name,
        "email": email,
        "rating": rating,
        "feedback": text,
        "userName": "Pat",
        "photoURL": "https://example.com/pat.png",
    }


@pytest.mark.integration
class TestFeedback:
    async def test_submit_and_list_newest_first(
        self, client, camp, participant, participant_headers
    ):
        for text in ("first", "second"):
            response = await client.post(
                "/submit-feedback",
                json=feedback_body(camp, participant.email, text=text),
                headers=participant_headers,
            )
            assert response.status_code == 200
            assert response.json() == {
                "success": True,
                "message": "Feedback submitted successfully",
            }

        listing = (await client.get("/feedback")).json()

        assert [item["feedback"] for item in listing] == ["second", "first"]
        assert listing[0]["photoURL"] == "https://example.com/pat.png"
        assert listing[0]["participantEmail"] == participant.email
        assert listing[0]["date"]

    @pytest.mark.parametrize("rating", [0, 6])
    async def test_rating_out_of_range(
        self, client, camp, participant, participant_headers, rating
    ):
        response = await client.post(
            "/submit-feedback",
            json=feedback_body(camp, participant.email, rating=rating),
            headers=participant_headers,
        )

        assert response.status_code == 422

    async def test_submit_requires_token(self, client, camp):
        response = await client.post(
            "/submit-feedback", json=feedback_body(camp, "pat@example.com")
        )

        assert response.status_code == 401

    async def test_feedback_by_participant(
        self, client, camp, participant, participant_headers, organizer, organizer_headers
    ):
        await client.post(
            "/submit-feedback",
            json=feedback_body(camp, participant.email),
            headers=participant_headers,
        )
        await client.post(
            "/submit-feedback",
            json=feedback_body(camp, organizer.email),
            headers=organizer_headers,
        )

        response = await client.get(
            f"/feedback/{participant.email}", headers=participant_headers
        )

        assert [item["participantEmail"] for item in response.json()] == [
            participant.email
        ]

    async def test_feedback_of_other_participant_forbidden(
        self, client, camp, participant, participant_headers
    ):
        await client.post(
            "/submit-feedback",
            json=feedback_body(camp, participant.email),
            headers=participant_headers,
        )

        response = await client.get(
            f"/feedback/{participant.email}",
            headers=auth_headers("stranger@example.com"),
        )

        assert response.status_code == 403

    async def test_organizer_reads_participant_feedback(
        self, client, camp, participant, participant_headers, organizer_headers
    ):
        await client.post(
            "/submit-feedback",
            json=feedback_body(camp, participant.email),
            headers=participant_headers,
        )

        response = await client.get(
            f"/feedback/{participant.email}", headers=organizer_headers
        )

        assert response.status_code == 200
        assert len(response.json()) == 1

    async def test_organizer_deletes_feedback(
        self, client, camp, participant, participant_headers, organizer_headers
    ):
        await client.post(
            "/submit-feedback",
            json=feedback_body(camp, participant.email),
            headers=participant_headers,
        )
        feedback_id = (await client.get("/feedback")).json()[0]["id"]

        refused = await client.delete(
            f"/feedback/{feedback_id}", headers=participant_headers
        )
        deleted = await client.delete(
            f"/feedback/{feedback_id}", headers=organizer_headers
        )
        again = await client.delete(f"/feedback/{feedback_id}", headers=organizer_headers)

        assert refused.status_code == 403
        assert deleted.status_code == 200
        assert again.status_code == 404
        assert again.json()["message"] == "Feedback not found or already deleted"

    async def test_delete_unknown_feedback(self, client, organizer_headers):
        response = await client.delete(
            f"/feedback/{uuid.uuid4()}", headers=organizer_headers
        )

        assert response.status_code == 404
