"""Tests for project API endpoints"""

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import func, select, text

from bluechain_mrv.models import Project


def mangrove_payload(**overrides):
    payload = {
        "name": "Mangrove A",
        "hectares": 12.5,
        "latitude": 21.95,
        "longitude": 89.18,
        "address": "Sundarbans, West Bengal",
        "photo_urls": ["https://project-photos.s3.ap-south-1.amazonaws.com/u/1.jpg"],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
class TestSubmitProject:
    """Test POST /api/v1/submit-project"""

    async def test_generator_submits(self, async_client: AsyncClient, generator, auth_headers):
        response = await async_client.post(
            "/api/v1/submit-project", headers=auth_headers(generator), json=mangrove_payload()
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        project = data["project"]
        assert project["status"] == "submitted"
        assert project["user_id"] == str(generator.user_id)
        assert project["photo_urls"] == mangrove_payload()["photo_urls"]
        assert project["co2_tons"] is None

    async def test_requires_authentication(self, async_client: AsyncClient, db_session):
        response = await async_client.post("/api/v1/submit-project", json=mangrove_payload())

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Missing authentication credentials"}

    async def test_consumer_forbidden(self, async_client: AsyncClient, consumer, auth_headers, db_session):
        response = await async_client.post(
            "/api/v1/submit-project", headers=auth_headers(consumer), json=mangrove_payload()
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"error": "Only generators can submit projects"}
        count = (await db_session.execute(select(func.count(Project.id)))).scalar_one()
        assert count == 0

    async def test_role_checked_before_body(self, async_client: AsyncClient, validator, auth_headers):
        response = await async_client.post(
            "/api/v1/submit-project",
            headers=auth_headers(validator),
            json={"hectares": "lots", "latitude": "north"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_negative_hectares(self, async_client: AsyncClient, generator, auth_headers, db_session):
        response = await async_client.post(
            "/api/v1/submit-project", headers=auth_headers(generator), json=mangrove_payload(hectares=-2)
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "hectares must be a positive number"}
        count = (await db_session.execute(select(func.count(Project.id)))).scalar_one()
        assert count == 0

    async def test_missing_latitude(self, async_client: AsyncClient, generator, auth_headers):
        payload = mangrove_payload()
        del payload["latitude"]

        response = await async_client.post(
            "/api/v1/submit-project", headers=auth_headers(generator), json=payload
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "latitude is required"}

    async def test_non_numeric_hectares(self, async_client: AsyncClient, generator, auth_headers):
        response = await async_client.post(
            "/api/v1/submit-project", headers=auth_headers(generator), json=mangrove_payload(hectares="lots")
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("hectares:")


@pytest.mark.asyncio
class TestValidateProject:
    """Test POST /api/v1/validate-project"""

    async def test_full_review_cycle(
        self, async_client: AsyncClient, generator, validator, auth_headers
    ):
        submitted = await async_client.post(
            "/api/v1/submit-project", headers=auth_headers(generator), json=mangrove_payload()
        )
        project_id = submitted.json()["project"]["id"]

        review = await async_client.post(
            "/api/v1/validate-project",
            headers=auth_headers(validator),
            json={"project_id": project_id, "status": "under-review"},
        )
        assert review.status_code == status.HTTP_200_OK
        assert review.json()["project"]["validator_id"] == str(validator.user_id)

        verified = await async_client.post(
            "/api/v1/validate-project",
            headers=auth_headers(validator),
            json={"project_id": project_id, "status": "verified", "co2_tons": 500},
        )
        assert verified.status_code == status.HTTP_200_OK
        project = verified.json()["project"]
        assert project["status"] == "verified"
        assert project["co2_tons"] == 500
        assert project["verified_at"] is not None

    async def test_generator_cannot_validate(
        self, async_client: AsyncClient, generator, sample_project, auth_headers
    ):
        response = await async_client.post(
            "/api/v1/validate-project",
            headers=auth_headers(generator),
            json={"project_id": str(sample_project.id), "status": "verified", "co2_tons": 10},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"error": "Only validators can validate projects"}

    async def test_missing_status(self, async_client: AsyncClient, validator, sample_project, auth_headers):
        response = await async_client.post(
            "/api/v1/validate-project",
            headers=auth_headers(validator),
            json={"project_id": str(sample_project.id)},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "status is required"}

    async def test_unknown_project(self, async_client: AsyncClient, validator, auth_headers):
        response = await async_client.post(
            "/api/v1/validate-project",
            headers=auth_headers(validator),
            json={"project_id": "123e4567-e89b-12d3-a456-426614174000", "status": "rejected"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "not found" in response.json()["error"]

    async def test_disallowed_transition(
        self, async_client: AsyncClient, validator, sample_project, auth_headers
    ):
        response = await async_client.post(
            "/api/v1/validate-project",
            headers=auth_headers(validator),
            json={"project_id": str(sample_project.id), "status": "verified"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Cannot change project status from submitted to verified"}


@pytest.mark.asyncio
class TestReadProjects:
    """Test GET /api/v1/projects and /api/v1/projects/{id}"""

    async def test_list_projects(self, async_client: AsyncClient, consumer, sample_project, auth_headers):
        response = await async_client.get("/api/v1/projects", headers=auth_headers(consumer))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["limit"] == 50
        assert data["offset"] == 0
        assert data["projects"][0]["id"] == str(sample_project.id)

    async def test_list_pagination(self, async_client: AsyncClient, consumer, sample_project, auth_headers):
        response = await async_client.get(
            "/api/v1/projects?limit=1&offset=1", headers=auth_headers(consumer)
        )

        data = response.json()
        assert data["total"] == 1
        assert data["projects"] == []

    async def test_list_filter_by_status(self, async_client: AsyncClient, validator, sample_project, auth_headers):
        response = await async_client.get(
            "/api/v1/projects?status=rejected", headers=auth_headers(validator)
        )

        assert response.json()["total"] == 0

    async def test_get_project(self, async_client: AsyncClient, generator, sample_project, auth_headers):
        response = await async_client.get(
            f"/api/v1/projects/{sample_project.id}", headers=auth_headers(generator)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Mangrove A"

    async def test_other_generator_gets_not_found(
        self, async_client: AsyncClient, other_generator, sample_project, auth_headers
    ):
        response = await async_client.get(
            f"/api/v1/projects/{sample_project.id}", headers=auth_headers(other_generator)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
class TestStoreFailures:
    """Database errors on reads are rendered like any other store error"""

    async def test_read_failure_returns_driver_message(
        self, async_client: AsyncClient, consumer, sample_project, auth_headers, db_session
    ):
        await db_session.execute(text("DROP TABLE projects"))
        await db_session.commit()
        db_session.expunge_all()

        headers = {**auth_headers(consumer), "Origin": "https://dashboard.example.org"}
        listed = await async_client.get("/api/v1/projects", headers=headers)
        fetched = await async_client.get(f"/api/v1/projects/{sample_project.id}", headers=headers)

        for response in (listed, fetched):
            assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
            assert response.json() == {"error": "no such table: projects"}
            assert "access-control-allow-origin" in response.headers
