"""Tests for database models"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bluechain_mrv.models import (
    Profile,
    Project,
    ProjectStatus,
    SensorReading,
    User,
    Wallet,
)


@pytest.mark.asyncio
class TestModels:
    """Test model defaults and relationships"""

    async def test_user_profile_share_id(self, db_session: AsyncSession, generator):
        user = await db_session.get(User, generator.user_id)
        profile = await db_session.get(Profile, generator.user_id)

        assert profile.id == user.id
        assert profile.verification_status == "pending"

    async def test_project_defaults(self, db_session: AsyncSession, generator):
        project = Project(
            user_id=generator.user_id, name="Seagrass B", hectares=3, latitude=10.0, longitude=79.0
        )
        db_session.add(project)
        await db_session.commit()
        await db_session.refresh(project)

        assert project.status == ProjectStatus.SUBMITTED.value
        assert project.photo_urls == []
        assert project.created_at is not None
        assert "Seagrass B" in repr(project)

    async def test_project_sensor_readings_relationship(
        self, db_session: AsyncSession, validator, sample_project
    ):
        db_session.add(SensorReading(project_id=sample_project.id, validator_id=validator.user_id, ph=8.0))
        await db_session.commit()

        result = await db_session.execute(
            select(Project)
            .options(selectinload(Project.sensor_readings))
            .where(Project.id == sample_project.id)
            .execution_options(populate_existing=True)
        )
        project = result.scalar_one()

        assert len(project.sensor_readings) == 1
        assert project.sensor_readings[0].ph == 8.0

    async def test_wallet_defaults(self, db_session: AsyncSession, consumer):
        wallet = Wallet(user_id=consumer.user_id, address="0x" + "0" * 40)
        db_session.add(wallet)
        await db_session.commit()

        assert wallet.balance_inr == 0

    async def test_project_status_check_constraint(self, db_session: AsyncSession, generator):
        db_session.add(
            Project(
                user_id=generator.user_id,
                name="Saltmarsh C",
                hectares=1,
                latitude=0.0,
                longitude=0.0,
                status="approved",
            )
        )

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    async def test_profile_role_check_constraint(self, db_session: AsyncSession):
        user = User(email="admin@example.org", password_hash="x")
        db_session.add(user)
        await db_session.flush()
        db_session.add(
            Profile(
                id=user.id,
                role="admin",
                organization_name="Admin Org",
                registration_number="REG-ADMIN",
                email=user.email,
            )
        )

        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()
