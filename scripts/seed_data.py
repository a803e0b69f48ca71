#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates one account per role, sample projects, a sensor reading and a wallet.
"""

import asyncio
from datetime import datetime, timedelta

from bluechain_mrv.database import async_engine, Base, AsyncSessionLocal
from bluechain_mrv.models import (
    Asset,
    Profile,
    Project,
    ProjectStatus,
    SensorReading,
    User,
    UserRole,
    VerificationStatus,
    Wallet,
)
from bluechain_mrv.services.auth_service import AuthService
from bluechain_mrv.services.wallet_service import DEFAULT_ASSETS, generate_wallet_address

SEED_PASSWORD = "Password123"


async def create_tables():
    """Create all database tables"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✓ Database tables created")


def _account(email: str, role: UserRole, organization: str, registration: str):
    user = User(email=email, password_hash=AuthService.hash_password(SEED_PASSWORD))
    profile = Profile(
        user=user,
        role=role.value,
        organization_name=organization,
        registration_number=registration,
        email=email,
        verification_status=VerificationStatus.VERIFIED.value,
    )
    return user, profile


async def seed_data():
    """Seed the database with sample data"""
    async with AsyncSessionLocal() as session:
        try:
            generator, generator_profile = _account(
                "ngo@mangrovetrust.org", UserRole.GENERATOR, "Mangrove Restoration Trust", "NGO-2024-0117"
            )
            validator, validator_profile = _account(
                "field@coastalverify.in", UserRole.VALIDATOR, "Coastal Verification Labs", "VAL-0042"
            )
            consumer, consumer_profile = _account(
                "esg@greenport.co", UserRole.CONSUMER, "GreenPort Logistics", "CIN-U63090MH2019"
            )
            session.add_all([
                generator, generator_profile,
                validator, validator_profile,
                consumer, consumer_profile,
            ])
            await session.flush()
            print("✓ Created users and profiles")

            project1 = Project(
                user_id=generator.id,
                name="Sundarbans Mangrove Belt",
                hectares=42.5,
                latitude=21.9497,
                longitude=89.1833,
                address="Gosaba, South 24 Parganas, West Bengal",
                photo_urls=[],
                status=ProjectStatus.VERIFIED.value,
                co2_tons=1275.0,
                validator_id=validator.id,
                validator_notes="Canopy density matches survey",
                verified_at=datetime.utcnow() - timedelta(days=3),
            )
            project2 = Project(
                user_id=generator.id,
                name="Chilika Seagrass Meadow",
                hectares=18.0,
                latitude=19.7165,
                longitude=85.3206,
                address="Chilika Lake, Odisha",
                photo_urls=[],
                status=ProjectStatus.SUBMITTED.value,
            )
            session.add_all([project1, project2])
            await session.flush()
            print("✓ Created projects")

            reading = SensorReading(
                project_id=project1.id,
                validator_id=validator.id,
                temperature=29.4,
                salinity=18.2,
                ph=7.9,
                dissolved_o2=6.1,
                turbidity=12.5,
            )
            session.add(reading)
            await session.flush()
            print("✓ Created sensor reading")

            wallet = Wallet(user_id=consumer.id, address=generate_wallet_address(), balance_inr=0)
            session.add(wallet)
            await session.flush()
            session.add_all([
                Asset(wallet_id=wallet.id, balance=0, inr_value=0, **asset)
                for asset in DEFAULT_ASSETS
            ])
            await session.flush()
            print("✓ Created consumer wallet")

            await session.commit()
            print("\n✅ Database seeding completed successfully!")

            print("\nSummary:")
            print("  - Users: 3 (generator, validator, consumer)")
            print("  - Projects: 2")
            print("  - Sensor readings: 1")
            print("  - Wallets: 1")
            print(f"  - Password for all accounts: {SEED_PASSWORD}")

        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding database: {e}")
            raise


async def main():
    """Main function"""
    print("Starting database seeding...\n")
    await create_tables()
    await seed_data()


if __name__ == "__main__":
    asyncio.run(main())
