"""Investor profile repository using SQLAlchemy ORM.

Usage:
    from investrisk.repositories import investor_profiles_orm

    name = await investor_profiles_orm.get_investor_profile_name(user_id)
    band = await investor_profiles_orm.get_profile_range(name)
"""

from __future__ import annotations

from sqlalchemy import select

from investrisk.database.connection import get_session
from investrisk.database.orm import InvestorProfile, InvestorProfileRange
from investrisk.domain.risk import ProfileBand


async def get_investor_profile_name(user_id: str) -> str | None:
    """Get the declared investor profile of a user, lower-cased."""
    async with get_session() as session:
        profile = await session.get(InvestorProfile, user_id)

    if profile is None or not profile.investor_profile:
        return None
    return profile.investor_profile.lower()


async def get_profile_range(profile_name: str) -> ProfileBand | None:
    """Get the score band of a profile by name."""
    async with get_session() as session:
        result = await session.execute(
            select(InvestorProfileRange).where(
                InvestorProfileRange.profile_name == profile_name
            )
        )
        row = result.scalar_one_or_none()

    return ProfileBand.model_validate(row) if row is not None else None


async def list_profile_ranges() -> list[ProfileBand]:
    """List all profile bands ordered by their lower bound."""
    async with get_session() as session:
        result = await session.execute(
            select(InvestorProfileRange).order_by(
                InvestorProfileRange.min_score, InvestorProfileRange.profile_name
            )
        )
        rows = result.scalars().all()

    return [ProfileBand.model_validate(row) for row in rows]
