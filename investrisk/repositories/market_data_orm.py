"""ANBIMA reference series repository using SQLAlchemy ORM.

Read-only access to the per-period reference values written by the market
data sync. Each asset type maps to one table and one code column.

Usage:
    from investrisk.repositories import market_data_orm

    points = await market_data_orm.get_historical_points("debenture", "PETR16", limit=30)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from sqlalchemy import select

from investrisk.core.logging import get_logger
from investrisk.database.connection import get_session
from investrisk.database.orm import (
    AnbimaCriCra,
    AnbimaDebenture,
    AnbimaFidc,
    AnbimaFundo,
    AnbimaLetraFinanceira,
    AnbimaTituloPublico,
)
from investrisk.domain.risk import AssetType, HistoricalPoint


logger = get_logger("repositories.market_data_orm")


SERIES_MODELS: Mapping[str, type] = MappingProxyType({
    AssetType.TITULO_PUBLICO.value: AnbimaTituloPublico,
    AssetType.DEBENTURE.value: AnbimaDebenture,
    AssetType.CRI_CRA.value: AnbimaCriCra,
    AssetType.FIDC.value: AnbimaFidc,
    AssetType.LETRA_FINANCEIRA.value: AnbimaLetraFinanceira,
})


def get_source_table(asset_type: str) -> str | None:
    """Table backing an asset type, or None when no series exists for it."""
    if asset_type == AssetType.FUNDO.value:
        return AnbimaFundo.__tablename__
    model = SERIES_MODELS.get(asset_type)
    return model.__tablename__ if model is not None else None


def data_source_label(asset_type: str) -> str:
    """Provenance label stored with computed indicators."""
    return f"ANBIMA - {get_source_table(asset_type) or asset_type}"


async def get_historical_points(
    asset_type: str,
    asset_code: str,
    limit: int = 30,
) -> list[HistoricalPoint]:
    """
    Get the most recent reference points of an instrument, newest first.

    Funds have a registry row but no per-period series; an existing fund
    yields one empty point so callers can tell it apart from a missing one.

    Args:
        asset_type: Asset category (titulo_publico, debenture, ...)
        asset_code: Instrument code in the category's code column
        limit: Maximum number of points

    Returns:
        List of HistoricalPoint, empty when the instrument is unknown
    """
    async with get_session() as session:
        if asset_type == AssetType.FUNDO.value:
            fund = await session.get(AnbimaFundo, asset_code)
            return [HistoricalPoint()] if fund is not None else []

        model = SERIES_MODELS.get(asset_type)
        if model is None:
            logger.info("No reference series for asset type", extra={"asset_type": asset_type})
            return []

        code_column = getattr(model, model.code_column)
        result = await session.execute(
            select(model)
            .where(code_column == asset_code)
            .order_by(model.data_referencia.desc())
            .limit(limit)
        )
        rows = result.scalars().all()

    return [
        HistoricalPoint(
            reference_date=row.data_referencia,
            indicative_rate=row.taxa_indicativa,
            unit_price=row.pu,
        )
        for row in rows
    ]
