"""Database module: SQLAlchemy async engine, sessions and ORM models."""

from .connection import (
    close_sqlalchemy_engine,
    create_all_tables,
    db_healthcheck,
    get_async_database_url,
    get_engine,
    get_session,
    init_sqlalchemy_engine,
)
from .orm import (
    AnbimaCriCra,
    AnbimaDebenture,
    AnbimaFidc,
    AnbimaFundo,
    AnbimaLetraFinanceira,
    AnbimaTituloPublico,
    Base,
    InvestmentRiskIndicators,
    InvestorProfile,
    InvestorProfileRange,
    RiskScoreHistory,
)


__all__ = [
    # SQLAlchemy
    "init_sqlalchemy_engine",
    "close_sqlalchemy_engine",
    "create_all_tables",
    "db_healthcheck",
    "get_async_database_url",
    "get_engine",
    "get_session",
    "Base",
    # Market data
    "AnbimaCriCra",
    "AnbimaDebenture",
    "AnbimaFidc",
    "AnbimaFundo",
    "AnbimaLetraFinanceira",
    "AnbimaTituloPublico",
    # Profiles
    "InvestorProfile",
    "InvestorProfileRange",
    # Risk history
    "InvestmentRiskIndicators",
    "RiskScoreHistory",
]
