"""SQLAlchemy ORM models for InvestRisk.

Three groups of tables:
- ANBIMA reference series, written by the market-data sync collaborator
- investor profiles and their score bands
- the append-only risk history (indicators and score records)

Usage:
    from investrisk.database.orm import RiskScoreHistory
    from investrisk.database.connection import get_session

    async with get_session() as session:
        record = await session.get(RiskScoreHistory, 1)
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Text,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    declared_attr,
    mapped_column,
    relationship,
)


# Naming convention for constraints and indexes (deterministic names for Alembic)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models with naming convention."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# =============================================================================
# ANBIMA REFERENCE SERIES
# =============================================================================


class AnbimaSeriesMixin:
    """Columns shared by the per-period ANBIMA series tables."""

    id: Mapped[int] = mapped_column(primary_key=True)
    data_referencia: Mapped[date] = mapped_column(Date, nullable=False)
    taxa_indicativa: Mapped[float | None] = mapped_column(Float)
    pu: Mapped[float | None] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    @declared_attr.directive
    def __table_args__(cls):
        return (
            Index(f"idx_{cls.__tablename__}_code_date", cls.code_column, "data_referencia"),
        )


class AnbimaTituloPublico(AnbimaSeriesMixin, Base):
    """Government bond daily reference rates."""
    __tablename__ = "anbima_titulos_publicos"
    code_column = "codigo_isin"

    codigo_isin: Mapped[str] = mapped_column(String(20), nullable=False)
    codigo_selic: Mapped[str | None] = mapped_column(String(20))


class AnbimaDebenture(AnbimaSeriesMixin, Base):
    """Debenture secondary-market reference rates."""
    __tablename__ = "anbima_debentures"
    code_column = "codigo_ativo"

    codigo_ativo: Mapped[str] = mapped_column(String(30), nullable=False)


class AnbimaCriCra(AnbimaSeriesMixin, Base):
    """CRI/CRA secondary-market reference rates."""
    __tablename__ = "anbima_cri_cra"
    code_column = "codigo_ativo"

    codigo_ativo: Mapped[str] = mapped_column(String(30), nullable=False)


class AnbimaFidc(AnbimaSeriesMixin, Base):
    """FIDC quota reference rates."""
    __tablename__ = "anbima_fidc"
    code_column = "codigo_b3"

    codigo_b3: Mapped[str] = mapped_column(String(30), nullable=False)


class AnbimaLetraFinanceira(AnbimaSeriesMixin, Base):
    """Financial bill (LF) reference rates."""
    __tablename__ = "anbima_letras_financeiras"
    code_column = "letra_financeira"

    letra_financeira: Mapped[str] = mapped_column(String(60), nullable=False)
    cnpj_emissor: Mapped[str | None] = mapped_column(String(20))


class AnbimaFundo(Base):
    """Fund registry entry. Funds carry no per-period series yet."""
    __tablename__ = "anbima_fundos"

    codigo_fundo: Mapped[str] = mapped_column(String(30), primary_key=True)
    nome: Mapped[str | None] = mapped_column(String(255))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# =============================================================================
# INVESTOR PROFILES
# =============================================================================


class InvestorProfile(Base):
    """Declared investor profile of a user (conservador, moderado, arrojado)."""
    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    investor_profile: Mapped[str | None] = mapped_column(String(50))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class InvestorProfileRange(Base):
    """Closed score band for an investor profile."""
    __tablename__ = "investor_profile_ranges"

    id: Mapped[int] = mapped_column(primary_key=True)
    profile_name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    min_score: Mapped[int] = mapped_column(Integer, nullable=False)
    max_score: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("min_score >= 1 AND max_score <= 20", name="score_bounds"),
        CheckConstraint("min_score <= max_score", name="band_order"),
    )


# =============================================================================
# RISK HISTORY
# =============================================================================


class InvestmentRiskIndicators(Base):
    """One indicator computation for a holding. Never updated."""
    __tablename__ = "investment_risk_indicators"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_investment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    var_95: Mapped[float] = mapped_column(Float, nullable=False)
    beta: Mapped[float] = mapped_column(Float, nullable=False)
    sharpe_ratio: Mapped[float] = mapped_column(Float, nullable=False)
    std_deviation: Mapped[float] = mapped_column(Float, nullable=False)
    expected_return: Mapped[float] = mapped_column(Float, nullable=False)
    data_source: Mapped[str] = mapped_column(String(100), nullable=False)
    calculated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    scores: Mapped[list[RiskScoreHistory]] = relationship(back_populates="indicators")

    __table_args__ = (
        CheckConstraint("var_95 >= 0 AND beta >= 0 AND std_deviation >= 0", name="non_negative"),
        Index("idx_risk_indicators_investment", "user_investment_id"),
    )


class RiskScoreHistory(Base):
    """Append-only score record. The latest created_at per investment is current."""
    __tablename__ = "risk_score_history"

    id: Mapped[int] = mapped_column(primary_key=True)
    investment_id: Mapped[str] = mapped_column(String(64), nullable=False)
    risk_indicators_id: Mapped[int] = mapped_column(
        ForeignKey("investment_risk_indicators.id"), nullable=False
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    justification: Mapped[str] = mapped_column(Text, nullable=False)
    risk_category: Mapped[str] = mapped_column(String(20), nullable=False)
    compatible_with_conservador: Mapped[bool] = mapped_column(Boolean, nullable=False)
    compatible_with_moderado: Mapped[bool] = mapped_column(Boolean, nullable=False)
    compatible_with_arrojado: Mapped[bool] = mapped_column(Boolean, nullable=False)
    fallback_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    indicators: Mapped[InvestmentRiskIndicators] = relationship(back_populates="scores")

    __table_args__ = (
        CheckConstraint("score BETWEEN 1 AND 20", name="score_range"),
        CheckConstraint(
            "risk_category IN ('Baixo', 'Moderado', 'Alto')",
            name="risk_category",
        ),
        Index("idx_risk_score_history_investment_created", "investment_id", "created_at"),
    )
