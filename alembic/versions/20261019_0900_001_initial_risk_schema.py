"""initial_risk_schema

Creates the ANBIMA reference series tables, investor profiles and bands,
and the append-only risk history. Seeds the three default profile bands.

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SERIES_TABLES = [
    # (table, code columns)
    ("anbima_titulos_publicos", [("codigo_isin", 20, False), ("codigo_selic", 20, True)]),
    ("anbima_debentures", [("codigo_ativo", 30, False)]),
    ("anbima_cri_cra", [("codigo_ativo", 30, False)]),
    ("anbima_fidc", [("codigo_b3", 30, False)]),
    ("anbima_letras_financeiras", [("letra_financeira", 60, False), ("cnpj_emissor", 20, True)]),
]


def upgrade() -> None:
    """
    Upgrade database schema.

    Changes:
    1. ANBIMA reference series tables (one per asset type) and the fund registry
    2. profiles and investor_profile_ranges, seeded with conservador/moderado/arrojado
    3. investment_risk_indicators and risk_score_history
    """
    for table_name, code_columns in SERIES_TABLES:
        op.create_table(
            table_name,
            sa.Column("id", sa.Integer(), nullable=False),
            *[
                sa.Column(name, sa.String(length), nullable=nullable)
                for name, length, nullable in code_columns
            ],
            sa.Column("data_referencia", sa.Date(), nullable=False),
            sa.Column("taxa_indicativa", sa.Float(), nullable=True),
            sa.Column("pu", sa.Float(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
            sa.PrimaryKeyConstraint("id", name=op.f(f"pk_{table_name}")),
        )
        op.create_index(
            f"idx_{table_name}_code_date",
            table_name,
            [code_columns[0][0], "data_referencia"],
        )

    op.create_table(
        "anbima_fundos",
        sa.Column("codigo_fundo", sa.String(30), nullable=False),
        sa.Column("nome", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("codigo_fundo", name=op.f("pk_anbima_fundos")),
    )

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("investor_profile", sa.String(50), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_profiles")),
    )

    ranges = op.create_table(
        "investor_profile_ranges",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_name", sa.String(50), nullable=False),
        sa.Column("min_score", sa.Integer(), nullable=False),
        sa.Column("max_score", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint(
            "min_score >= 1 AND max_score <= 20",
            name=op.f("ck_investor_profile_ranges_score_bounds"),
        ),
        sa.CheckConstraint(
            "min_score <= max_score",
            name=op.f("ck_investor_profile_ranges_band_order"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_investor_profile_ranges")),
        sa.UniqueConstraint("profile_name", name=op.f("uq_investor_profile_ranges_profile_name")),
    )

    # Adjacent bands overlap (7-8, 12-14)
    op.bulk_insert(
        ranges,
        [
            {
                "profile_name": "conservador",
                "min_score": 1,
                "max_score": 8,
                "description": "Prioriza preservação de capital e baixa volatilidade.",
            },
            {
                "profile_name": "moderado",
                "min_score": 7,
                "max_score": 14,
                "description": "Aceita oscilações moderadas em busca de retorno maior.",
            },
            {
                "profile_name": "arrojado",
                "min_score": 12,
                "max_score": 20,
                "description": "Tolera alta volatilidade e perdas temporárias.",
            },
        ],
    )

    op.create_table(
        "investment_risk_indicators",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_investment_id", sa.String(64), nullable=False),
        sa.Column("var_95", sa.Float(), nullable=False),
        sa.Column("beta", sa.Float(), nullable=False),
        sa.Column("sharpe_ratio", sa.Float(), nullable=False),
        sa.Column("std_deviation", sa.Float(), nullable=False),
        sa.Column("expected_return", sa.Float(), nullable=False),
        sa.Column("data_source", sa.String(100), nullable=False),
        sa.Column("calculated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint(
            "var_95 >= 0 AND beta >= 0 AND std_deviation >= 0",
            name=op.f("ck_investment_risk_indicators_non_negative"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_investment_risk_indicators")),
    )
    op.create_index(
        "idx_risk_indicators_investment",
        "investment_risk_indicators",
        ["user_investment_id"],
    )

    op.create_table(
        "risk_score_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("investment_id", sa.String(64), nullable=False),
        sa.Column("risk_indicators_id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("justification", sa.Text(), nullable=False),
        sa.Column("risk_category", sa.String(20), nullable=False),
        sa.Column("compatible_with_conservador", sa.Boolean(), nullable=False),
        sa.Column("compatible_with_moderado", sa.Boolean(), nullable=False),
        sa.Column("compatible_with_arrojado", sa.Boolean(), nullable=False),
        sa.Column("fallback_used", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint("score BETWEEN 1 AND 20", name=op.f("ck_risk_score_history_score_range")),
        sa.CheckConstraint(
            "risk_category IN ('Baixo', 'Moderado', 'Alto')",
            name=op.f("ck_risk_score_history_risk_category"),
        ),
        sa.ForeignKeyConstraint(
            ["risk_indicators_id"],
            ["investment_risk_indicators.id"],
            name=op.f("fk_risk_score_history_risk_indicators_id_investment_risk_indicators"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_risk_score_history")),
    )
    op.create_index(
        "idx_risk_score_history_investment_created",
        "risk_score_history",
        ["investment_id", "created_at"],
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index("idx_risk_score_history_investment_created", table_name="risk_score_history")
    op.drop_table("risk_score_history")
    op.drop_index("idx_risk_indicators_investment", table_name="investment_risk_indicators")
    op.drop_table("investment_risk_indicators")
    op.drop_table("investor_profile_ranges")
    op.drop_table("profiles")
    op.drop_table("anbima_fundos")
    for table_name, code_columns in reversed(SERIES_TABLES):
        op.drop_index(f"idx_{table_name}_code_date", table_name=table_name)
        op.drop_table(table_name)
