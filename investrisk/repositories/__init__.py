"""Data access layer repositories.

Each repository module provides async functions for database operations.
All code uses SQLAlchemy ORM models from `investrisk.database.orm` with the
`get_session()` context manager.

- market_data_orm: ANBIMA reference series (read-only)
- investor_profiles_orm: declared profiles and their score bands (read-only)
- risk_indicators_orm: append-only indicator sets
- risk_scores_orm: append-only score history
"""

from . import investor_profiles_orm
from . import market_data_orm
from . import risk_indicators_orm
from . import risk_scores_orm

__all__ = [
    "investor_profiles_orm",
    "market_data_orm",
    "risk_indicators_orm",
    "risk_scores_orm",
]
