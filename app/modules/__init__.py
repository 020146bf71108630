"""
PetVally feature modules.

Each module keeps its SQLAlchemy models under `infrastructure/database/models.py`;
importing them registers the tables on the shared metadata.
"""


def load_all_models() -> None:
    """Import every module's models so `DatabaseBase.metadata` knows all tables."""
    from app.modules.accounts.infrastructure.database import models as accounts_models  # noqa: F401
    from app.modules.caregiving.infrastructure.database import models as caregiving_models  # noqa: F401
    from app.modules.community.infrastructure.database import models as community_models  # noqa: F401
    from app.modules.notifications.infrastructure.database import models as notifications_models  # noqa: F401
    from app.modules.pet_shop.infrastructure.database import models as pet_shop_models  # noqa: F401
    from app.modules.store.infrastructure.database import models as store_models  # noqa: F401
    from app.modules.vet_care.infrastructure.database import models as vet_care_models  # noqa: F401
