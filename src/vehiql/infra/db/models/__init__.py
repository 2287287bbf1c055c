from vehiql.infra.db.models.base import Base
from vehiql.infra.db.models.listing import ListingRow

__all__ = ["Base", "ListingRow"]
