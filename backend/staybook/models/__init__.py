"""SQLAlchemy models for Staybook.

All models are imported here so that ``Base.metadata`` knows every table
when ``create_tables`` runs. If you add a new model, import it in this file.
"""

from staybook.models.booking import Booking
from staybook.models.place import Place
from staybook.models.user import User

__all__ = [
    "Booking",
    "Place",
    "User",
]
