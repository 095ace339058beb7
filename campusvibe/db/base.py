"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here so Base.metadata knows every table
from campusvibe.db.models.event import Event  # noqa: F401, E402
from campusvibe.db.models.checkin import Checkin  # noqa: F401, E402
from campusvibe.db.models.rsvp import Rsvp  # noqa: F401, E402
from campusvibe.db.models.thread import Thread  # noqa: F401, E402
from campusvibe.db.models.message import Message  # noqa: F401, E402
from campusvibe.db.models.topic_request import TopicRequest  # noqa: F401, E402
