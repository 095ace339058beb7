"""Database models."""
from campusvibe.db.models.event import Event
from campusvibe.db.models.checkin import Checkin
from campusvibe.db.models.rsvp import Rsvp
from campusvibe.db.models.thread import Thread
from campusvibe.db.models.message import Message
from campusvibe.db.models.topic_request import TopicRequest

__all__ = ["Event", "Checkin", "Rsvp", "Thread", "Message", "TopicRequest"]
