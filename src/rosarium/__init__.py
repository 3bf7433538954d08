"""Rosarium: a record keeper for a rose garden."""

from rosarium.app import GardenApp
from rosarium.core.store import RecordStore
from rosarium.models.variety import Event, Note, Photo, Variety
from rosarium.protocols import SchedulerProtocol, StorageProtocol
from rosarium.storage import FileStorage

__all__ = [
    "Event",
    "FileStorage",
    "GardenApp",
    "Note",
    "Photo",
    "RecordStore",
    "SchedulerProtocol",
    "StorageProtocol",
    "Variety",
]
