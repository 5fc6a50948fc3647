"""Singleton accessor for the MongoDB client."""

from __future__ import annotations

from pymongo import MongoClient
from pymongo.database import Database

from ..config import MONGODB_DATABASE, MONGODB_URI

_client: MongoClient | None = None


def get_mongo_client() -> MongoClient:
    """Return a singleton :class:`pymongo.MongoClient`."""
    global _client
    if _client is None:
        if not MONGODB_URI:
            raise EnvironmentError("MONGODB_URI is not set in environment variables")
        _client = MongoClient(MONGODB_URI)
    return _client


def get_database() -> Database:
    """Return the configured application database."""
    return get_mongo_client()[MONGODB_DATABASE]

__all__ = ["get_mongo_client", "get_database"]
