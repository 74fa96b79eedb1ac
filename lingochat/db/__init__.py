"""Database clients and connections.

Imports are intentionally NOT eagerly loaded here so importing the ORM base
does not also build the Redis client.
Use explicit imports: ``from lingochat.db.database import Base``, etc.
"""
