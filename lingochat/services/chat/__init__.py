"""Chat services: room broadcasting and the message ingestion pipeline.

Use explicit imports:
    from lingochat.services.chat.broadcaster import RoomBroadcaster
    from lingochat.services.chat.ingestion import MessageIngestionPipeline
"""
