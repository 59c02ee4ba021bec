"""
Application Layer

Contains use cases, command/query handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: write operations (AddTrackCommand, MoveTrackCommand, etc.)
- queries/: read operations (GetPlaylistQuery, GetPlayerStateQuery)
- services/: transaction orchestration, event publishing and the scheduler
- interfaces/: port interfaces for infrastructure adapters
"""
