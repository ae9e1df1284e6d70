"""Service layer for PomoTrack CLI."""
