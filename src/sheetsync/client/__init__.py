"""Client side of sheetsync: credential access, HTTP client and sync service."""
