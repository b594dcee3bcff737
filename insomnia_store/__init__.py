"""insomnia-store: Insomnia collections, folders, requests and environments over NDJSON files."""
