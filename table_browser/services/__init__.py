"""
Collaborators around the core view pipeline: record ingestion, CSV export
and the registry of live table sessions.
"""
