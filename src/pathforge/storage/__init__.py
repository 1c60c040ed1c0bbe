"""Persistence of project trees as JSON snapshots."""
