"""In-memory project tree built from slash-delimited paths.

This module provides the node model, the id index, and the merge, mutation and
search operations that keep a project tree consistent while it is edited.
"""
