"""Database access layer (DAL) for weapon_paints.

This sub-package encapsulates low-level DB interactions so that the sync
service stays storage-agnostic.
"""
