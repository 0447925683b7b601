"""Persistence of player weapon skins, knives and gloves for a game server."""
