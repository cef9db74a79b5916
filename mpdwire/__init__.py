"""Client library for the Music Player Daemon protocol: connection, player,
queue, playlists, replay gain, pictures, search and capabilities."""

__version__ = "0.1.0"