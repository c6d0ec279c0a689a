"""userlist — browse, search, and curate a remote user directory from the terminal."""

__version__ = "1.0.0"
