"""Lobby server building blocks: wire buffers, realm crypto, compression, password
hashing, character records and in-memory user, game and chat room state."""

__version__ = "0.1.0"