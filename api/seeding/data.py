"""
Fixed sample records.
"""

from __future__ import annotations

SAMPLE_SIZE = 20


def sample_users() -> list[dict[str, str]]:
    """
    Plaintext credentials; the loader hashes them before storing.
    """
    return [
        {
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "password": f"password{n}",
        }
        for n in range(1, SAMPLE_SIZE + 1)
    ]


def sample_songs() -> list[dict[str, str]]:
    return [
        {
            "title": f"Song {n}",
            "artist": f"Artist {n}",
            "category": f"Category {n}",
            "file": f"song{n}.mp3",
        }
        for n in range(1, SAMPLE_SIZE + 1)
    ]
