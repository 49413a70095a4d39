"""Builders for API payloads shaped like api-v2 responses."""

from typing import Any, Dict, Optional


def hls_transcoding(track_id: int, mime_type: str = "audio/mpeg") -> Dict[str, Any]:
    return {
        "url": f"https://api/media/{track_id}/hls",
        "preset": "mp3_1_0",
        "quality": "sq",
        "format": {"protocol": "hls", "mime_type": mime_type},
    }


def track_payload(
    track_id: int,
    permalink: Optional[str] = None,
    title: str = "Song",
    transcodings: Optional[list] = None,
    policy: str = "ALLOW",
    artwork_url: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": track_id,
        "kind": "track",
        "permalink": permalink or f"song-{track_id}",
        "title": title,
        "genre": "Electronic",
        "artwork_url": artwork_url,
        "track_authorization": f"auth-{track_id}",
        "policy": policy,
        "user": {"id": 7, "kind": "user", "username": "Artist", "permalink": "artist"},
        "media": {
            "transcodings": (
                transcodings if transcodings is not None else [hls_transcoding(track_id)]
            )
        },
    }


def partial_track_payload(track_id: int) -> Dict[str, Any]:
    return {"id": track_id, "kind": "track", "title": None, "user": None, "media": None}


def playlist_payload(permalink: str, tracks: list) -> Dict[str, Any]:
    return {"kind": "playlist", "permalink": permalink, "tracks": tracks}


def user_payload(user_id: int = 7, permalink: str = "artist") -> Dict[str, Any]:
    return {
        "id": user_id,
        "kind": "user",
        "username": "Artist",
        "permalink": permalink,
        "track_count": 0,
    }
