"""Mock responses for profile API integration tests."""

from __future__ import annotations

API_BASE_URL = "https://api.example.com/api/profiles"

# GET /api/profiles/alexrivera
PROFILE_RESPONSE = {
    "username": "alexrivera",
    "displayName": "Alex Rivera",
    "bio": "Visual storyteller exploring the intersection of urban landscapes and human emotion.",
    "profilePicture": "https://i.pravatar.cc/300",
    "accentColor": "teal",
    "followers": 1240,
    "following": 350,
    "isFollowing": False,
    "isOwnProfile": False,
    "tags": ["photographer", "filmmaker"],
    "media": [
        {
            "id": "1",
            "url": "/assets/sample1.jpg",
            "thumbnailUrl": "/assets/sample1-thumb.jpg",
            "type": "image",
            "title": "Downtown Reflections",
            "likes": 124,
            "bookmarks": 38,
            "tags": ["urban", "photography"],
            "creator": {"id": "1", "username": "alexrivera", "avatarUrl": "https://i.pravatar.cc/150"},
            "liked": False,
            "bookmarked": False,
            "createdAt": "2024-01-01T00:00:00.000Z",
        },
        {
            "id": "3",
            "url": "/assets/sample3.mp4",
            "thumbnailUrl": "/assets/sample3-thumb.jpg",
            "type": "video",
            "title": "City in Motion",
            "likes": 210,
            "bookmarks": 52,
            "tags": ["timelapse", "urban"],
            "creator": {"id": "1", "username": "alexrivera", "avatarUrl": "https://i.pravatar.cc/150"},
            "liked": True,
            "bookmarked": False,
        },
    ],
    "createdAt": "2023-06-01T10:00:00.000Z",
}

# GET /api/profiles/myusername
OWN_PROFILE_RESPONSE = {
    "username": "myusername",
    "displayName": "My Name",
    "bio": "Existing bio",
    "profilePicture": "https://i.pravatar.cc/300",
    "accentColor": "coral",
    "followers": 450,
    "following": 120,
    "tags": ["film"],
    "media": [],
}

NOT_FOUND_RESPONSE = {"error": "Profile not found"}

ALREADY_FOLLOWING_RESPONSE = {"error": "Already following"}

SERVER_ERROR_RESPONSE = {"message": "Internal server error"}

# Supabase storage public URL for a published image
PUBLIC_URL_TEMPLATE = "https://project.supabase.co/storage/v1/object/public/media/{path}"
