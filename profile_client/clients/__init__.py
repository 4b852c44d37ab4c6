"""
Adapters presenting external collaborators (object storage, metadata store,
profile API) through the narrow interfaces consumed by the service layer.
"""

__all__ = [
    "supabase_client",
    "profile_api_client",
]
