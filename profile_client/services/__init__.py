"""
Service layer modules orchestrate domain workflows (profiles, uploads)
on top of the lower-level client adapters.
"""

__all__ = [
    "profile_service",
    "simulated_profile_service",
    "upload_pipeline",
]
