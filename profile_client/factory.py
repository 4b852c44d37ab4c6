"""
Factory for creating profile_client components from settings.
"""

from __future__ import annotations

from dataclasses import dataclass

from supabase import create_client

from profile_client.clients.profile_api_client import ProfileApiClient
from profile_client.clients.supabase_client import SupabaseBlobStorage, SupabaseMetadataStore
from profile_client.config import ClientSettings, ConfigManager
from profile_client.exceptions import ConfigurationError
from profile_client.preferences import FilePreferenceBackend, PreferenceStore
from profile_client.services.profile_service import ProfileService, RemoteProfileService
from profile_client.services.simulated_profile_service import (
    DEFAULT_VIEWER,
    SimulatedProfileService,
)
from profile_client.services.upload_pipeline import UploadPipeline


@dataclass(slots=True)
class ClientContext:
    """Explicitly owned set of components handed to consumers."""

    profile_service: ProfileService
    preferences: PreferenceStore
    upload_pipeline: UploadPipeline | None = None


class ProfileClientFactory:
    """Factory for creating properly initialized profile_client components."""

    @staticmethod
    def create_from_config(
        config_manager: ConfigManager,
        *,
        simulated: bool = False,
        cleanup_orphans: bool = False,
    ) -> ClientContext:
        """
        Build a ClientContext from the settings the manager loads.

        The upload pipeline is only created when Supabase settings are present.

        Raises:
            ConfigurationError: If settings are missing or invalid
        """
        settings = config_manager.load_settings()
        return ProfileClientFactory.create_from_settings(
            settings, simulated=simulated, cleanup_orphans=cleanup_orphans
        )

    @staticmethod
    def create_from_settings(
        settings: ClientSettings,
        *,
        simulated: bool = False,
        cleanup_orphans: bool = False,
    ) -> ClientContext:
        if simulated:
            profile_service: ProfileService = ProfileClientFactory.create_simulated_profile_service(
                settings
            )
        else:
            profile_service = ProfileClientFactory.create_remote_profile_service(settings)

        pipeline = None
        if settings.supabase_url or settings.supabase_key:
            pipeline = ProfileClientFactory.create_upload_pipeline(
                settings, cleanup_orphans=cleanup_orphans
            )

        return ClientContext(
            profile_service=profile_service,
            preferences=ProfileClientFactory.create_preference_store(settings),
            upload_pipeline=pipeline,
        )

    @staticmethod
    def create_upload_pipeline(
        settings: ClientSettings,
        *,
        cleanup_orphans: bool = False,
    ) -> UploadPipeline:
        """
        Create an UploadPipeline backed by Supabase storage and tables.

        Raises:
            ConfigurationError: If the Supabase URL or key is missing
        """
        if not settings.supabase_url or not settings.supabase_key:
            raise ConfigurationError("Supabase URL and anon key are required for uploads")

        client = create_client(settings.supabase_url, settings.supabase_key)
        return UploadPipeline(
            storage=SupabaseBlobStorage(client, bucket=settings.bucket),
            metadata_store=SupabaseMetadataStore(client),
            table=settings.table,
            cleanup_orphans=cleanup_orphans,
        )

    @staticmethod
    def create_remote_profile_service(settings: ClientSettings) -> RemoteProfileService:
        """
        Create a RemoteProfileService talking to the configured profile API.

        Raises:
            ConfigurationError: If the API URL or viewer username is missing
        """
        if not settings.profile_api_url:
            raise ConfigurationError("Profile API URL is required")
        if not settings.viewer_username:
            raise ConfigurationError("Viewer username is required")

        client = ProfileApiClient(settings.profile_api_url, timeout=settings.timeout)
        return RemoteProfileService(client, settings.viewer_username)

    @staticmethod
    def create_simulated_profile_service(settings: ClientSettings) -> SimulatedProfileService:
        return SimulatedProfileService(viewer_username=settings.viewer_username or DEFAULT_VIEWER)

    @staticmethod
    def create_preference_store(settings: ClientSettings) -> PreferenceStore:
        return PreferenceStore(FilePreferenceBackend(settings.preferences_file))
