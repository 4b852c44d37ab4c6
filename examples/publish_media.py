#!/usr/bin/env python
"""
Example: publish media and inspect profiles using profile_client.

This example demonstrates:
- Loading settings from environment or .env file
- Creating components with the factory
- Publishing a media file (storage upload + metadata record)
- Fetching a profile and toggling the theme preference

Usage:
    # Publish an image
    python examples/publish_media.py --publish photo.jpg --owner u1 --title "Morning Light"

    # Publish audio with tags
    python examples/publish_media.py --publish take.mp3 --owner u1 --title "Street" \
        --media-type audio --tag urban --tag field-recording

    # Show a profile using the simulated service
    python examples/publish_media.py --profile alexrivera --simulated

    # Flip the persisted theme
    python examples/publish_media.py --toggle-theme

Requirements:
    Set environment variables or create a .env file with:
    - SUPABASE_URL and SUPABASE_ANON_KEY (publishing)
    - PROFILE_API_URL and PROFILE_VIEWER_USERNAME (remote profiles)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from profile_client.config import ConfigManager
from profile_client.exceptions import ConfigurationError
from profile_client.factory import ClientContext, ProfileClientFactory
from profile_client.models import MEDIA_TYPES, UploadDescriptor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Publish media and inspect profiles")
    parser.add_argument("--publish", type=Path, help="Path to the media file to publish")
    parser.add_argument("--owner", help="Owner id used for the storage path and record")
    parser.add_argument("--title", default="", help="Title stored with the media item")
    parser.add_argument("--description", default="", help="Optional description")
    parser.add_argument(
        "--media-type",
        choices=MEDIA_TYPES,
        default="image",
        help="Kind of media being published (default: image)",
    )
    parser.add_argument("--tag", action="append", default=[], help="Tag (repeatable)")
    parser.add_argument("--profile", help="Username whose profile should be shown")
    parser.add_argument(
        "--simulated",
        action="store_true",
        help="Use the in-memory profile service instead of the remote API",
    )
    parser.add_argument("--toggle-theme", action="store_true", help="Flip light/dark")
    parser.add_argument("--dotenv", type=Path, help="Path to .env file (default: ./.env)")
    return parser


async def run(args: argparse.Namespace, context: ClientContext) -> int:
    exit_code = 0

    if args.publish:
        if context.upload_pipeline is None:
            print("Error: Supabase settings are required to publish media")
            return 1
        if not args.owner:
            print("Error: --owner is required with --publish")
            return 1
        descriptor = UploadDescriptor(
            title=args.title or args.publish.stem,
            description=args.description,
            tags=args.tag,
            media_type=args.media_type,
        )
        print(f"Publishing {args.publish} as {args.media_type}...")
        result = await context.upload_pipeline.publish(args.publish, args.owner, descriptor)
        if result.success:
            print(f"✅ Published: {result.file_url}")
        else:
            print(f"❌ {result.error_type}: {result.error}")
            if result.orphaned_path:
                print(f"   Stored object left without metadata: {result.orphaned_path}")
            exit_code = 1

    if args.profile:
        response = await context.profile_service.get_profile_by_username(args.profile)
        if response.error:
            print(f"❌ {response.error}")
            exit_code = 1
        else:
            profile = response.profile
            print(f"{profile.display_name} (@{profile.username})")
            print(f"   {profile.followers} followers, {profile.following} following")
            print(f"   {len(profile.media)} media items")

    if args.toggle_theme:
        theme = context.preferences.toggle()
        print(f"Theme is now {theme}")

    return exit_code


def main() -> int:
    """Main entry point for the example."""
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args()

    try:
        config = ConfigManager(dotenv_path=args.dotenv) if args.dotenv else ConfigManager()
        context = ProfileClientFactory.create_from_config(config, simulated=args.simulated)
    except ConfigurationError as exc:
        print(f"❌ Configuration error: {exc}")
        return 1

    return asyncio.run(run(args, context))


if __name__ == "__main__":
    raise SystemExit(main())
