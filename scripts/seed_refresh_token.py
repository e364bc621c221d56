# scripts/seed_refresh_token.py
import argparse
from dataclasses import replace

from spotify_proxy.config.settings import Settings
from spotify_proxy.services.kv_store import RedisKVStore
from spotify_proxy.services.spotify_token_service import SpotifyTokenService


def seed_refresh_token(refresh_token: str, settings: Settings, store=None) -> str:
    """Store the operator-provided refresh token; returns the key it was written to."""
    store = store or RedisKVStore.from_settings(settings)
    service = SpotifyTokenService(store, settings)
    service.store_refresh_token(refresh_token)
    return settings.refresh_token_key


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Provision the Spotify refresh token used by the proxy."
    )
    parser.add_argument("--refresh-token", required=True)
    parser.add_argument("--client-id", help="Override SPOTIFY_CLIENT_ID for the cache key")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.client_id:
        settings = replace(settings, client_id=args.client_id)

    key = seed_refresh_token(args.refresh_token, settings)
    print(f"Stored refresh token under {key}")


if __name__ == "__main__":
    main()
