#!/usr/bin/env python3
"""
Basic usage examples for the comparison API client library.

This script demonstrates how to create comparisons, build viewer URLs and
export results. Credentials are read from the environment:

    COMPARE_API_ACCOUNT_ID   account ID
    COMPARE_API_AUTH_TOKEN   auth token
    COMPARE_API_BASE_URL     optional, for a self-hosted server
"""

import asyncio
import datetime
import logging
import os
import sys
import time

from compare_api_client import (
    CLOUD_BASE_URL,
    CompareAPIError,
    Comparisons,
    ExportKind,
    InvalidCredentialsError,
    NotFoundError,
    Side,
)

LEFT_URL = "https://api.draftable.com/static/test-documents/code-of-conduct/left.rtf"
RIGHT_URL = "https://api.draftable.com/static/test-documents/code-of-conduct/right.pdf"


def main(account_id, auth_token, base_url):
    """Run basic usage examples."""

    print("=== Comparison API Client Basic Usage Examples ===\n")

    # Create client
    print("1. Creating comparisons client...")
    client = Comparisons(account_id, auth_token, base_url)
    print(f"   Client created for: {client.base_url}")
    print(f"   Account: {account_id}")
    print(f"   Auth token: {auth_token[:4]}...\n")

    try:
        # Example 1: Comparison from two URLs
        print("2. Creating a comparison from URLs...")
        identifier = client.generate_identifier()
        comparison = client.create(
            Side.from_url(LEFT_URL, "rtf"),
            Side.from_url(RIGHT_URL, "pdf"),
            identifier=identifier,
            expires=datetime.timedelta(minutes=30),
        )
        print(f"   ✓ Created comparison {comparison.identifier}")
        print(f"   Expires: {comparison.expiry_time}")
        print()

        # Example 2: Comparison from uploaded content
        print("3. Creating a comparison from uploaded text...")
        uploaded = client.create(
            Side.from_bytes(b"The quick brown fox jumps over the lazy dog.", "txt", "before.txt"),
            Side.from_bytes(b"The quick red fox jumped over the lazy dog.", "txt", "after.txt"),
            public=True,
            expires=datetime.timedelta(minutes=30),
        )
        print(f"   ✓ Created public comparison {uploaded.identifier}")
        print(f"   Public viewer: {client.public_viewer_url(uploaded.identifier, wait=True)}")
        print()

        # Example 3: Signed viewer URL
        print("4. Building a signed viewer URL...")
        url = client.signed_viewer_url(comparison.identifier, datetime.timedelta(minutes=10), wait=True)
        print(f"   Valid for 10 minutes: {url}")
        print()

        # Example 4: Wait for processing
        print("5. Waiting for the comparison to be ready...")
        for _ in range(30):
            comparison = client.get(comparison.identifier)
            if comparison.ready:
                break
            time.sleep(2)
        if not comparison.ready:
            print("   ✗ Comparison is still processing")
        elif comparison.failed:
            print(f"   ✗ Comparison failed: {comparison.error_message}")
        else:
            print(f"   ✓ Ready at {comparison.ready_time}")
        print()

        # Example 5: Export
        if comparison.ready and not comparison.failed:
            print("6. Exporting the comparison...")
            export = client.run_export(comparison.identifier, ExportKind.COMBINED)
            for _ in range(30):
                if export.ready:
                    break
                time.sleep(2)
                export = client.get_export(export.identifier)
            if export.ready and not export.failed:
                print(f"   ✓ Export available at: {export.url}")
            else:
                print(f"   ✗ Export not available: {export.error_message or 'still processing'}")
            print()

        # Example 6: List comparisons
        print("7. Listing comparisons...")
        comparisons = client.get_all()
        print(f"   ✓ Account has {len(comparisons)} comparison(s)")
        for item in comparisons[:5]:
            print(f"   - {item.identifier} (ready: {item.ready})")
        print()

        # Example 7: Cleanup and error handling
        print("8. Deleting comparisons...")
        client.delete(comparison.identifier)
        client.delete(uploaded.identifier)
        print("   ✓ Deleted")
        try:
            client.get(comparison.identifier)
        except NotFoundError:
            print("   ✓ Deleted comparison is no longer found (404 Not Found)")
        print()

        print("=== All Examples Completed Successfully! ===")

    except InvalidCredentialsError as e:
        print(f"Credentials rejected: {e}")
        sys.exit(1)
    except CompareAPIError as e:
        print(f"Comparison API Error: {e}")
        sys.exit(1)
    finally:
        # Clean up
        client.close()


def demonstrate_async(account_id, auth_token, base_url):
    """Demonstrate the async interface."""

    print("\n=== Async Usage Example ===")

    async def run():
        async with Comparisons(account_id, auth_token, base_url) as client:
            comparisons = await client.get_all_async()
            print(f"✓ Listed {len(comparisons)} comparison(s) asynchronously")

    asyncio.run(run())


def demonstrate_configuration(account_id, auth_token, base_url):
    """Demonstrate client configuration options."""

    print("\n=== Configuration Options Example ===")

    # Create client with custom configuration
    client = Comparisons(
        account_id,
        auth_token,
        base_url,
        timeout=120,               # 2 minute HTTP timeout for large uploads
        signed_url_validity=300,   # signed viewer URLs last 5 minutes by default
    )

    print("✓ Client configured with:")
    print(f"  - HTTP timeout: {client.config['timeout']} seconds")
    print(f"  - Signed URL validity: {client.config['signed_url_validity']} seconds")
    print(f"  - Verify TLS: {client.config['verify']}")

    client.close()


if __name__ == "__main__":
    account_id = os.environ.get("COMPARE_API_ACCOUNT_ID")
    auth_token = os.environ.get("COMPARE_API_AUTH_TOKEN")
    base_url = os.environ.get("COMPARE_API_BASE_URL", CLOUD_BASE_URL)

    if not account_id or not auth_token:
        print("Credentials not configured. Please set them first:")
        print("> export COMPARE_API_ACCOUNT_ID=<account id>")
        print("> export COMPARE_API_AUTH_TOKEN=<auth token>")
        sys.exit(1)

    if os.environ.get("COMPARE_API_DEBUG"):
        logging.basicConfig(level=logging.DEBUG)

    # Run examples
    main(account_id, auth_token, base_url)
    demonstrate_async(account_id, auth_token, base_url)
    demonstrate_configuration(account_id, auth_token, base_url)

    print("\nAll examples completed!")
