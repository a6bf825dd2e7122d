"""
Viewer URL signing.

A signed viewer URL carries an expiry timestamp and an HMAC-SHA256 signature
over the JSON array ``[account_id, identifier, valid_until]``, keyed with the
account's auth token. The server recomputes the same digest, so the JSON text
must match byte for byte: compact separators, values in that order.
"""

import datetime
import hashlib
import hmac
import json

UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def valid_until_timestamp(valid_until: datetime.datetime) -> int:
    """
    Convert an expiry time to whole seconds since the Unix epoch.

    Naive datetimes are taken to be in UTC. Fractional seconds are truncated.
    """
    if valid_until.tzinfo is None:
        valid_until = valid_until.replace(tzinfo=datetime.timezone.utc)
    return int((valid_until - UNIX_EPOCH).total_seconds())


def signing_policy(account_id: str, identifier: str, valid_until: int) -> str:
    """Serialize the claims that a viewer signature covers."""
    return json.dumps(
        [account_id, identifier, int(valid_until)],
        separators=(',', ':'),
        ensure_ascii=False,
    )


def viewer_signature(account_id: str, auth_token: str, identifier: str, valid_until: int) -> str:
    """
    Compute the signature for a signed viewer URL.

    Args:
        account_id: Account owning the comparison
        auth_token: Account auth token (HMAC key)
        identifier: Comparison identifier
        valid_until: Expiry as seconds since the Unix epoch

    Returns:
        Lowercase hex-encoded HMAC-SHA256 digest (64 characters)
    """
    policy = signing_policy(account_id, identifier, valid_until)
    mac = hmac.new(
        auth_token.encode('utf-8'),
        policy.encode('utf-8'),
        hashlib.sha256
    )
    return mac.hexdigest()
