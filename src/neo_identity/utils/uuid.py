"""UUID utilities for neo-identity."""

import uuid
import time
from typing import Any, Optional


def generate_uuid_v7() -> uuid.UUID:
    """
    Generate a UUIDv7 with time-based ordering.

    Identity rows get their ids client-side at construction time; a
    time-ordered id keeps the primary key index append-mostly.

    Returns:
        UUIDv7 instance
    """
    # Get current timestamp in milliseconds
    timestamp_ms = int(time.time() * 1000)

    # Create timestamp bytes (48 bits)
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder='big')

    # Generate random bytes for the rest (80 bits)
    random_bytes = uuid.uuid4().bytes[6:]

    uuid_bytes = timestamp_bytes + random_bytes

    # Set version to 7 (bits 12-15 of the 7th byte)
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]

    # Set variant to 10 (bits 6-7 of the 9th byte)
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]

    return uuid.UUID(bytes=uuid_bytes)


def new_stamp() -> str:
    """Random opaque stamp for security and concurrency stamps."""
    return str(uuid.uuid4())


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Parse a UUID from a UUID or string, returning None when malformed."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None
