"""
Constants for the comparison API client library.
Values match the conventions of the Draftable comparison REST API.
"""

# Default endpoint for the hosted (cloud) API
CLOUD_BASE_URL = "https://api.draftable.com/v1"

# HTTP headers sent with every request
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
ACCEPT_JSON = "application/json"
AUTHORIZATION_SCHEME = "Token"

# Expected success status per verb
STATUS_GET = 200
STATUS_POST = 201
STATUS_DELETE = 204

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,                # HTTP timeout in seconds
    'verify': True,               # TLS certificate verification
    'signed_url_validity': 1800,  # 30 minutes in seconds
    'transport': None,            # Optional httpx.AsyncBaseTransport
}

# Comparison identifiers
IDENTIFIER_LENGTH_MIN = 1
IDENTIFIER_LENGTH_MAX = 1024
IDENTIFIER_EXTRA_CHARACTERS = "-._"

# Generated identifiers
GENERATED_IDENTIFIER_LENGTH = 12
GENERATED_IDENTIFIER_CHARACTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Side file types accepted by the API
ALLOWED_FILE_TYPES = frozenset([
    "doc",   # Word 97-2003 Document
    "docm",  # Word Macro-Enabled Document
    "docx",  # Word Document
    "pdf",   # Portable Document Format
    "ppt",   # PowerPoint 97-2003 Presentation
    "pptm",  # PowerPoint Macro-Enabled Presentation
    "pptx",  # PowerPoint Presentation
    "rtf",   # Rich Text Format
    "txt",   # Plain text
])

SIDE_NAMES = ("left", "right")
SOURCE_URL_SCHEMES = ("http", "https")
