# Dot IVR Shared Config
# Central configuration for the IVR log service

import os

# Anthropic
ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
ANTHROPIC_MODEL = os.environ.get('ANTHROPIC_MODEL', 'claude-sonnet-4-20250514')
ANTHROPIC_TIMEOUT = float(os.environ.get('ANTHROPIC_TIMEOUT', 60.0))

# Token limits per call
EXTRACT_MAX_TOKENS = 50
ANALYSIS_MAX_TOKENS = int(os.environ.get('ANALYSIS_MAX_TOKENS', 2000))

# Screenshots are posted inline as base64, so allow large bodies
MAX_CONTENT_LENGTH = 20 * 1024 * 1024

DEFAULT_IMAGE_MEDIA_TYPE = 'image/png'

# Image types Claude accepts in a base64 content block
ALLOWED_IMAGE_MEDIA_TYPES = ('image/png', 'image/jpeg', 'image/gif', 'image/webp')

PORT = int(os.environ.get('PORT', 8080))
