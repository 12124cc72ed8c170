# Dot IVR Shared Helpers
# Utility functions for request parsing and model output cleanup

import base64
import binascii
import re
from dataclasses import dataclass

from .config import DEFAULT_IMAGE_MEDIA_TYPE, ALLOWED_IMAGE_MEDIA_TYPES

CHANNEL_NUMBER_PATTERN = re.compile(r'\d+', re.ASCII)
DATA_URL_PATTERN = re.compile(r'^data:(?P<media_type>[\w.+-]+/[\w.+-]+)?(;[^,]*)?,', re.ASCII)


@dataclass
class ImagePayload:
    """Base64 image data ready for a Claude image content block."""
    data: str
    media_type: str = DEFAULT_IMAGE_MEDIA_TYPE

    def to_content_block(self):
        return {
            'type': 'image',
            'source': {
                'type': 'base64',
                'media_type': self.media_type,
                'data': self.data
            }
        }


def strip_model_text(content):
    """Strip markdown code fences and whitespace from Claude's answer"""
    content = content.strip()
    if content.startswith('```'):
        # Remove first line (```text or ```)
        content = content.split('\n', 1)[1] if '\n' in content else content[3:]
    if content.endswith('```'):
        content = content.rsplit('```', 1)[0]
    return content.strip()


def is_channel_number(value):
    """True only for an all-digit channel number such as '0041'"""
    return bool(value) and CHANNEL_NUMBER_PATTERN.fullmatch(value) is not None


def decode_image_payload(image_base64):
    """Parse a screenshot posted as bare base64 or as a data URL.
    
    Args:
        image_base64: 'iVBORw0...' or 'data:image/jpeg;base64,/9j/...'
    
    Returns:
        ImagePayload with the pure base64 data and its media type
    
    Raises:
        ValueError: If the data is empty, not valid base64 or not a
            supported image type
    """
    media_type = DEFAULT_IMAGE_MEDIA_TYPE
    data = image_base64.strip()
    
    match = DATA_URL_PATTERN.match(data)
    if match:
        media_type = (match.group('media_type') or DEFAULT_IMAGE_MEDIA_TYPE).lower()
        if media_type not in ALLOWED_IMAGE_MEDIA_TYPES:
            raise ValueError(f'Unsupported image type: {media_type}')
        data = data[match.end():]
    elif ',' in data:
        # Prefix without a recognisable data: header
        data = data.split(',', 1)[1]
    
    # Line-wrapped base64 is common in mail clients
    data = ''.join(data.split())
    if not data:
        raise ValueError('Image data is empty')
    
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f'Image is not valid base64: {e}')
    
    return ImagePayload(data=data, media_type=media_type)
