"""
Constants and configuration values for the scan queue.
"""

# Binarization threshold modes (0-255 is a fixed level)
THRESHOLD_DISABLED = -2
THRESHOLD_OTSU = -1
THRESHOLD_MIN_LEVEL = 0
THRESHOLD_MAX_LEVEL = 255

# Defaults applied when an image has no processing settings
DEFAULT_PROCESSING_PARAMS = {
    'blur_radius': 0.0,
    'threshold': THRESHOLD_DISABLED,
}

# Rotation is kept in whole degrees within [0, FULL_TURN_DEGREES)
FULL_TURN_DEGREES = 360

# Formats accepted by the results sink
EXPORT_FORMATS = ('txt', 'csv')

# Backend endpoints (one per gateway request shape)
GATEWAY_ENDPOINTS = {
    'load_image': '/load_image',
    'load_image_full': '/load_image_full',
    'process_region': '/process_region',
    'preprocess_image': '/preprocess_image',
    'save_results': '/save_results',
}

# Prefix of image payloads returned by the backend
DATA_URL_PATTERN = r'^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$'
