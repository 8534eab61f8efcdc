"""Constants for pylifxhttp library."""

from __future__ import annotations


VERSION = "0.1.0"

# API Configuration
DEFAULT_BASE_URL = "https://api.lifx.com/v1beta1/"
DEFAULT_USER_AGENT = f"pylifxhttp/{VERSION}"
DEFAULT_TIMEOUT = 5.0  # seconds, per request

# Environment variables read by ClientConfig.from_env()
ENV_ACCESS_TOKEN = "LIFX_ACCESS_TOKEN"
ENV_BASE_URL = "LIFX_BASE_URL"
ENV_USER_AGENT = "LIFX_USER_AGENT"
ENV_TIMEOUT = "LIFX_TIMEOUT"

# Operation defaults
DEFAULT_SELECTOR = "all"
DEFAULT_DURATION = 1.0  # seconds

# Color Validation
HUE_MIN = 0.0
HUE_MAX = 360.0
SATURATION_MIN = 0.0
SATURATION_MAX = 1.0
KELVIN_MIN = 2500
KELVIN_MAX = 9000
DEFAULT_KELVIN = 3500

# Decoding
MISSING_PROPERTIES_MESSAGE = "JSON object is missing required properties"
