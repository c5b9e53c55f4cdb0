"""HEP planned power outage monitor."""

__version__ = "0.1.0"

APP_NAME = "hep-outage-monitor"
