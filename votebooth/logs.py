# votebooth/logs.py
import logging

ALERT_LOGGER_NAME = "votebooth.alerts"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the API process and the admin command."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def get_alert_logger() -> logging.Logger:
    # Operational alert channel, routed by deployment logging config
    return logging.getLogger(ALERT_LOGGER_NAME)
