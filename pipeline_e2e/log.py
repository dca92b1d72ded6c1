import logging.config

from pipeline_e2e import settings

_configured = False


def configure_logging(config=None):
    """Apply the LOGGING dict once per process."""
    global _configured
    if _configured and config is None:
        return
    logging.config.dictConfig(config or settings.LOGGING)
    _configured = True
