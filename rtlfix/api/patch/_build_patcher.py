from ...utils.logger import configure_logging
from ..config.RtlfixConfig import RtlfixConfig
from .Patcher import Patcher


def _build_patcher() -> Patcher:
    """Load the config, set up logging and return a Patcher with default collaborators.

    Raises:
        ValueError: If the config file is invalid
    """
    config = RtlfixConfig.load()
    configure_logging(level=config.log.level)
    return Patcher(config)
