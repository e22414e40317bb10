from .logging import logger, setup_cch_fixture_logging

__all__ = ["logger", "setup_cch_fixture_logging"]
