from unittest.mock import patch

from autocomplete.platform.config import Settings
from autocomplete.platform.logging import configure_logging, get_logger


def test_settings_read_environment():
    """Verify settings load from env vars (Pydantic Settings)."""
    with patch.dict("os.environ", {
        "REDIS_URL": "redis://cache:6380/1",
        "AUTOCOMPLETE_INDEX_TYPE": "terms",
        "AUTOCOMPLETE_BATCH_SIZE": "250",
    }):
        config = Settings()
        assert config.REDIS_URL == "redis://cache:6380/1"
        assert config.AUTOCOMPLETE_INDEX_TYPE == "terms"
        assert config.AUTOCOMPLETE_BATCH_SIZE == 250
        assert config.AUTOCOMPLETE_INTERSECTION_TTL == 60


def test_configure_logging():
    configure_logging()
    logger = get_logger("autocomplete.test")
    logger.info("logging_configured", component="test")
