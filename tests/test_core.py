import logging

from app.core.config import Settings
from app.core.exceptions import BookingError, InvalidIdError, NotFoundError, ValidationError
from app.core.logger import logger, setup_logging

def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.PORT == 3000
    assert settings.API_PREFIX == "/api"
    assert settings.CORS_ORIGINS == ["*"]

def test_settings_read_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8081")
    assert Settings(_env_file=None).PORT == 8081

def test_error_status_codes():
    assert issubclass(ValidationError, BookingError)
    assert ValidationError("x").status_code == 400
    assert InvalidIdError().status_code == 400
    assert InvalidIdError().message == "invalid id"
    assert NotFoundError().status_code == 404
    assert NotFoundError().message == "booking not found"

def test_stdlib_logging_is_routed_through_loguru(tmp_path):
    setup_logging(level="DEBUG", log_file=str(tmp_path / "errors.log"))
    captured = []
    sink_id = logger.add(lambda message: captured.append(message.record["message"]), level="INFO")
    try:
        logging.getLogger("uvicorn.error").info("hello from uvicorn")
    finally:
        logger.remove(sink_id)
    assert "hello from uvicorn" in captured
