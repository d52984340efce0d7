from unittest.mock import MagicMock, patch

from fastapi import FastAPI

from inventory.core import tracing


def test_create_span_without_provider_is_usable():
    with tracing.create_span("product.stock_change", {"product.id": "abc"}) as span:
        span.set_attribute("product.stock_quantity", 3)


@patch("inventory.core.tracing.settings.ENABLE_TRACING", False)
@patch("inventory.core.tracing.build_tracer_provider")
def test_setup_tracing_disabled(mock_configure):
    tracing.setup_tracing(FastAPI())
    mock_configure.assert_not_called()


@patch("inventory.core.tracing.settings.ENABLE_TRACING", True)
@patch("inventory.core.tracing.SQLAlchemyInstrumentor")
@patch("inventory.core.tracing.FastAPIInstrumentor")
@patch("inventory.core.tracing.build_tracer_provider")
def test_setup_tracing_instruments_app_and_engine(mock_configure, mock_fastapi, mock_sqlalchemy):
    provider = MagicMock()
    mock_configure.return_value = provider
    app = FastAPI()

    tracing.setup_tracing(app)

    mock_fastapi.instrument_app.assert_called_once()
    assert mock_fastapi.instrument_app.call_args.args[0] is app
    mock_sqlalchemy.return_value.instrument.assert_called_once()


@patch("inventory.core.tracing.settings.ENABLE_TRACING", True)
@patch("inventory.core.tracing.logger")
@patch("inventory.core.tracing.build_tracer_provider", side_effect=RuntimeError("no exporter"))
def test_setup_tracing_logs_failures(mock_configure, mock_logger):
    tracing.setup_tracing(FastAPI())
    mock_logger.error.assert_called_once()
