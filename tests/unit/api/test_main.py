from unittest.mock import patch

from gateway.api import main as server
from gateway.config import GatewayConfig


def test_main_serves_app_on_configured_port():
    config = GatewayConfig(api_key="key", host="127.0.0.1", port=8123)

    with patch.object(server.GatewayConfig, "from_env", return_value=config), \
            patch.object(server, "configure_logging"), \
            patch.object(server.uvicorn, "run") as run:
        server.main()

    app = run.call_args.args[0]
    assert app.state.config is config
    assert run.call_args.kwargs == {"host": "127.0.0.1", "port": 8123}


def test_main_warns_without_api_key(caplog):
    with patch.object(server.GatewayConfig, "from_env", return_value=GatewayConfig()), \
            patch.object(server, "configure_logging"), \
            patch.object(server.uvicorn, "run"):
        server.main()

    assert "No Gemini API key configured" in caplog.text
