"""
test_main.py

Tests for the command line front-end: argument parsing, API key resolution, output and
exit codes. EtherscanAPI is replaced by a mock so no request is made.
"""

import logging
import os

import pytest
import requests
from unittest.mock import Mock, patch

from etherscan_cli.api.exceptions import DecodeError, EmptyResultError, TransportError
from etherscan_cli.api.models import BalanceInfo, GasInfo, PriceInfo
from etherscan_cli.main import EXIT_API_ERROR, EXIT_OK, EXIT_USAGE, MAX_DECIMALS, main
from etherscan_cli.utils.config import reset_config

ADDRESS = "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae"
TOKEN = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


@pytest.fixture(autouse=True)
def working_directory(tmp_path, monkeypatch):
    """Run each test from an empty directory so no stray .env file is picked up"""
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    reset_config()


@pytest.fixture
def config():
    """Create a mock configuration object"""
    config = Mock()
    config.API_KEY = "env_key"
    config.PROTOCOL = "https"
    config.HOST = "api.etherscan.io"
    config.PORT = 0
    config.PATH = "/api"
    config.REQUEST_TIMEOUT = 10
    return config


@pytest.fixture
def api_class(config):
    """Patch the configuration and the API client used by the CLI"""
    with patch('etherscan_cli.main.get_config', return_value=config), \
            patch('etherscan_cli.main.EtherscanAPI') as mock_api_class:
        yield mock_api_class


class TestArguments:
    """Tests for argument handling"""

    def test_command_is_required(self, api_class):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == EXIT_USAGE

    def test_missing_api_key(self, api_class, config, capsys):
        config.API_KEY = ""

        with pytest.raises(SystemExit) as exc_info:
            main(["gas"])

        assert exc_info.value.code == EXIT_USAGE
        assert "API key is required" in capsys.readouterr().err
        api_class.assert_not_called()

    def test_api_key_flag_overrides_environment(self, api_class):
        api_class.return_value.get_gas.return_value = GasInfo(
            last_block="1", safe_gas_price="1", propose_gas_price="1",
            fast_gas_price="1", suggested_base_fee="1")

        assert main(["--api-key", "flag_key", "gas"]) == EXIT_OK
        assert api_class.call_args[1]["api_key"] == "flag_key"

    def test_environment_api_key_and_settings(self, api_class):
        api_class.return_value.get_eth_price.return_value = PriceInfo(eth_usd_price="1", eth_btc_price="2")

        main(["price"])

        api_class.assert_called_once_with(api_key="env_key", protocol="https", host="api.etherscan.io",
                                          port=0, path="/api", timeout=10)

    def test_negative_decimals(self, api_class):
        with pytest.raises(SystemExit) as exc_info:
            main(["balance", ADDRESS, "--decimals", "-1"])
        assert exc_info.value.code == EXIT_USAGE

    def test_decimals_above_uint256_width(self, api_class, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["balance", ADDRESS, "--decimals", "1000000000"])

        assert exc_info.value.code == EXIT_USAGE
        assert f"between 0 and {MAX_DECIMALS}" in capsys.readouterr().err
        api_class.assert_not_called()

    def test_largest_decimals_accepted(self, api_class, capsys):
        api_class.return_value.get_balance.return_value = BalanceInfo("1")

        assert main(["balance", ADDRESS, "--token", TOKEN, "--decimals", str(MAX_DECIMALS)]) == EXIT_OK
        assert capsys.readouterr().out.strip() == "0." + "0" * (MAX_DECIMALS - 1) + "1"


class TestDotenv:
    """Tests for loading settings from a .env file in the working directory"""

    def test_api_key_from_dotenv(self, working_directory):
        (working_directory / ".env").write_text("ETHERSCAN_API_KEY=from_dotenv\n")

        with patch.dict(os.environ, {}, clear=True), \
                patch('etherscan_cli.main.EtherscanAPI') as mock_api_class:
            mock_api_class.return_value.get_eth_price.return_value = PriceInfo(eth_usd_price="1", eth_btc_price="2")

            assert main(["price"]) == EXIT_OK

        assert mock_api_class.call_args[1]["api_key"] == "from_dotenv"

    def test_environment_wins_over_dotenv(self, working_directory):
        (working_directory / ".env").write_text("ETHERSCAN_API_KEY=from_dotenv\n")

        with patch.dict(os.environ, {"ETHERSCAN_API_KEY": "from_env"}, clear=True), \
                patch('etherscan_cli.main.EtherscanAPI') as mock_api_class:
            mock_api_class.return_value.get_eth_price.return_value = PriceInfo(eth_usd_price="1", eth_btc_price="2")

            main(["price"])

        assert mock_api_class.call_args[1]["api_key"] == "from_env"


class TestCommands:
    """Tests for the output of each command"""

    def test_gas(self, api_class, capsys):
        api_class.return_value.get_gas.return_value = GasInfo(
            last_block="100", safe_gas_price="10", propose_gas_price="12",
            fast_gas_price="15", suggested_base_fee="9.5")

        assert main(["gas"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "Safe Gas Price: 10 gwei" in out
        assert "Propose Gas Price: 12 gwei" in out
        assert "Fast Gas Price: 15 gwei" in out
        assert "Suggested Base Fee: 9.5 gwei" in out
        assert "Last Block: 100" in out

    def test_price(self, api_class, capsys):
        api_class.return_value.get_eth_price.return_value = PriceInfo(
            eth_usd_price="2030.12", eth_btc_price="0.05426")

        assert main(["price"]) == EXIT_OK

        out = capsys.readouterr().out
        assert "ETH/USD: 2030.12" in out
        assert "ETH/BTC: 0.05426" in out

    def test_native_balance_in_ether(self, api_class, capsys):
        api_class.return_value.get_balance.return_value = BalanceInfo("1500000000000000000")

        assert main(["balance", ADDRESS]) == EXIT_OK

        api_class.return_value.get_balance.assert_called_once_with(ADDRESS, None)
        assert capsys.readouterr().out.strip() == "1.5 ETH"

    def test_native_balance_raw(self, api_class, capsys):
        api_class.return_value.get_balance.return_value = BalanceInfo("1500000000000000000")

        main(["balance", ADDRESS, "--raw"])

        assert capsys.readouterr().out.strip() == "1500000000000000000"

    def test_token_balance_is_raw_by_default(self, api_class, capsys):
        api_class.return_value.get_balance.return_value = BalanceInfo("135499")

        assert main(["balance", ADDRESS, "--token", TOKEN]) == EXIT_OK

        api_class.return_value.get_balance.assert_called_once_with(ADDRESS, TOKEN)
        assert capsys.readouterr().out.strip() == "135499"

    def test_token_balance_with_decimals(self, api_class, capsys):
        api_class.return_value.get_balance.return_value = BalanceInfo("135499")

        main(["balance", ADDRESS, "--token", TOKEN, "--decimals", "6"])

        assert capsys.readouterr().out.strip() == "0.135499"


class TestErrors:
    """Tests for error reporting and exit codes"""

    @pytest.mark.parametrize("error", [
        TransportError("gas", ConnectionError("down")),
        DecodeError("gas", "not json"),
        EmptyResultError("gas", "0", "NOTOK", "Invalid API Key"),
    ])
    def test_api_errors_exit_with_1(self, api_class, capsys, error):
        api_class.return_value.get_gas.side_effect = error

        with patch('etherscan_cli.main.report_api_error') as mock_report:
            assert main(["gas"]) == EXIT_API_ERROR

        mock_report.assert_called_once_with(error, "gas")
        assert str(error) in capsys.readouterr().err

    def test_invalid_address(self, api_class, capsys):
        api_class.return_value.get_balance.side_effect = ValueError("Invalid Ethereum address format: 0x1")

        assert main(["balance", "0x1"]) == EXIT_USAGE
        assert "Invalid Ethereum address" in capsys.readouterr().err

    def test_sentry_is_closed(self, api_class):
        api_class.return_value.get_gas.side_effect = DecodeError("gas", "boom")

        with patch('etherscan_cli.main.init_sentry') as mock_init, \
                patch('etherscan_cli.main.close_sentry') as mock_close:
            main(["gas"])

        mock_init.assert_called_once()
        mock_close.assert_called_once()

    def test_api_key_not_printed_or_logged_on_connection_error(self, config, capsys, caplog):
        caplog.set_level(logging.DEBUG, logger="etherscan_cli.main")
        caplog.set_level(logging.DEBUG, logger="etherscan_cli.api.etherscan_api")
        failure = requests.ConnectionError(
            "HTTPSConnectionPool(host='api.etherscan.io', port=443): Max retries exceeded with url: "
            "/api?module=gastracker&action=gasoracle&apikey=SECRETKEY123& (Caused by NewConnectionError)")

        with patch('etherscan_cli.main.get_config', return_value=config), \
                patch('etherscan_cli.api.etherscan_api.requests.get', side_effect=failure):
            assert main(["--api-key", "SECRETKEY123", "gas"]) == EXIT_API_ERROR

        err = capsys.readouterr().err
        assert "SECRETKEY123" not in err
        assert "apikey=***&" in err
        assert "SECRETKEY123" not in caplog.text
        assert "Command 'gas' failed" in caplog.text
