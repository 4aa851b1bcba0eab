"""
Tests for reading the Twitter credentials secret from AWS Secrets Manager.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from app.aws.secrets import SecretsError, fetch_secret_string, parse_secret


class TestParseSecret:
    def test_valid_secret(self) -> None:
        data = parse_secret(json.dumps({"consumer_key": "k", "consumer_secret": "s", "callback_url": "https://x/cb"}))
        assert data["consumer_key"] == "k"
        assert data["callback_url"] == "https://x/cb"

    def test_missing_keys(self) -> None:
        with pytest.raises(SecretsError, match="consumer_secret"):
            parse_secret(json.dumps({"consumer_key": "k"}))

    def test_not_json(self) -> None:
        with pytest.raises(SecretsError):
            parse_secret("consumer_key=k")


class TestFetchSecret:
    def test_returns_secret_string(self) -> None:
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretString": "{}"}

        assert fetch_secret_string(client, "retodoku/twitter") == "{}"
        client.get_secret_value.assert_called_once_with(SecretId="retodoku/twitter")

    def test_client_error_becomes_secrets_error(self) -> None:
        client = MagicMock()
        client.get_secret_value.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "nope"}}, "GetSecretValue"
        )

        with pytest.raises(SecretsError, match="ResourceNotFoundException"):
            fetch_secret_string(client, "retodoku/twitter")
