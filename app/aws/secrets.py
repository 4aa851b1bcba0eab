"""
AWS Secrets Manager access for deployment credentials.

The secret is a JSON object; for this service it holds the Twitter consumer
pair and optionally the callback URL:
    {"consumer_key": "...", "consumer_secret": "...", "callback_url": "..."}
"""
import json
import logging
from typing import Any, Dict, Iterable

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

TWITTER_SECRET_KEYS = ("consumer_key", "consumer_secret")


class SecretsError(Exception):
    """Secret missing, unreadable, or lacking required keys."""


def fetch_secret_string(client, secret_name: str) -> str:
    try:
        response = client.get_secret_value(SecretId=secret_name)
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "Unknown")
        logger.error(f"Could not read secret {secret_name}: {code}")
        raise SecretsError(f"Secret {secret_name} unavailable ({code})") from e
    logger.info(f"Secret {secret_name} retrieved")
    return response["SecretString"]


def parse_secret(secret_string: str, required: Iterable[str] = TWITTER_SECRET_KEYS) -> Dict[str, Any]:
    try:
        data = json.loads(secret_string)
    except ValueError as e:
        raise SecretsError("Secret is not valid JSON") from e
    missing = [key for key in required if not data.get(key)]
    if missing:
        raise SecretsError(f"Secret is missing keys: {', '.join(missing)}")
    return data


def get_secret(secret_name: str, region_name: str = "us-east-1") -> Dict[str, Any]:
    """Fetch and parse a JSON secret holding the Twitter consumer credentials."""
    client = boto3.session.Session().client(service_name="secretsmanager", region_name=region_name)
    return parse_secret(fetch_secret_string(client, secret_name))
