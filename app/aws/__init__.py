"""
AWS integrations layer.
"""
from app.aws.secrets import SecretsError, get_secret

__all__ = [
    "SecretsError",
    "get_secret",
]
