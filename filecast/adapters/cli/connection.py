"""
SSH connection factory used by `filecast apply`
"""
from typing import Dict, Any

from ...core.interfaces import ConnectionFactory
from ...core.client import RemoteClient
from ...core.constants import DEFAULT_SSH_PORT, DEFAULT_SSH_TIMEOUT
from ...core.exceptions import ConnectionError
from ...core.logging import get_logger

logger = get_logger(__name__)


class RemoteConnectionFactory(ConnectionFactory):
    """Builds a connected RemoteClient from resolved deploy-file parameters"""

    def create(self, params: Dict[str, Any]) -> RemoteClient:
        # A key wins over a password when both are configured
        client = RemoteClient(
            host=params["host"],
            user=params["user"],
            port=params.get("port", DEFAULT_SSH_PORT),
            auth_method="key" if params.get("key") else "password",
            password=params.get("password"),
            key_path=params.get("key"),
            timeout=params.get("timeout", DEFAULT_SSH_TIMEOUT),
        )
        logger.debug(f"Connecting to {params['user']}@{params['host']}:{client.config.port}")

        try:
            client.connect()
        except Exception as e:
            client.close()
            raise ConnectionError(f"Failed to connect to {params['host']}: {e}") from e
        return client
