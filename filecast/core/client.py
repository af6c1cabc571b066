from __future__ import annotations
from dataclasses import dataclass
from typing import BinaryIO, Optional, Literal, Tuple
import paramiko
from pathlib import Path

from .constants import DEFAULT_SSH_PORT, DEFAULT_SSH_TIMEOUT, STREAM_CHUNK_SIZE
from .interfaces import Executor
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class ClientConfig:
    host: str
    user: str
    port: int = DEFAULT_SSH_PORT
    auth_method: Literal["password", "key"] = "password"
    password: Optional[str] = None
    key_path: Optional[str] = None
    timeout: int = DEFAULT_SSH_TIMEOUT


class RemoteClient(Executor):
    """
    Thin wrapper around paramiko's SSHClient:
    - keeps host / user / port explicitly
    - password and key login (RSA / Ed25519 keys are probed)
    - exec helpers, with optional stdin piping for send commands
    - usable as a context manager
    """
    def __init__(
        self,
        host: str,
        user: str,
        port: int = DEFAULT_SSH_PORT,
        auth_method: Literal["password", "key"] = "password",
        password: Optional[str] = None,
        key_path: Optional[str] = None,
        timeout: int = DEFAULT_SSH_TIMEOUT,
    ) -> None:
        self.config = ClientConfig(
            host=host,
            user=user,
            port=port,
            auth_method=auth_method,
            password=password,
            key_path=key_path,
            timeout=timeout,
        )

        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    # --------------------
    # Connection management
    # --------------------
    def connect(self) -> None:
        cfg = self.config

        if cfg.auth_method == "password":
            self.client.connect(
                hostname=cfg.host,
                port=cfg.port,
                username=cfg.user,
                password=cfg.password,
                timeout=cfg.timeout,
            )

        elif cfg.auth_method == "key":
            key = self._load_private_key(cfg.key_path)
            self.client.connect(
                hostname=cfg.host,
                port=cfg.port,
                username=cfg.user,
                pkey=key,
                timeout=cfg.timeout,
            )

        else:
            raise ValueError(f"Unsupported auth method: {cfg.auth_method}")

    def _load_private_key(self, path: str) -> paramiko.PKey:
        """Probe Ed25519 first, then RSA"""
        p = Path(path).expanduser()

        try:
            return paramiko.Ed25519Key.from_private_key_file(str(p))
        except Exception:
            try:
                return paramiko.RSAKey.from_private_key_file(str(p))
            except Exception as e:
                raise RuntimeError(f"Failed to load private key at {p}") from e

    # --------------------
    # Helpers
    # --------------------
    def exec_with_code(
        self, cmd: str, stdin: Optional[BinaryIO] = None
    ) -> Tuple[str, str, int]:
        """
        Execute command and return (stdout, stderr, exit_code).

        When ``stdin`` is given its bytes are copied verbatim to the remote
        command's standard input, then the write side is shut down so the
        remote ``cat -`` sees EOF.
        """
        chan_in, stdout, stderr = self.client.exec_command(cmd)

        if stdin is not None:
            self._feed_stdin(chan_in, stdin)

        out = stdout.read().decode("utf-8", errors="replace")
        err = stderr.read().decode("utf-8", errors="replace")
        exit_code = stdout.channel.recv_exit_status()
        return out, err, exit_code

    def _feed_stdin(self, chan_in: paramiko.ChannelFile, source: BinaryIO) -> None:
        """
        Copy source to the remote stdin in chunks, then send EOF.

        A remote command that exits early closes the channel; the write error
        is dropped so the caller gets the remote exit status and stderr.
        Errors reading the local source propagate.
        """
        for chunk in iter(lambda: source.read(STREAM_CHUNK_SIZE), b""):
            try:
                chan_in.write(chunk)
            except OSError as e:
                logger.debug(f"Remote stdin closed early: {e}")
                return

        try:
            chan_in.flush()
            chan_in.channel.shutdown_write()
        except OSError as e:
            logger.debug(f"Remote stdin closed early: {e}")

    def close(self) -> None:
        self.client.close()

    # --------------------
    # Context manager
    # --------------------
    def __enter__(self) -> RemoteClient:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
