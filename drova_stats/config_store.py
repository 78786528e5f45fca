"""
Host configuration store.

The Esme server agent keeps its state under HKLM\\SOFTWARE\\ITKey\\Esme:
``last_server`` names the active server id, and each server has its own
subkey holding ``auth_token``. Off Windows the same values can be supplied
through ESME_* environment variables.
"""
import os, sys
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from .models import Credentials

ESME_ROOT = r"SOFTWARE\ITKey\Esme"
ENV_PREFIX = "ESME_"


class ConfigStore(ABC):
    """get(path, key) -> str, or None when the value can't be read.

    Implementations log the reason for a None themselves.
    """

    @abstractmethod
    def get(self, path: str, key: str) -> Optional[str]:
        ...


class RegistryConfigStore(ConfigStore):
    """String values under HKEY_LOCAL_MACHINE, read with winreg."""

    def __init__(self, logger):
        self.logger = logger

    def get(self, path: str, key: str) -> Optional[str]:
        import winreg
        try:
            handle = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, path, 0, winreg.KEY_QUERY_VALUE)
        except OSError as e:
            self.logger.error(f"Failed to open registry key {path}: {e}")
            return None
        with handle:
            try:
                value, kind = winreg.QueryValueEx(handle, key)
            except OSError as e:
                self.logger.error(f"Failed to read {key} value from {path}: {e}")
                return None
        if kind not in (winreg.REG_SZ, winreg.REG_EXPAND_SZ):
            self.logger.error(f"Registry value {path}\\{key} is not a string (type {kind})")
            return None
        return value


class EnvConfigStore(ConfigStore):
    """ESME_<KEY> environment variables; the registry path is ignored."""

    def __init__(self, logger, environ: Optional[Mapping[str, str]] = None):
        self.logger = logger
        self.environ = os.environ if environ is None else environ

    def get(self, path: str, key: str) -> Optional[str]:
        name = ENV_PREFIX + key.upper()
        value = self.environ.get(name)
        if value is None:
            self.logger.error(f"Environment variable {name} is not set (wanted {path}\\{key})")
        return value


def default_store(logger) -> ConfigStore:
    if sys.platform == "win32":
        return RegistryConfigStore(logger)
    return EnvConfigStore(logger)


def read_string(store: ConfigStore, path: str, name: str, logger) -> str:
    # Lenient: an unreadable value becomes "" and the run carries on.
    value = store.get(path, name)
    if value is None:
        logger.debug(f"Using empty value for {name}")
        return ""
    return value


def get_credentials(store: ConfigStore, logger) -> Credentials:
    server_id = read_string(store, ESME_ROOT, "last_server", logger)
    server_path = ESME_ROOT + "\\servers\\" + server_id
    auth_token = read_string(store, server_path, "auth_token", logger)
    logger.debug(f"Server id: {server_id or '<empty>'}, token present: {bool(auth_token)}")
    return Credentials(server_id=server_id, auth_token=auth_token)
