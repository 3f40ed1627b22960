"""
Archiver connection settings.
"""

from dataclasses import dataclass
from typing import Any, Dict, TYPE_CHECKING

from ..core.errors import ConfigError

if TYPE_CHECKING:
    from ..core.config import Config


@dataclass(frozen=True)
class ArchiverSettings:
    """Host and ports of an Archiver Appliance, resolved once per batch."""

    server: str
    manage_port: str
    data_port: str

    @property
    def data_url(self) -> str:
        return f"http://{self.server}:{self.data_port}"

    @property
    def manage_url(self) -> str:
        return f"http://{self.server}:{self.manage_port}"

    @classmethod
    def from_dict(cls, json_data: Any) -> "ArchiverSettings":
        """
        Build settings from the datasource JSON ({server, managePort, dataPort}).

        Raises:
            ConfigError: If the settings are missing or malformed
        """
        if not isinstance(json_data, dict):
            raise ConfigError(f"Error reading settings: expected an object, got {type(json_data).__name__}")

        values: Dict[str, str] = {}
        for key in ("server", "managePort", "dataPort"):
            value = json_data.get(key)
            if isinstance(value, bool) or not isinstance(value, (str, int)) or value == "":
                raise ConfigError(f"Error reading settings: missing or invalid '{key}'")
            values[key] = str(value)

        for key in ("managePort", "dataPort"):
            if not values[key].isdigit():
                raise ConfigError(f"Error reading settings: '{key}' must be a port number")

        return cls(
            server=values["server"],
            manage_port=values["managePort"],
            data_port=values["dataPort"],
        )

    @classmethod
    def from_config(cls, config: "Config") -> "ArchiverSettings":
        return cls(
            server=config.server,
            manage_port=config.manage_port,
            data_port=config.data_port,
        )
