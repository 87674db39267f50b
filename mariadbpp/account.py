"""Account and connection settings used when connecting."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union

ConnectOptionValue = Union[bool, int, str]


@dataclass
class Account:
    """Connection information for a server.

    Changing an account after a connection has been established has no
    effect on that connection.
    """

    host_name: str
    user_name: str
    password: str
    schema: str = ""
    port: int = 3306
    unix_socket: str = ""
    auto_commit: bool = True
    store_result: bool = True
    ssl_key: str = ""
    ssl_certificate: str = ""
    ssl_ca: str = ""
    ssl_ca_path: str = ""
    ssl_cipher: str = ""
    _options: dict[str, str] = field(default_factory=dict, repr=False)
    _connect_options: dict[str, ConnectOptionValue] = field(
        default_factory=dict, repr=False
    )

    def set_ssl(
        self, key: str, certificate: str, ca: str, ca_path: str, cipher: str
    ) -> None:
        """Set the SSL key, certificate, CA file, CA directory and cipher list."""
        self.ssl_key = key
        self.ssl_certificate = certificate
        self.ssl_ca = ca
        self.ssl_ca_path = ca_path
        self.ssl_cipher = cipher

    @property
    def options(self) -> Mapping[str, str]:
        """Named session options, applied after connecting."""
        return MappingProxyType(self._options)

    def option(self, name: str) -> str:
        """Return the value of a named option, or an empty string if unset."""
        return self._options.get(name, "")

    def set_option(self, name: str, value: str) -> None:
        """Set a named session option."""
        self._options[name] = value

    def clear_options(self) -> None:
        """Remove all named session options."""
        self._options.clear()

    @property
    def connect_options(self) -> Mapping[str, ConnectOptionValue]:
        """Client options passed when the connection is opened."""
        return MappingProxyType(self._connect_options)

    def set_connect_option(self, option: str, value: ConnectOptionValue) -> None:
        """Set a client connect option; the value must be a bool, int or str."""
        if not isinstance(value, (bool, int, str)):
            raise TypeError(
                f"connect option {option!r} needs a bool, int or str value, "
                f"not {type(value).__name__}"
            )
        self._connect_options[option] = value

    def clear_connect_options(self) -> None:
        """Remove all client connect options."""
        self._connect_options.clear()