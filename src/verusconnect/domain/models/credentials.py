"""RPC credentials for one daemon, with redacted views for logs and UIs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

LOOPBACK_HOST = "127.0.0.1"


class Credentials(BaseModel):
    """Connection secret for one daemon. The password never appears in repr/str."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)
    host: str = LOOPBACK_HOST
    port: int

    def sanitize_for_logging(self) -> str:
        return (
            f"Credentials {{ username: {self.username}, password: [REDACTED], "
            f"host: {self.host}, port: {self.port} }}"
        )

    def redacted(self) -> dict[str, Any]:
        """Public view: everything except the password."""
        return {
            "username": self.username,
            "host": self.host,
            "port": self.port,
            "has_password": bool(self.password),
        }

    def __str__(self) -> str:
        return self.sanitize_for_logging()
