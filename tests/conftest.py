import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

from verusconnect.domain.models.credentials import Credentials


class MemoryKeyring(KeyringBackend):
    """Process-local keyring backend for tests."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.entries: dict[tuple[str, str], str] = {}

    def get_password(self, service, username):
        return self.entries.get((service, username))

    def set_password(self, service, username, password):
        self.entries[(service, username)] = password

    def delete_password(self, service, username):
        if self.entries.pop((service, username), None) is None:
            raise PasswordDeleteError(f"{username} not found")


@pytest.fixture()
def memory_keyring():
    return MemoryKeyring()


@pytest.fixture()
def credentials():
    return Credentials(username="alice", password="secret", port=27486)


@pytest.fixture()
def write_conf():
    def _write(path, body: str):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)
        return path

    return _write
