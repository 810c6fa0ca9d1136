import json, logging, os, tempfile
from pathlib import Path
from threading import Lock
from typing import Protocol, Union

logger = logging.getLogger(__name__)

PREFERENCES_NAMESPACE = 'geocoder.preferences'
KEY_ALLOW = 'allowed_date'

class AllowedDateStore(Protocol):
    """Earliest moment (epoch milliseconds) a new request may be sent; 0 means no restriction."""

    def get(self) -> int: ...

    def set(self, value: int) -> None: ...

class InMemoryAllowedDateStore:
    def __init__(self, value: int = 0):
        self.__value: int = value

    def get(self) -> int:
        return self.__value

    def set(self, value: int) -> None:
        self.__value = value

class FileAllowedDateStore:
    FILE_ENCODING: str = 'utf-8'

    def __init__(self, filepath: Union[str, Path], namespace: str = PREFERENCES_NAMESPACE):
        self.filepath: Path = Path(filepath)
        self.namespace: str = namespace
        self.__lock = Lock()

    def get(self) -> int:
        preferences = self.__read().get(self.namespace)
        if not isinstance(preferences, dict):
            return 0
        value = preferences.get(KEY_ALLOW, 0)
        return value if isinstance(value, int) else 0

    def set(self, value: int) -> None:
        with self.__lock:
            document = self.__read()
            document[self.namespace] = {KEY_ALLOW: int(value)}
            self.__write(document)

    def __read(self) -> dict:
        if not self.filepath.is_file():
            return {}
        try:
            with open(self.filepath, 'r', encoding=self.FILE_ENCODING) as file:
                document = json.load(file)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read quota state from {self.filepath}: {e}")
            return {}
        return document if isinstance(document, dict) else {}

    def __write(self, document: dict) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.filepath.parent, prefix=f'.{self.filepath.name}.')
        try:
            with os.fdopen(fd, 'w', encoding=self.FILE_ENCODING) as file:
                json.dump(document, file)
            os.replace(tmp_path, self.filepath)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
