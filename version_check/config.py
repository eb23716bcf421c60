import configparser
import logging
import os
from dataclasses import dataclass

from version_check import VERSION_CHECK_PATH
from version_check.registry import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT

_CONFIG_PATH = VERSION_CHECK_PATH.joinpath("config.ini")

logger = logging.getLogger(__name__)

REGISTRY_URL_ENV = "VERSION_CHECK_REGISTRY_URL"


@dataclass
class Config:
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int = 10
    trust_publication_order: bool = False

    def __post_init__(self):
        if env_url := os.environ.get(REGISTRY_URL_ENV):
            self.registry_url = env_url

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {self.max_concurrency}")

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file."""
        if not _CONFIG_PATH.exists():
            raise FileNotFoundError(f"Config file not found at {_CONFIG_PATH}")

        parser = configparser.ConfigParser()
        parser.read(_CONFIG_PATH)
        return cls(
            registry_url=parser.get('DEFAULT', 'registry_url', fallback=DEFAULT_REGISTRY_URL),
            timeout=parser.getfloat('DEFAULT', 'timeout', fallback=DEFAULT_TIMEOUT),
            max_concurrency=parser.getint('DEFAULT', 'max_concurrency', fallback=10),
            trust_publication_order=parser.getboolean(
                'DEFAULT', 'trust_publication_order', fallback=False
            ),
        )

    @classmethod
    def load_or_default(cls) -> "Config":
        """Configuration from file, or defaults when it is missing or unreadable."""
        try:
            return cls.load()
        except FileNotFoundError:
            return cls()
        except (ValueError, configparser.Error) as e:
            logger.warning(f"Ignoring invalid config at {_CONFIG_PATH}: {e}")
            return cls()

    def save(self):
        """Save configuration to file."""
        parser = configparser.ConfigParser()
        parser['DEFAULT'] = {
            'registry_url': self.registry_url,
            'timeout': str(self.timeout),
            'max_concurrency': str(self.max_concurrency),
            'trust_publication_order': str(self.trust_publication_order).lower(),
        }

        _CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(_CONFIG_PATH, 'w') as f:
            parser.write(f)
