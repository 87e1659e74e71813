"""
Base class for provider loaders.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import threading

from commonprovider.core.data import ProviderData
from commonprovider.core.errors import ProviderConfigurationError
from commonprovider.core.logging import get_logger, load_context

logger = get_logger(__name__)


class ProviderLoaderBase(ABC):
    """Base class for provider loaders.

    Subclasses implement perform_load(); load() calls it once and caches the
    result until refresh() is called. A failed load is not cached.
    """

    def __init__(self):
        self._data: Optional[ProviderData] = None
        self._lock = threading.Lock()

    @abstractmethod
    def perform_load(self) -> ProviderData:
        """Load provider information.

        Returns:
            The loaded provider data
        """
        pass

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    def load(self) -> ProviderData:
        """Get the provider data, loading it on first use.

        Returns:
            The loaded provider data
        """
        with self._lock:
            if self._data is None:
                self._data = self._load()
            return self._data

    def refresh(self) -> ProviderData:
        """Discard the cached provider data and load it again.

        If the reload fails the previously cached data is discarded as well.

        Returns:
            The reloaded provider data
        """
        with self._lock:
            self._data = None
            self._data = self._load()
            return self._data

    def log_context(self) -> Dict[str, Any]:
        """Extra load context for this loader's log records."""
        return {}

    def _load(self) -> ProviderData:
        loader_name = type(self).__name__
        with load_context(loader=loader_name, **self.log_context()):
            try:
                data = self.perform_load()
            except ProviderConfigurationError:
                logger.error(f"{loader_name} failed to load providers", exc_info=True)
                raise
            logger.info(f"{loader_name} loaded {len(data)} provider(s)")
        return data
