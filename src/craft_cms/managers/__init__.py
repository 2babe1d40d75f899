"""Collection managers for posts, producers, animals and site images."""

from craft_cms.exceptions import (
    LocalStorageError,
    ManagerError,
    PostImportError,
    RecordNotFoundError,
    RecordValidationError,
)

from .animals import AnimalsManager, AnimalsState
from .base import CollectionManager, CollectionState, StoreCollectionManager, slugify
from .counters import ProducerCounterMaintainer
from .local_storage import LocalStorage
from .posts import STORAGE_KEY, PostsManager
from .producers import ProducersManager
from .site_images import SiteImagesManager

__all__ = [
    "AnimalsManager",
    "AnimalsState",
    "CollectionManager",
    "CollectionState",
    "LocalStorage",
    "LocalStorageError",
    "ManagerError",
    "PostImportError",
    "PostsManager",
    "ProducerCounterMaintainer",
    "ProducersManager",
    "RecordNotFoundError",
    "RecordValidationError",
    "STORAGE_KEY",
    "SiteImagesManager",
    "StoreCollectionManager",
    "slugify",
]
