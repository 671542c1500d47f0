"""statebus - single-writer state notification bus."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("statebus")
except PackageNotFoundError:
    __version__ = "0+local"
from statebus.bus import NotificationBus
from statebus.config import BusConfig
from statebus.emitter import Emitter
from statebus.exceptions import (
    DuplicateRegistrationError,
    InvalidArgumentError,
    ReentrancyViolationError,
    StateBusError,
)
from statebus.freeze import FrozenDict, freeze, is_plain_object
from statebus.model import Model
from statebus.notification import INIT_NOTIFIER_NAME, Change, Notification
from statebus.notifiers import NotifierRegistry, attribute_reducer
from statebus.publisher import Publisher, topic_for
from statebus.store import DispatchStatus, Store

__all__ = [
    "__version__",
    "INIT_NOTIFIER_NAME",
    "BusConfig",
    "Change",
    "DispatchStatus",
    "DuplicateRegistrationError",
    "Emitter",
    "FrozenDict",
    "InvalidArgumentError",
    "Model",
    "Notification",
    "NotificationBus",
    "NotifierRegistry",
    "Publisher",
    "ReentrancyViolationError",
    "StateBusError",
    "Store",
    "attribute_reducer",
    "freeze",
    "is_plain_object",
    "topic_for",
]
