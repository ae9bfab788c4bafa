"""pyslots - in-process reactive container of named state slots."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyslots")
except PackageNotFoundError:
    __version__ = "0+local"
from pyslots.config import ContainerConfig
from pyslots.container import SlotContainer
from pyslots.exceptions import (
    InvalidPayloadError,
    NotificationDepthError,
    SlotKeyNotFoundError,
    SlotsConfigError,
    SlotsError,
)
from pyslots.schema import SlotSchema
from pyslots.state.binding import SelectorBinding
from pyslots.state.events import ChangeEvent, MutationKind
from pyslots.state.hydration import OnceHydrator
from pyslots.state.notifier import Subscription
from pyslots.state.scope import ScopedAccessor
from pyslots.state.snapshot import Snapshot

__all__ = [
    "__version__",
    "ChangeEvent",
    "ContainerConfig",
    "InvalidPayloadError",
    "MutationKind",
    "NotificationDepthError",
    "OnceHydrator",
    "ScopedAccessor",
    "SelectorBinding",
    "SlotContainer",
    "SlotKeyNotFoundError",
    "SlotSchema",
    "SlotsConfigError",
    "SlotsError",
    "Snapshot",
    "Subscription",
]
