"""可插拔流变换器：将原始数据块增量解析为条目，并将条目序列化回数据块。

data-transform: incremental, pluggable stream transforms.

A transform buffers raw chunks and control markers, parses them into items
one at a time (take_one) or greedily (take_all), and serializes items back
into chunks (emit).
"""
from __future__ import annotations

from data_transform.base import Transform, is_transform, transfer_pending
from data_transform.config import (
    TransformSettings,
    configure_logging,
    get_settings,
    set_settings,
)
from data_transform.errors import (
    ConfigError,
    ErrorContext,
    TransformConfigError,
    TransformError,
)
from data_transform.markers import (
    ControlMarker,
    EndOfStream,
    SendBack,
    StreamError,
    is_marker,
)

__version__ = "0.3.0"

__all__ = [
    # Errors
    "ConfigError",
    # Markers
    "ControlMarker",
    "EndOfStream",
    "ErrorContext",
    "SendBack",
    "StreamError",
    # Core
    "Transform",
    "TransformConfigError",
    "TransformError",
    # Settings
    "TransformSettings",
    "__version__",
    "configure_logging",
    "get_settings",
    "is_marker",
    "is_transform",
    "set_settings",
    "transfer_pending",
]
