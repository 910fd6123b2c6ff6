# Program: Logicbridge Package Init
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Serial logic-analyzer bridge: command encoding, record framing, push and rendering."""

from .bridge import DeviceBridge, DeviceLink, open_serial
from .config import AppConfig, load_config
from .dispatch import RecordDispatcher
from .encoder import (
    DecodedCommand,
    decode_command,
    describe_mode,
    encode_command,
    estimated_runtime,
    mode_code,
    normalize_sample_limit,
    validate,
)
from .errors import (
    BridgeError,
    CaptureInProgressError,
    CommandSyntaxError,
    ConfigurationError,
    ConnectionLostError,
    DeviceNotReadyError,
    InvalidConfigurationError,
    SampleLimitError,
)
from .framing import LineFramer
from .models import Configuration, Edge, SampleRecord, TimeUnit
from .protocol import ParserState, ProtocolParser
from .render import ImageSurface, SvgSurface, Viewport, channel_trace, render_record

__all__ = [
    "AppConfig",
    "BridgeError",
    "CaptureInProgressError",
    "CommandSyntaxError",
    "Configuration",
    "ConfigurationError",
    "ConnectionLostError",
    "DecodedCommand",
    "DeviceBridge",
    "DeviceLink",
    "DeviceNotReadyError",
    "Edge",
    "ImageSurface",
    "InvalidConfigurationError",
    "LineFramer",
    "ParserState",
    "ProtocolParser",
    "RecordDispatcher",
    "SampleLimitError",
    "SampleRecord",
    "SvgSurface",
    "TimeUnit",
    "Viewport",
    "channel_trace",
    "decode_command",
    "describe_mode",
    "encode_command",
    "estimated_runtime",
    "load_config",
    "mode_code",
    "normalize_sample_limit",
    "open_serial",
    "render_record",
    "validate",
]

# Created by Dr. Z. Bakhtiyorov
