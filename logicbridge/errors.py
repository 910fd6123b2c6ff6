# Program: Logicbridge Errors
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Exception hierarchy shared by the encoder, the bridge and the HTTP layer."""

from __future__ import annotations


class BridgeError(RuntimeError):
    """Base class for every error raised by logicbridge."""


class ConfigurationError(BridgeError, ValueError):
    """Raised when acquisition parameters cannot be turned into a command."""


class InvalidConfigurationError(ConfigurationError):
    """Raised when the trigger flags resolve to the reserved error mode."""


class SampleLimitError(ConfigurationError):
    """Raised when the sample limit is not a multiple of the capture block."""


class CommandSyntaxError(ConfigurationError):
    """Raised when a raw command string does not follow the device grammar."""


class DeviceNotReadyError(BridgeError):
    """Raised when a command is attempted before the device sent `initialized`."""


class CaptureInProgressError(BridgeError):
    """Raised when a command arrives while the previous capture is outstanding."""


class ConnectionLostError(BridgeError):
    """Raised when the device connection has failed and the bridge is unusable."""


# Created by Dr. Z. Bakhtiyorov
