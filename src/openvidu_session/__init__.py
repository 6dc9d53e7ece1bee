"""
minih-openvidu 模块
OpenVidu 会话客户端 - 创建会话并生成访问 Token
"""

from openvidu_session.core.enums import (
    MediaMode,
    OpenViduRole,
    RecordingLayout,
    RecordingMode,
)
from openvidu_session.core.errors import (
    OpenViduError,
    RemoteStatusError,
    RequestSetupError,
    RequestTimeoutError,
    TransportError,
)
from openvidu_session.core.properties import SessionProperties, TokenOptions
from openvidu_session.core.session import SessionClient, SessionState
from openvidu_session.config import OpenViduConfig
from openvidu_session.services.openvidu import OpenVidu

__all__ = [
    "MediaMode",
    "OpenViduRole",
    "RecordingLayout",
    "RecordingMode",
    "OpenViduError",
    "RemoteStatusError",
    "RequestSetupError",
    "RequestTimeoutError",
    "TransportError",
    "SessionProperties",
    "TokenOptions",
    "SessionClient",
    "SessionState",
    "OpenViduConfig",
    "OpenVidu",
]

__version__ = "0.1.0"
