"""
会话配置与请求体构建

缺省字段统一在 build_session_request / build_token_request 中替换为默认值，
SessionProperties 与 TokenOptions 本身只读、从不修改。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from openvidu_session.core.enums import MediaMode, OpenViduRole, RecordingLayout, RecordingMode

# 创建会话请求的默认值
DEFAULT_MEDIA_MODE = MediaMode.ROUTED.value
DEFAULT_RECORDING_MODE = RecordingMode.MANUAL.value
DEFAULT_RECORDING_LAYOUT = RecordingLayout.BEST_FIT.value
DEFAULT_CUSTOM_LAYOUT = ""
DEFAULT_CUSTOM_SESSION_ID = ""

# 生成 Token 请求的默认值
DEFAULT_ROLE = OpenViduRole.PUBLISHER.value
DEFAULT_TOKEN_DATA = ""


@dataclass(frozen=True)
class SessionProperties:
    """会话配置，所有字段可选"""

    media_mode: Optional[str] = None
    recording_mode: Optional[str] = None
    default_recording_layout: Optional[str] = None
    default_custom_layout: Optional[str] = None
    custom_session_id: Optional[str] = None


@dataclass(frozen=True)
class TokenOptions:
    """Token 选项"""

    role: Optional[str] = None
    data: Optional[str] = None  # 透传给客户端的元数据


def _or_default(value: Any, default: str) -> str:
    # None 与空字符串都视为未设置
    if not value:
        return default
    if isinstance(value, Enum):
        return value.value
    return value


def build_session_request(properties: Optional[SessionProperties]) -> dict:
    """
    构建 POST /api/sessions 请求体

    Args:
        properties: 会话配置，None 等同于全部缺省

    Returns:
        已替换默认值的请求体字典
    """
    properties = properties or SessionProperties()
    return {
        "mediaMode": _or_default(properties.media_mode, DEFAULT_MEDIA_MODE),
        "recordingMode": _or_default(properties.recording_mode, DEFAULT_RECORDING_MODE),
        "defaultRecordingLayout": _or_default(
            properties.default_recording_layout, DEFAULT_RECORDING_LAYOUT
        ),
        "defaultCustomLayout": _or_default(
            properties.default_custom_layout, DEFAULT_CUSTOM_LAYOUT
        ),
        "customSessionId": _or_default(
            properties.custom_session_id, DEFAULT_CUSTOM_SESSION_ID
        ),
    }


def build_token_request(
    session_id: Optional[str], options: Optional[TokenOptions] = None
) -> dict:
    """构建 POST /api/tokens 请求体，session_id 未绑定时原样发送 None"""
    options = options or TokenOptions()
    return {
        "session": session_id,
        "role": _or_default(options.role, DEFAULT_ROLE),
        "data": _or_default(options.data, DEFAULT_TOKEN_DATA),
    }
