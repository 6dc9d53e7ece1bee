"""
OpenVidu 取值类型

服务端只认字符串，这里用 str 枚举给默认值起名字，
调用方直接传字符串也可以。
"""

from enum import Enum


class MediaMode(str, Enum):
    """媒体路由模式"""

    ROUTED = "ROUTED"  # 经由服务端转发
    RELAYED = "RELAYED"  # 端到端中继


class RecordingMode(str, Enum):
    """录制模式"""

    MANUAL = "MANUAL"  # 仅在请求时录制
    ALWAYS = "ALWAYS"  # 首个发布者出现即自动录制


class RecordingLayout(str, Enum):
    """合成录制的画面布局"""

    BEST_FIT = "BEST_FIT"
    PICTURE_IN_PICTURE = "PICTURE_IN_PICTURE"
    VERTICAL_PRESENTATION = "VERTICAL_PRESENTATION"
    HORIZONTAL_PRESENTATION = "HORIZONTAL_PRESENTATION"
    CUSTOM = "CUSTOM"


class OpenViduRole(str, Enum):
    """Token 角色（权限从低到高）"""

    SUBSCRIBER = "SUBSCRIBER"
    PUBLISHER = "PUBLISHER"
    MODERATOR = "MODERATOR"
