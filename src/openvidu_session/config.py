"""
配置模块

从环境变量读取 OpenVidu 服务端配置；CLI 启动时会先加载 .env 文件。
"""

import os
from dataclasses import dataclass, field

from openvidu_session.core.session import DEFAULT_TIMEOUT, normalize_timeout

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 4443
DEFAULT_USERNAME = "OPENVIDUAPP"


class ConfigError(ValueError):
    """配置缺失或格式错误"""


@dataclass
class OpenViduConfig:
    """OpenVidu 服务端配置"""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    secret: str | None = field(default=None, repr=False)
    username: str = DEFAULT_USERNAME
    request_timeout: float | None = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "OpenViduConfig":
        """
        从环境变量构建配置

        环境变量:
        - OPENVIDU_HOST: 服务端主机名，默认 localhost
        - OPENVIDU_PORT: 服务端端口，默认 4443
        - OPENVIDU_SECRET: 服务端密钥，无默认值
        - OPENVIDU_USERNAME: Basic 鉴权用户名，默认 OPENVIDUAPP
        - OPENVIDU_TIMEOUT: 请求截止时间（秒），默认 10，<= 0 表示不限
        """
        port = _parse_number("OPENVIDU_PORT", int, DEFAULT_PORT)
        timeout = _parse_number("OPENVIDU_TIMEOUT", float, DEFAULT_TIMEOUT)

        return cls(
            host=os.environ.get("OPENVIDU_HOST", DEFAULT_HOST),
            port=port,
            secret=os.environ.get("OPENVIDU_SECRET") or None,
            username=os.environ.get("OPENVIDU_USERNAME", DEFAULT_USERNAME),
            request_timeout=normalize_timeout(timeout),
        )

    def require_secret(self) -> str:
        if not self.secret:
            raise ConfigError("OPENVIDU_SECRET 未设置")
        return self.secret


def _parse_number(name: str, cast, default):
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} 格式错误: {raw!r}") from e
