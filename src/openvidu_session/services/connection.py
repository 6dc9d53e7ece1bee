"""
服务端连接参数
"""

from dataclasses import dataclass, field

API_SESSIONS = "/api/sessions"
API_TOKENS = "/api/tokens"


@dataclass(frozen=True)
class ConnectionContext:
    """
    OpenVidu 服务端地址与鉴权

    authorization 是调用方预先构建好的完整请求头值（如 "Basic xxx"），
    这里不做任何解析。
    """

    hostname: str
    port: int
    authorization: str = field(repr=False)

    def url(self, path: str) -> str:
        return f"https://{self.hostname}:{self.port}{path}"

    @property
    def headers(self) -> dict:
        return {
            "Authorization": self.authorization,
            "Content-Type": "application/json",
        }
