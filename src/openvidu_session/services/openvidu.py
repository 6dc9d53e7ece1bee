"""
OpenVidu 入口

构建 Basic 鉴权头、持有共享的 aiohttp 会话，并创建 SessionClient。
SessionClient 只接收这里构建好的 Authorization 值。
"""

import base64
import logging

import aiohttp

from openvidu_session.config import OpenViduConfig
from openvidu_session.core.properties import SessionProperties
from openvidu_session.core.session import SessionClient, normalize_timeout

logger = logging.getLogger(__name__)


def basic_authorization(username: str, secret: str) -> str:
    """构建 Basic 鉴权头值"""
    credential = base64.b64encode(f"{username}:{secret}".encode("utf-8"))
    return "Basic " + credential.decode("ascii")


class OpenVidu:
    """OpenVidu 服务端入口，管理由它创建的会话"""

    def __init__(
        self,
        hostname: str | None = None,
        port: int | None = None,
        secret: str | None = None,
        username: str | None = None,
        timeout: float | None = None,
        config: OpenViduConfig | None = None,
        http: aiohttp.ClientSession | None = None,
    ):
        """
        初始化入口

        参数:
            hostname: 服务端主机名，默认从环境变量 OPENVIDU_HOST 获取
            port: 服务端端口，默认从环境变量 OPENVIDU_PORT 获取
            secret: 服务端密钥，默认从环境变量 OPENVIDU_SECRET 获取
            username: Basic 鉴权用户名，默认 OPENVIDUAPP
            timeout: 请求截止时间（秒），默认从环境变量 OPENVIDU_TIMEOUT 获取，<= 0 表示不限
            config: 预先构建的配置，替代环境变量
            http: 共享的 aiohttp 会话；不传则首次使用时自建，并由 aclose() 关闭
        """
        config = config or OpenViduConfig.from_env()
        self.hostname = hostname or config.host
        self.port = port or config.port
        self.username = username or config.username
        self.timeout = normalize_timeout(
            config.request_timeout if timeout is None else timeout
        )
        self._secret = secret or config.require_secret()

        self._http = http
        self._owns_http = http is None
        self.active_sessions: dict[str, SessionClient] = {}

    @property
    def authorization(self) -> str:
        return basic_authorization(self.username, self._secret)

    def session(self, properties: SessionProperties | None = None) -> SessionClient:
        """构建一个未绑定的 SessionClient，不发请求（需在事件循环内调用）"""
        return SessionClient(
            self.hostname,
            self.port,
            self.authorization,
            properties,
            http=self._get_http(),
            timeout=self.timeout,
        )

    async def create_session(
        self, properties: SessionProperties | None = None
    ) -> SessionClient:
        """
        创建（或复用）服务端会话

        返回:
            已绑定 session_id 的 SessionClient
        """
        client = self.session(properties)
        session_id = await client.ensure_session_id()
        self.active_sessions[session_id] = client
        return client

    def get_active_sessions(self) -> list[SessionClient]:
        return list(self.active_sessions.values())

    async def aclose(self):
        if self._owns_http and self._http is not None:
            await self._http.close()
            self._http = None
            logger.info("OpenVidu HTTP 会话已关闭")

    async def __aenter__(self) -> "OpenVidu":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    def _get_http(self) -> aiohttp.ClientSession:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self._http
