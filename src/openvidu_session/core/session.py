"""
OpenVidu 会话客户端

负责两件事：
1. ensure_session_id(): 在服务端创建（或复用）会话，得到 session_id
2. create_token(): 为当前会话生成访问 Token

session_id 只会被写入一次，之后 ensure_session_id() 直接返回缓存值，不再发请求。
"""

import asyncio
import logging
from enum import Enum

import aiohttp

from openvidu_session.core.errors import OpenViduError
from openvidu_session.core.outcome import Outcome, OutcomeKind, from_reply, settle
from openvidu_session.core.properties import (
    SessionProperties,
    TokenOptions,
    build_session_request,
    build_token_request,
)
from openvidu_session.services.connection import (
    API_SESSIONS,
    API_TOKENS,
    ConnectionContext,
)
from openvidu_session.services.http import post_json

logger = logging.getLogger(__name__)

# 单次请求默认截止时间（秒）
DEFAULT_TIMEOUT = 10.0


def normalize_timeout(timeout: float | None) -> float | None:
    """截止时间统一口径：None 或 <= 0 表示不限"""
    if timeout is None or timeout <= 0:
        return None
    return float(timeout)


def _consume_result(task: asyncio.Task):
    # 所有等待方都被取消后，创建任务的异常仍需被取出
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"会话创建任务失败: {task.exception()!r}")


class SessionState(Enum):
    UNBOUND = "unbound"  # 尚无 session_id
    BOUND = "bound"  # 已由服务端确认


class SessionClient:
    """单个远端会话"""

    def __init__(
        self,
        hostname: str,
        port: int,
        authorization: str,
        properties: SessionProperties | None = None,
        *,
        http: aiohttp.ClientSession | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        """
        初始化会话客户端

        参数:
            hostname: OpenVidu 服务端主机名
            port: 服务端端口
            authorization: 完整的 Authorization 请求头值
            properties: 会话配置，默认全部缺省
            http: 共享的 aiohttp 会话；不传则首次请求时自建，并由 aclose() 关闭
            timeout: 每次请求的默认截止时间（秒），None 或 <= 0 表示不限
        """
        self._connection = ConnectionContext(hostname, port, authorization)
        self.properties = properties or SessionProperties()
        self.timeout = normalize_timeout(timeout)

        self._http = http
        self._owns_http = http is None
        self._session_id: str | None = None
        self._creating: asyncio.Task | None = None

    def __repr__(self) -> str:
        return (
            f"SessionClient(hostname={self._connection.hostname!r}, "
            f"port={self._connection.port}, session_id={self._session_id!r})"
        )

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def connection(self) -> ConnectionContext:
        return self._connection

    @property
    def state(self) -> SessionState:
        return SessionState.BOUND if self._session_id else SessionState.UNBOUND

    @property
    def is_bound(self) -> bool:
        return self.state is SessionState.BOUND

    async def ensure_session_id(self, timeout: float | None = None) -> str:
        """
        获取会话 ID，尚未绑定时在服务端创建

        并发的首次调用共享同一个创建请求，截止时间以发起请求的那次调用为准。

        参数:
            timeout: 本次请求截止时间（秒），None 使用客户端配置，<= 0 表示不限

        返回:
            session_id

        异常:
            RemoteStatusError / TransportError / RequestTimeoutError / RequestSetupError
        """
        if self._session_id:
            return self._session_id

        if self._creating is None:
            self._creating = asyncio.ensure_future(
                self._create_session(self._resolve_timeout(timeout))
            )
            self._creating.add_done_callback(_consume_result)

        # shield: 单个等待方被取消时不影响其他等待方
        return await asyncio.shield(self._creating)

    async def create_token(
        self, options: TokenOptions | None = None, timeout: float | None = None
    ) -> str:
        """
        为当前会话生成 Token

        不会触发会话创建；未绑定时 session 字段以 null 发送，由服务端判定。

        参数:
            options: Token 选项（角色、元数据），默认 PUBLISHER + 空数据
            timeout: 本次请求截止时间（秒），None 使用客户端配置，<= 0 表示不限

        返回:
            Token 字符串
        """
        body = build_token_request(self._session_id, options)
        outcome = await self._post(API_TOKENS, body, self._resolve_timeout(timeout))
        token = settle(outcome)

        logger.info(f"Token 已生成: session={self._session_id}, role={body['role']}")
        return token

    async def aclose(self):
        """关闭自建的 HTTP 会话"""
        if self._owns_http and self._http is not None:
            await self._http.close()
            self._http = None

    async def __aenter__(self) -> "SessionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def _create_session(self, timeout: float | None) -> str:
        try:
            custom_id = self.properties.custom_session_id
            body = build_session_request(self.properties)
            outcome = await self._post(
                API_SESSIONS, body, timeout, conflict_value=custom_id
            )
            session_id = settle(outcome)

            if outcome.kind is OutcomeKind.CONFLICT_RECOVERED:
                logger.info(f"会话已存在，复用自定义 ID: {session_id}")
            else:
                logger.info(f"会话已创建: {session_id}")

            self._session_id = session_id
            return session_id
        finally:
            self._creating = None

    async def _post(
        self,
        path: str,
        body: dict,
        timeout: float | None,
        conflict_value: str | None = None,
    ) -> Outcome:
        url = self._connection.url(path)
        try:
            reply = await post_json(
                self._get_http(), url, body, self._connection.headers, timeout
            )
        except OpenViduError as e:
            logger.error(f"❌ 请求失败 [{e.kind}] POST {url}: {e}")
            return Outcome.failed(e)

        outcome = from_reply(reply, conflict_value=conflict_value)
        if outcome.kind is OutcomeKind.REMOTE_STATUS:
            logger.warning(f"⚠️ POST {url} 返回 {reply.status}")
        return outcome

    def _get_http(self) -> aiohttp.ClientSession:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self._http

    def _resolve_timeout(self, timeout: float | None) -> float | None:
        if timeout is None:
            return self.timeout
        return normalize_timeout(timeout)
