"""
请求结果归类

每个请求的所有路径（成功、冲突复用、状态码错误、传输失败、构建失败）
都先归为一个 Outcome，再由 settle() 统一返回或抛出。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from openvidu_session.core.errors import (
    KIND_REMOTE_STATUS,
    KIND_REQUEST_SETUP,
    KIND_TRANSPORT,
    OpenViduError,
    RemoteStatusError,
    RequestSetupError,
    TransportError,
)

HTTP_OK = 200
HTTP_CONFLICT = 409


class OutcomeKind(Enum):
    SUCCESS = "success"
    CONFLICT_RECOVERED = "conflict_recovered"
    REMOTE_STATUS = KIND_REMOTE_STATUS
    TRANSPORT = KIND_TRANSPORT
    REQUEST_SETUP = KIND_REQUEST_SETUP


@dataclass(frozen=True)
class HttpReply:
    """服务端响应：状态码 + 解析后的 JSON（非 JSON 时为 None）"""

    status: int
    body: Any = None


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    value: Optional[str] = None
    error: Optional[OpenViduError] = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.CONFLICT_RECOVERED)

    @classmethod
    def failed(cls, error: OpenViduError) -> "Outcome":
        """把本地异常归入对应类别"""
        if isinstance(error, RequestSetupError):
            kind = OutcomeKind.REQUEST_SETUP
        elif isinstance(error, TransportError):
            kind = OutcomeKind.TRANSPORT
        else:
            kind = OutcomeKind.REMOTE_STATUS
        return cls(kind=kind, error=error)


def _error_detail(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("message")
        return str(message) if message else None
    return None


def from_reply(reply: HttpReply, conflict_value: Optional[str] = None) -> Outcome:
    """
    按状态码归类响应

    Args:
        reply: 服务端响应
        conflict_value: 409 时用于复用的标识；为空表示该请求不接受 409

    Returns:
        Outcome
    """
    if reply.status == HTTP_OK:
        value = reply.body.get("id") if isinstance(reply.body, dict) else None
        if not value:
            return Outcome(
                kind=OutcomeKind.REMOTE_STATUS,
                error=RemoteStatusError(reply.status, "response body has no 'id'"),
            )
        return Outcome(kind=OutcomeKind.SUCCESS, value=value)

    if reply.status == HTTP_CONFLICT and conflict_value:
        return Outcome(kind=OutcomeKind.CONFLICT_RECOVERED, value=conflict_value)

    return Outcome(
        kind=OutcomeKind.REMOTE_STATUS,
        error=RemoteStatusError(reply.status, _error_detail(reply.body)),
    )


def settle(outcome: Outcome) -> str:
    """成功类结果返回标识，其余抛出对应异常"""
    if outcome.ok:
        return outcome.value
    raise outcome.error
