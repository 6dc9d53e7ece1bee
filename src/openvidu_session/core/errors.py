"""
OpenVidu 调用异常

所有异常都继承 OpenViduError，并通过 kind 区分失败类别。
"""

from typing import Optional

KIND_REMOTE_STATUS = "remote_status"
KIND_TRANSPORT = "transport"
KIND_TIMEOUT = "timeout"
KIND_REQUEST_SETUP = "request_setup"


class OpenViduError(Exception):
    """OpenVidu 调用失败"""

    kind: str = "openvidu"


class RemoteStatusError(OpenViduError):
    """
    服务端返回了非成功状态码

    异常消息就是状态码本身，例如 str(err) == "500"。
    """

    kind = KIND_REMOTE_STATUS

    def __init__(self, status: int, detail: Optional[str] = None):
        super().__init__(str(status))
        self.status = status
        self.detail = detail


class TransportError(OpenViduError):
    """请求已发出但没有收到响应"""

    kind = KIND_TRANSPORT


class RequestTimeoutError(TransportError):
    """超过调用截止时间"""

    kind = KIND_TIMEOUT

    def __init__(self, timeout: Optional[float]):
        super().__init__(f"no response within {timeout}s")
        self.timeout = timeout


class RequestSetupError(OpenViduError):
    """请求在发出前就构建失败（序列化、URL、请求头等）"""

    kind = KIND_REQUEST_SETUP
