"""
HTTP 请求模块 - 基于 aiohttp 的单次 JSON POST

所有失败都转换成 OpenViduError 子类抛出：
- 发送前失败 -> RequestSetupError
- 超时 -> RequestTimeoutError
- 已发送但无响应 -> TransportError
"""

import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from openvidu_session.core.errors import (
    RequestSetupError,
    RequestTimeoutError,
    TransportError,
)
from openvidu_session.core.outcome import HttpReply

logger = logging.getLogger(__name__)


def _parse_body(raw: bytes) -> Any:
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug(f"响应体不是 JSON: {text[:80]!r}")
        return None


async def _send(
    http: aiohttp.ClientSession, url: str, data: str, headers: dict
) -> HttpReply:
    async with http.post(url, data=data, headers=headers) as resp:
        raw = await resp.read()
        return HttpReply(status=resp.status, body=_parse_body(raw))


async def post_json(
    http: aiohttp.ClientSession,
    url: str,
    payload: dict,
    headers: dict,
    timeout: Optional[float] = None,
) -> HttpReply:
    """
    发送 JSON POST 请求

    Args:
        http: aiohttp 会话
        url: 完整请求地址
        payload: 请求体
        headers: 请求头
        timeout: 截止时间（秒），None 表示不限

    Returns:
        HttpReply，任何状态码都原样返回，由调用方归类
    """
    try:
        data = json.dumps(payload)
    except (TypeError, ValueError) as e:
        raise RequestSetupError(f"request body is not serializable: {e}") from e

    try:
        return await asyncio.wait_for(_send(http, url, data, headers), timeout)
    except aiohttp.ServerTimeoutError as e:
        # aiohttp 自身的读超时，不是调用方的截止时间
        raise TransportError(f"{type(e).__name__}: {e}") from e
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(timeout) from e
    except aiohttp.InvalidURL as e:
        raise RequestSetupError(f"invalid url: {e}") from e
    except aiohttp.ClientError as e:
        raise TransportError(f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        # 发送前 aiohttp 校验请求头，非法值抛 ValueError；响应体解码不会走到这里
        raise RequestSetupError(str(e)) from e
