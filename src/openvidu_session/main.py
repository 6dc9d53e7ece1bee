"""
CLI 入口模块
创建（或复用）OpenVidu 会话并输出一个 Token
"""

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from openvidu_session.config import ConfigError, OpenViduConfig
from openvidu_session.core.enums import MediaMode, OpenViduRole, RecordingMode
from openvidu_session.core.errors import OpenViduError
from openvidu_session.core.properties import SessionProperties, TokenOptions
from openvidu_session.services.openvidu import OpenVidu

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_CONFIG = 2

logger = logging.getLogger("openvidu_session")


def setup_logging(verbose: bool = False):
    """配置业务 logger，不向 root 传播，防止重复输出"""
    level = logging.DEBUG if verbose else logging.INFO

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.setLevel(level)
    logger.propagate = False
    if not logger.handlers:
        logger.addHandler(console_handler)

    # 屏蔽第三方库的冗余日志
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minih-openvidu",
        description="创建（或复用）OpenVidu 会话并生成 Token",
    )
    parser.add_argument("--host", help="服务端主机名（OPENVIDU_HOST）")
    parser.add_argument("--port", type=int, help="服务端端口（OPENVIDU_PORT）")
    parser.add_argument("--secret", help="服务端密钥（OPENVIDU_SECRET）")
    parser.add_argument("--custom-session-id", help="自定义会话 ID")
    parser.add_argument(
        "--media-mode", choices=[m.value for m in MediaMode], help="媒体路由模式"
    )
    parser.add_argument(
        "--recording-mode", choices=[m.value for m in RecordingMode], help="录制模式"
    )
    parser.add_argument(
        "--role", choices=[r.value for r in OpenViduRole], help="Token 角色"
    )
    parser.add_argument("--data", help="Token 元数据")
    parser.add_argument("--timeout", type=float, help="请求截止时间（秒），0 表示不限")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    return parser


async def run(args: argparse.Namespace, config: OpenViduConfig) -> dict:
    """创建会话并生成 Token，返回输出内容"""
    properties = SessionProperties(
        media_mode=args.media_mode,
        recording_mode=args.recording_mode,
        custom_session_id=args.custom_session_id,
    )
    options = TokenOptions(role=args.role, data=args.data)

    async with OpenVidu(
        hostname=args.host,
        port=args.port,
        secret=args.secret,
        timeout=args.timeout,
        config=config,
    ) as openvidu:
        session = await openvidu.create_session(properties)
        token = await session.create_token(options)

    return {"session": session.session_id, "token": token}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    setup_logging(args.verbose)

    try:
        config = OpenViduConfig.from_env()
        if not args.secret:
            config.require_secret()
    except ConfigError as e:
        logger.error(f"⚠️ 配置错误: {e}")
        return EXIT_CONFIG

    try:
        result = asyncio.run(run(args, config))
    except OpenViduError as e:
        logger.error(f"❌ OpenVidu 请求失败 [{e.kind}]: {e}")
        return EXIT_REQUEST_FAILED

    print(json.dumps(result))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
