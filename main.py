"""
Main entry point for the quote fetcher.
Fetches the quotes once, prints each with its author, then exits.
"""

import asyncio
import argparse
import dataclasses
from typing import Iterable, List, Optional, Sequence, TextIO

from utils import main_logger, config_manager, initialize_logging, UnifiedConfigManager
from data_manager import DataManager
from data_sources.models import Quote
from data_sources.strangerthings_source import StrangerThingsSource


NO_QUOTES_MESSAGE = "No quotes found."


def print_quotes(quotes: Iterable[Quote], output: Optional[TextIO] = None) -> int:
    """
    打印名言列表

    每条名言输出两行：名言内容和 "-- 作者"；列表为空时输出一行提示。

    Returns:
        int: 输出的行数
    """
    lines = 0
    for current_quote in quotes:
        print(current_quote.quote, file=output)
        print(f"-- {current_quote.author}", file=output)
        lines += 2

    if lines == 0:
        print(NO_QUOTES_MESSAGE, file=output)
        lines = 1
    return lines


async def run_quotes(manager: DataManager, output: Optional[TextIO] = None) -> List[Quote]:
    """获取名言并打印，等待全部输出完成后返回"""
    async with manager:
        quotes = await manager.fetch()

    print_quotes(quotes, output)
    return quotes


def create_parser() -> argparse.ArgumentParser:
    """创建命令行解析器"""
    parser = argparse.ArgumentParser(
        description='Fetch Stranger Things quotes and print them with their authors'
    )
    parser.add_argument('--endpoint', type=str, help='覆盖配置中的接口地址')
    parser.add_argument('--count', type=int, help='获取的名言数量（生成接口地址，与 --endpoint 互斥）')
    parser.add_argument('--check-status', action='store_true',
                        help='把4xx/5xx响应视为网络错误，而不是尝试解码响应体')
    parser.add_argument('--config-dir', type=str, help='配置目录 (默认: 项目根目录下的 config)')
    return parser


def build_source_config(args: argparse.Namespace, manager: UnifiedConfigManager):
    """合并配置文件与命令行参数"""
    config = manager.get_quote_source_config()

    overrides = {}
    if args.endpoint:
        overrides['endpoint'] = args.endpoint
    elif args.count is not None:
        overrides['endpoint'] = StrangerThingsSource.endpoint_for(args.count)
    if args.check_status:
        overrides['check_status'] = True

    return dataclasses.replace(config, **overrides) if overrides else config


async def main(argv: Optional[Sequence[str]] = None, output: Optional[TextIO] = None) -> List[Quote]:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.endpoint and args.count is not None:
        parser.error("--endpoint and --count cannot be used together")
    if args.count is not None and args.count < 1:
        parser.error("--count must be a positive integer")

    manager = UnifiedConfigManager(args.config_dir) if args.config_dir else config_manager
    initialize_logging(manager=manager)

    source_config = build_source_config(args, manager)
    main_logger.info(f"[Main] Fetching quotes from {source_config.endpoint}")

    quotes = await run_quotes(DataManager(config=source_config, output=output), output)
    main_logger.info(f"[Main] Printed {len(quotes)} quotes")
    return quotes


def run():
    """控制台脚本入口"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        main_logger.info("[Main] Received keyboard interrupt")


if __name__ == "__main__":
    run()
