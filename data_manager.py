"""
Data Manager for the quote system.
Owns the quote source and exposes both the tagged fetch result and a plain list adapter.
"""

from typing import List, Optional, TextIO

from utils import dm_logger, config_manager, QuoteSourceConfig
from data_sources.base_source import BaseDataSource
from data_sources.strangerthings_source import StrangerThingsSource
from data_sources.models import Quote, FetchResult


class DataManager:
    """名言数据管理器"""

    def __init__(self, source: Optional[BaseDataSource] = None,
                 config: Optional[QuoteSourceConfig] = None,
                 output: Optional[TextIO] = None):
        self.source = source
        self.config = config
        self.output = output
        self.last_result: Optional[FetchResult] = None
        self._in_context = False

    async def initialize(self):
        """初始化数据管理器"""
        if self.source is None:
            config = self.config or config_manager.get_quote_source_config()
            self.source = StrangerThingsSource(config=config, output=self.output)
        dm_logger.info(f"[DataManager] Using source {self.source.name} at {self.source.endpoint}")

    async def close(self):
        """关闭数据源"""
        if self.source is not None:
            await self.source.close()

    async def __aenter__(self):
        await self.initialize()
        self._in_context = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self._in_context = False
        await self.close()

    async def fetch_quotes(self) -> FetchResult:
        """
        获取名言，区分失败类型与合法的空结果

        不在 async with 中调用时，获取完成后即关闭数据源。
        """
        if not self._in_context:
            async with self:
                return await self._fetch_quotes()
        return await self._fetch_quotes()

    async def _fetch_quotes(self) -> FetchResult:
        result = await self.source.fetch_quotes()
        self.last_result = result
        if result.ok:
            dm_logger.info(f"[DataManager] Fetched {len(result.quotes)} quotes")
        else:
            dm_logger.warning(f"[DataManager] Fetch failed: {result.error.kind.value}")
        return result

    async def fetch(self) -> List[Quote]:
        """获取名言列表，失败时返回空列表（丢弃失败详情）"""
        result = await self.fetch_quotes()
        return result.quotes


async def fetch(config: Optional[QuoteSourceConfig] = None,
                output: Optional[TextIO] = None) -> List[Quote]:
    """便捷函数：获取一次名言列表"""
    async with DataManager(config=config, output=output) as manager:
        return await manager.fetch()
