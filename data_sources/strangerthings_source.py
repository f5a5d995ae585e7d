"""
Stranger Things quotes data source.
Endpoint documentation: https://github.com/shadowoff09/strangerthings-quotes
"""

from typing import List, Optional, TextIO

import aiohttp

from .base_source import BaseDataSource
from .models import Quote, decode_quotes
from utils import QuoteSourceConfig, DEFAULT_QUOTES_ENDPOINT


class StrangerThingsConstants:
    """Stranger Things 数据源的常量"""
    ENDPOINT = DEFAULT_QUOTES_ENDPOINT
    # /api/quotes/{count} 返回指定数量的随机名言
    ENDPOINT_TEMPLATE = DEFAULT_QUOTES_ENDPOINT.rsplit('/', 1)[0] + "/{count}"


class StrangerThingsSource(BaseDataSource):
    """Stranger Things 名言数据源"""

    def __init__(self, name: str = "StrangerThings", config: QuoteSourceConfig = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 output: Optional[TextIO] = None):
        super().__init__(
            name,
            config or QuoteSourceConfig(endpoint=StrangerThingsConstants.ENDPOINT),
            session=session,
            output=output
        )

    @staticmethod
    def endpoint_for(count: int) -> str:
        """返回获取 count 条名言的接口地址"""
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        return StrangerThingsConstants.ENDPOINT_TEMPLATE.format(count=count)

    def decode(self, body: bytes) -> List[Quote]:
        return decode_quotes(body)
