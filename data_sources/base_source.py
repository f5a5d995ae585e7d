"""
base data source class for the quote system.
Provides the HTTP session lifecycle and the fetch-and-decode flow shared by all quote sources.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, TextIO

import aiohttp
from yarl import URL

from utils import ds_logger, data_source_metrics, LogContext, QuoteSourceConfig
from utils.exceptions import (
    InvalidEndpointError, NetworkError, DecodeError, ErrorCodes
)
from .models import Quote, FetchErrorKind, FetchResult


# 诊断输出（写入输出流，不是返回值）
INVALID_ADDRESS_MESSAGE = "Invalid address"
FETCH_FAILED_MESSAGE = "Count not retrieve data from endpoint, or could not decode data."
DIAGNOSTIC_SEPARATOR = "----"


class BaseDataSource(ABC):
    """数据源基类"""

    def __init__(self, name: str, config: QuoteSourceConfig = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 output: Optional[TextIO] = None):
        self.name = name
        self.config = config or QuoteSourceConfig()
        self.session = session
        # 外部传入的会话由调用方负责关闭
        self._owns_session = session is None
        self.output = output
        self.is_initialized = False
        self.request_count = 0
        self.failure_count = 0

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    async def initialize(self):
        """初始化数据源"""
        if not self.is_initialized:
            ds_logger.info(f"[{self.name}] Initializing data source...")
            await self._initialize_impl()
            self.is_initialized = True
            ds_logger.info(f"[{self.name}] data source initialized successfully")

    async def _initialize_impl(self):
        """创建HTTP会话，未配置超时则使用aiohttp默认值"""
        if self.session is None:
            if self.config.timeout is not None:
                timeout = aiohttp.ClientTimeout(total=self.config.timeout)
                self.session = aiohttp.ClientSession(timeout=timeout)
            else:
                self.session = aiohttp.ClientSession()
            self._owns_session = True

    async def close(self):
        """关闭数据源连接"""
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None
        self.is_initialized = False
        ds_logger.info(f"[{self.name}] data source closed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @staticmethod
    def build_url(endpoint: str) -> URL:
        """
        解析接口地址

        Raises:
            InvalidEndpointError: 地址无法解析、不是http(s)或缺少主机名
        """
        try:
            url = URL(endpoint)
        except (TypeError, ValueError) as e:
            raise InvalidEndpointError(
                f"Cannot parse endpoint {endpoint!r}: {e}",
                ErrorCodes.DATASOURCE_INVALID_ENDPOINT,
                context={'endpoint': endpoint}
            ) from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidEndpointError(
                f"Endpoint is not an absolute http(s) URL: {endpoint!r}",
                ErrorCodes.DATASOURCE_INVALID_ENDPOINT,
                context={'endpoint': endpoint}
            )
        return url

    @abstractmethod
    def decode(self, body: bytes) -> List[Quote]:
        """解码响应体，失败时抛出 DecodeError"""
        pass

    async def fetch_quotes(self) -> FetchResult:
        """
        获取并解码名言列表

        所有失败都转换为带失败类型的空结果，并把诊断信息写入输出流；
        本方法不抛出异常。

        Returns:
            FetchResult: 成功时按响应顺序返回名言（可能为空）
        """
        try:
            url = self.build_url(self.endpoint)
        except InvalidEndpointError as e:
            ds_logger.error(f"[{self.name}] {e}")
            self.failure_count += 1
            data_source_metrics.increment('fetch_failed')
            self._emit(INVALID_ADDRESS_MESSAGE)
            return FetchResult.failure(FetchErrorKind.INVALID_ENDPOINT, e.message)

        start_time = time.time()
        try:
            with LogContext("DataSource", "fetch_quotes", source=self.name):
                body = await self._request(url)
                quotes = self.decode(body)
        except NetworkError as e:
            return self._fail(FetchErrorKind.TRANSPORT_FAILURE, e)
        except DecodeError as e:
            return self._fail(FetchErrorKind.DECODE_FAILURE, e)
        finally:
            data_source_metrics.timing('fetch', time.time() - start_time)

        if len(quotes) == 0:
            # 空数组不是错误，不输出诊断
            ds_logger.info(f"[{self.name}] Endpoint returned no quotes")
            data_source_metrics.increment('fetch_empty')
            return FetchResult.success([])

        ds_logger.info(f"[{self.name}] Retrieved {len(quotes)} quotes")
        data_source_metrics.increment('fetch_success')
        return FetchResult.success(quotes)

    async def _request(self, url: URL) -> bytes:
        """发送一次GET请求，默认不检查状态码"""
        await self.initialize()
        self.request_count += 1
        ds_logger.debug(f"[{self.name}] GET {url}")

        try:
            async with self.session.get(url) as response:
                if self.config.check_status:
                    response.raise_for_status()
                elif response.status >= 400:
                    ds_logger.warning(f"[{self.name}] Endpoint answered HTTP {response.status}, decoding body anyway")
                return await response.read()
        except aiohttp.ClientResponseError as e:
            raise NetworkError(
                str(e),
                ErrorCodes.NETWORK_BAD_STATUS,
                context={'url': str(url), 'status': e.status}
            ) from e
        except aiohttp.ClientError as e:
            raise NetworkError(
                str(e) or e.__class__.__name__,
                ErrorCodes.NETWORK_CONNECTION_ERROR,
                context={'url': str(url)}
            ) from e
        except asyncio.TimeoutError as e:
            raise NetworkError(
                str(e) or "Request timed out",
                ErrorCodes.NETWORK_TIMEOUT,
                context={'url': str(url)}
            ) from e

    def _fail(self, kind: FetchErrorKind, error: Exception) -> FetchResult:
        """输出诊断信息并返回空结果"""
        message = getattr(error, 'message', None) or str(error)
        self.failure_count += 1
        data_source_metrics.increment('fetch_failed')

        # 失败已由 LogContext 以 ERROR 级别记录
        self._emit(FETCH_FAILED_MESSAGE)
        self._emit(DIAGNOSTIC_SEPARATOR)
        self._emit(message)
        return FetchResult.failure(kind, message)

    def _emit(self, message: str):
        """写入诊断行，未指定输出流时写到标准输出"""
        print(message, file=self.output)

    async def health_check(self) -> bool:
        """健康检查"""
        result = await self.fetch_quotes()
        if not result.ok:
            ds_logger.error(f"[{self.name}] Health check failed: {result.error.message}")
        return result.ok

    def get_source_info(self) -> Dict[str, Any]:
        """获取数据源信息"""
        return {
            'name': self.name,
            'endpoint': self.endpoint,
            'is_initialized': self.is_initialized,
            'check_status': self.config.check_status,
            'timeout': self.config.timeout,
            'request_count': self.request_count,
            'failure_count': self.failure_count,
        }
