"""
Data models for the quote sources.
Pydantic model for the wire record plus the tagged result returned by a fetch.
"""

from enum import Enum
from typing import Iterable, List, Optional, Union
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from utils.exceptions import DecodeError, ErrorCodes


class Quote(BaseModel):
    """名言记录"""
    # strict: 字段必须是JSON字符串，缺失任一字段整体解码失败
    model_config = ConfigDict(strict=True, frozen=True)

    quote: str = Field(..., description="名言内容")
    author: str = Field(..., description="说话人")


_quote_list_adapter = TypeAdapter(List[Quote])


def _describe_validation_error(error: ValidationError) -> str:
    """把校验错误压缩为单行描述"""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or str(error)


def decode_quotes(data: Union[bytes, str]) -> List[Quote]:
    """
    解码JSON数组为名言列表

    Args:
        data: 响应体（JSON数组）

    Returns:
        List[Quote]: 与响应顺序一致的名言列表

    Raises:
        DecodeError: JSON格式错误或结构不匹配（全有或全无）
    """
    try:
        return _quote_list_adapter.validate_json(data, strict=True)
    except ValidationError as e:
        raise DecodeError(
            _describe_validation_error(e),
            ErrorCodes.DATASOURCE_INVALID_RESPONSE,
            context={'error_count': e.error_count()}
        ) from e


def encode_quotes(quotes: Iterable[Quote]) -> bytes:
    """编码名言列表为JSON数组"""
    return _quote_list_adapter.dump_json(list(quotes))


class FetchErrorKind(str, Enum):
    """获取失败类型"""
    INVALID_ENDPOINT = "invalid_endpoint"
    TRANSPORT_FAILURE = "transport_failure"
    DECODE_FAILURE = "decode_failure"


@dataclass(frozen=True)
class FetchError:
    """获取失败信息"""
    kind: FetchErrorKind
    message: str


@dataclass(frozen=True)
class FetchResult:
    """获取结果：成功（可能为空）或带失败类型的空结果"""
    quotes: List[Quote] = field(default_factory=list)
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        return not self.quotes

    @classmethod
    def success(cls, quotes: List[Quote]) -> "FetchResult":
        return cls(quotes=list(quotes))

    @classmethod
    def failure(cls, kind: FetchErrorKind, message: str) -> "FetchResult":
        return cls(quotes=[], error=FetchError(kind=kind, message=message))
