"""
Credential guard: detect a backend that cannot be called and supply the canned reply.

Missing credentials are not an error. The stream still runs start → thinking →
content → end, with content from fallback_response().
"""

from chat_gateway.core import config

FALLBACK_TEMPLATE = (
    '您好！我收到了您的消息："{message}"。\n\n'
    "由于API密钥未配置，这是一个测试响应。"
    "请配置DEEPSEEK_API_KEY和TAVILY_API_KEY环境变量以启用完整功能。"
)


def is_usable_credential(value: str | None) -> bool:
    if not value or not value.strip():
        return False
    return config.CREDENTIAL_PLACEHOLDER_MARKER not in value


def credentials_configured(deepseek_key: str | None = None, tavily_key: str | None = None) -> bool:
    """Both the model key and the search key must be usable. Defaults come from config."""
    ds = config.DEEPSEEK_API_KEY if deepseek_key is None else deepseek_key
    tv = config.TAVILY_API_KEY if tavily_key is None else tavily_key
    return is_usable_credential(ds) and is_usable_credential(tv)


def fallback_response(message: str) -> str:
    # braces in message are literal text, not format fields
    return FALLBACK_TEMPLATE.replace("{message}", message)
