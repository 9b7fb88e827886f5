"""
Keyword intent classifier: decide whether a message needs the web-search pipeline.

Chat keywords always win over search keywords; ambiguous text defaults to chat,
which runs the cheaper tool-less pipeline.
"""

from enum import Enum


class Intent(str, Enum):
    CHAT = "chat"
    SEARCH = "search"


CHAT_KEYWORDS: tuple[str, ...] = (
    # greetings
    "你好", "早上好", "下午好", "晚上好", "再见", "拜拜",
    # politeness
    "谢谢", "不客气", "抱歉", "对不起",
    # affect
    "好的", "可以", "行", "不错", "很好", "算了",
    # small talk
    "聊天", "怎么样", "感觉", "觉得", "喜欢", "讨厌",
    # what can you do
    "能干什么", "会什么", "能力", "功能",
)

SEARCH_KEYWORDS: tuple[str, ...] = (
    # time
    "时间", "今天", "明天", "昨天", "最新", "现在", "最近", "当前",
    # lookups
    "搜索", "查找", "查询", "什么是", "介绍", "资料", "信息",
    # real-time data
    "价格", "股票", "汇率", "天气", "新闻", "数据",
    # fact checking
    "发生了什么", "怎么回事", "原因", "结果",
    # products and companies
    "产品", "品牌", "公司", "发布", "上市",
    # how-to
    "学习", "教程", "方法", "技巧", "如何",
    # English
    "what", "how", "when", "where", "why", "search", "find", "latest", "news", "price", "weather",
)


def classify(text: str) -> Intent:
    """Return SEARCH only when no chat keyword and at least one search keyword occurs in text."""
    normalized = (text or "").lower()
    if any(keyword in normalized for keyword in CHAT_KEYWORDS):
        return Intent.CHAT
    if any(keyword in normalized for keyword in SEARCH_KEYWORDS):
        return Intent.SEARCH
    return Intent.CHAT
